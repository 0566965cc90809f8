from enum import Enum
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

class TimeWindow(str, Enum):
    DAY = "day"
    WEEK = "week"

class MovieList(str, Enum):
    POPULAR = "popular"
    TOP_RATED = "top_rated"
    NOW_PLAYING = "now_playing"
    UPCOMING = "upcoming"

class MovieDisplay(BaseModel):
    """Preformatted values for the detail page"""
    rating: Optional[str]
    release_date: Optional[str]
    release_year: Optional[int]
    runtime: Optional[str]
    budget: Optional[str]
    revenue: Optional[str]
    popularity: Optional[int]
    poster_url: Optional[str]
    backdrop_url: Optional[str]

class HomeRows(BaseModel):
    hero: Optional[Dict[str, Any]]
    trending: List[Dict[str, Any]]
    popular: List[Dict[str, Any]]
    top_rated: List[Dict[str, Any]]
    now_playing: List[Dict[str, Any]]

class MoviePage(BaseModel):
    movie: Dict[str, Any]
    display: MovieDisplay
    similar: List[Dict[str, Any]]
