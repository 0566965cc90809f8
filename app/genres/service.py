import asyncio
from typing import Dict, List, Optional

from ..movies.service import TMDBService

def find_genre(genres: List[Dict], genre_id: int) -> Optional[Dict]:
    """Look up a genre by id in the TMDB taxonomy"""
    return next((g for g in genres if g.get("id") == genre_id), None)

async def get_category_page(service: TMDBService, genre_id: int, page: int = 1) -> Dict:
    """Movies of one genre together with the genre itself"""
    movies, genres = await asyncio.gather(
        service.get_movies_by_genre(genre_id, page),
        service.get_genres()
    )

    return {
        "genre": find_genre(genres, genre_id),
        "page": movies.get("page", page),
        "total_pages": movies.get("total_pages", 0),
        "total_results": movies.get("total_results", 0),
        "results": movies.get("results", [])
    }
