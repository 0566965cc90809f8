import asyncio
import logging
from fastapi import HTTPException
import httpx
from typing import Any, Dict, List, Optional, Union

from ..core.config import Settings, settings as default_settings
from .models import HomeRows, MovieDisplay, MovieList, MoviePage, TimeWindow
from . import utils

logger = logging.getLogger(__name__)

MIN_SUGGESTION_QUERY_LENGTH = 2

class TMDBService:
    """Thin async client over the TMDB v3 REST API.

    Responses are returned as parsed JSON without reshaping. Non-200 answers
    become an HTTPException with TMDB's status code; transport errors become
    a 502.
    """

    def __init__(
        self,
        base_url: str = "https://api.themoviedb.org/3",
        token: str = "",
        api_key: str = "",
        language: str = "en-US",
        timeout: float = 10.0,
        image_base_url: str = "https://image.tmdb.org/t/p",
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.api_key = api_key
        self.language = language
        self.timeout = timeout
        self.image_base_url = image_base_url
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TMDBService":
        return cls(
            base_url=settings.TMDB_BASE_URL,
            token=settings.TMDB_TOKEN,
            api_key=settings.TMDB_API_KEY,
            language=settings.TMDB_LANGUAGE,
            timeout=settings.TMDB_TIMEOUT,
            image_base_url=settings.TMDB_IMAGE_BASE_URL
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None,
                   error_detail: str = "Failed to fetch data from TMDB") -> Dict:
        query: Dict[str, Any] = {"language": self.language}
        if self.api_key:
            query["api_key"] = self.api_key
        query.update(params or {})

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    f"{self.base_url}{path}",
                    headers=self._headers(),
                    params=query
                )
        except httpx.HTTPError as e:
            logger.error(f"TMDB request to {path} failed: {e}")
            raise HTTPException(status_code=502, detail=error_detail)

        if response.status_code != 200:
            logger.error(f"TMDB returned {response.status_code} for {path}")
            raise HTTPException(status_code=response.status_code,
                              detail=error_detail)

        return response.json()

    async def get_movie_list(self, movie_list: Union[MovieList, str], page: int = 1) -> Dict:
        """Fetch one of the curated lists: popular, top_rated, now_playing, upcoming"""
        movie_list = MovieList(movie_list)
        return await self._get(
            f"/movie/{movie_list.value}",
            {"page": page},
            error_detail=f"Failed to fetch {movie_list.value} movies from TMDB"
        )

    async def get_popular(self, page: int = 1) -> Dict:
        return await self.get_movie_list(MovieList.POPULAR, page)

    async def get_top_rated(self, page: int = 1) -> Dict:
        return await self.get_movie_list(MovieList.TOP_RATED, page)

    async def get_now_playing(self, page: int = 1) -> Dict:
        return await self.get_movie_list(MovieList.NOW_PLAYING, page)

    async def get_upcoming(self, page: int = 1) -> Dict:
        return await self.get_movie_list(MovieList.UPCOMING, page)

    async def get_trending(self, time_window: Union[TimeWindow, str] = TimeWindow.WEEK) -> Dict:
        """Trending movies for the last day or week"""
        try:
            window = TimeWindow(time_window)
        except ValueError:
            raise ValueError(f"time_window must be 'day' or 'week', got {time_window!r}")
        return await self._get(
            f"/trending/movie/{window.value}",
            error_detail="Failed to fetch trending movies from TMDB"
        )

    async def get_movies_by_genre(self, genre_ids: Union[int, List[int]], page: int = 1) -> Dict:
        """Popular movies having all of the given genres"""
        if isinstance(genre_ids, int):
            genre_ids = [genre_ids]

        # Comma-separated means AND for TMDB
        genres_param = ",".join(map(str, genre_ids))

        params = {
            "include_adult": "false",
            "include_video": "false",
            "page": page,
            "sort_by": "popularity.desc",
            "with_genres": genres_param
        }
        return await self._get("/discover/movie", params,
                               error_detail="Failed to fetch movies from TMDB")

    async def search_movies(self, query: str, page: int = 1) -> Dict:
        """Search for movies by title"""
        params = {
            "query": query,
            "include_adult": "false",
            "page": page
        }
        return await self._get("/search/movie", params,
                               error_detail="Failed to search movies from TMDB")

    async def get_search_suggestions(self, query: str, limit: int = 5) -> List[Dict]:
        """First few title matches for a search box; short queries yield nothing"""
        query = query.strip()
        if len(query) < MIN_SUGGESTION_QUERY_LENGTH:
            return []
        response = await self.search_movies(query)
        return response.get("results", [])[:limit]

    async def get_movie_details(self, movie_id: int) -> Dict:
        return await self._get(f"/movie/{movie_id}",
                               error_detail="Failed to fetch movie details from TMDB")

    async def get_movie_credits(self, movie_id: int) -> Dict:
        return await self._get(f"/movie/{movie_id}/credits",
                               error_detail="Failed to fetch movie credits from TMDB")

    async def get_movie_videos(self, movie_id: int) -> Dict:
        return await self._get(f"/movie/{movie_id}/videos",
                               error_detail="Failed to fetch movie videos from TMDB")

    async def get_similar_movies(self, movie_id: int, page: int = 1) -> Dict:
        return await self._get(f"/movie/{movie_id}/similar", {"page": page},
                               error_detail="Failed to fetch similar movies from TMDB")

    async def get_genres(self) -> List[Dict]:
        """Fetch the movie genre taxonomy"""
        response = await self._get("/genre/movie/list",
                                   error_detail="Failed to fetch genres from TMDB")
        return response["genres"]

    async def get_home_rows(self, limit: int = 12) -> HomeRows:
        """Everything the landing page shows, fetched in parallel"""
        trending, popular, top_rated, now_playing = await asyncio.gather(
            self.get_trending(),
            self.get_popular(),
            self.get_top_rated(),
            self.get_now_playing()
        )

        trending_results = trending.get("results", [])[:limit]
        popular_results = popular.get("results", [])[:limit]
        hero = (trending_results or popular_results or [None])[0]

        return HomeRows(
            hero=hero,
            trending=trending_results,
            popular=popular_results,
            top_rated=top_rated.get("results", [])[:limit],
            now_playing=now_playing.get("results", [])[:limit]
        )

    def build_display(self, movie: Dict) -> MovieDisplay:
        popularity = movie.get("popularity")
        return MovieDisplay(
            rating=utils.format_rating(movie.get("vote_average")),
            release_date=utils.format_date(movie.get("release_date")),
            release_year=utils.format_year(movie.get("release_date")),
            runtime=utils.format_runtime(movie.get("runtime")),
            budget=utils.format_currency(movie.get("budget")),
            revenue=utils.format_currency(movie.get("revenue")),
            popularity=round(popularity) if popularity is not None else None,
            poster_url=utils.image_url(movie.get("poster_path"), base_url=self.image_base_url),
            backdrop_url=utils.backdrop_url(movie.get("backdrop_path"), base_url=self.image_base_url)
        )

    async def get_movie_page(self, movie_id: int, similar_limit: int = 8) -> MoviePage:
        """Movie details with display values and a handful of similar titles"""
        details, similar = await asyncio.gather(
            self.get_movie_details(movie_id),
            self.get_similar_movies(movie_id)
        )
        return MoviePage(
            movie=details,
            display=self.build_display(details),
            similar=similar.get("results", [])[:similar_limit]
        )

def get_tmdb_service() -> TMDBService:
    return TMDBService.from_settings(default_settings)
