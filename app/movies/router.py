from fastapi import APIRouter, Depends, HTTPException, Query
from .models import HomeRows, MovieList, MoviePage, TimeWindow
from .service import TMDBService, get_tmdb_service

router = APIRouter(prefix="/movies", tags=["movies"])

async def _list_movies(service: TMDBService, movie_list: MovieList, page: int):
    try:
        return await service.get_movie_list(movie_list, page)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/home", response_model=HomeRows)
async def home_rows(
    limit: int = Query(12, ge=1, le=20),
    service: TMDBService = Depends(get_tmdb_service)
):
    """Trending, popular, top rated and now playing rows plus a hero movie"""
    try:
        return await service.get_home_rows(limit)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/popular")
async def popular_movies(page: int = Query(1, ge=1), service: TMDBService = Depends(get_tmdb_service)):
    return await _list_movies(service, MovieList.POPULAR, page)

@router.get("/top-rated")
async def top_rated_movies(page: int = Query(1, ge=1), service: TMDBService = Depends(get_tmdb_service)):
    return await _list_movies(service, MovieList.TOP_RATED, page)

@router.get("/now-playing")
async def now_playing_movies(page: int = Query(1, ge=1), service: TMDBService = Depends(get_tmdb_service)):
    return await _list_movies(service, MovieList.NOW_PLAYING, page)

@router.get("/upcoming")
async def upcoming_movies(page: int = Query(1, ge=1), service: TMDBService = Depends(get_tmdb_service)):
    return await _list_movies(service, MovieList.UPCOMING, page)

@router.get("/trending")
async def trending_movies(
    time_window: TimeWindow = TimeWindow.WEEK,
    service: TMDBService = Depends(get_tmdb_service)
):
    try:
        return await service.get_trending(time_window)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/discover")
async def discover_movies(
    genre_ids: str = Query(..., description="Comma-separated list of genre IDs"),
    page: int = Query(1, ge=1),
    service: TMDBService = Depends(get_tmdb_service)
):
    """
    Get popular movies filtered by genres
    Uses AND logic between genres (movies must have all specified genres)
    """
    try:
        genre_list = [int(id) for id in genre_ids.split(",") if id.strip()]
    except ValueError:
        raise HTTPException(status_code=422, detail="genre_ids must be comma-separated integers")
    try:
        return await service.get_movies_by_genre(genre_list, page)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/search")
async def search_movies_route(
    query: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    service: TMDBService = Depends(get_tmdb_service)
):
    """Search for movies by title"""
    try:
        return await service.search_movies(query, page)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/search/suggestions")
async def search_suggestions(
    query: str = Query(""),
    limit: int = Query(5, ge=1, le=20),
    service: TMDBService = Depends(get_tmdb_service)
):
    """Top matches for a search-as-you-type box"""
    try:
        return {"results": await service.get_search_suggestions(query, limit)}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/{movie_id}")
async def movie_details(movie_id: int, service: TMDBService = Depends(get_tmdb_service)):
    return await service.get_movie_details(movie_id)

@router.get("/{movie_id}/page", response_model=MoviePage)
async def movie_page(
    movie_id: int,
    similar_limit: int = Query(8, ge=0, le=20),
    service: TMDBService = Depends(get_tmdb_service)
):
    """Details, formatted display values and similar movies in one call"""
    return await service.get_movie_page(movie_id, similar_limit)

@router.get("/{movie_id}/credits")
async def movie_credits(movie_id: int, service: TMDBService = Depends(get_tmdb_service)):
    return await service.get_movie_credits(movie_id)

@router.get("/{movie_id}/videos")
async def movie_videos(movie_id: int, service: TMDBService = Depends(get_tmdb_service)):
    return await service.get_movie_videos(movie_id)

@router.get("/{movie_id}/similar")
async def similar_movies(
    movie_id: int,
    page: int = Query(1, ge=1),
    service: TMDBService = Depends(get_tmdb_service)
):
    return await service.get_similar_movies(movie_id, page)
