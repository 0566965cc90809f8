from fastapi import APIRouter, Depends, HTTPException, Query
from ..movies.service import TMDBService, get_tmdb_service
from .models import CategoryPage
from .service import get_category_page

router = APIRouter(prefix="/genres", tags=["genres"])

@router.get("/")
async def get_genres(service: TMDBService = Depends(get_tmdb_service)):
    """Fetch all available genres from TMDB"""
    try:
        genres = await service.get_genres()
        return {"genres": genres}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/{genre_id}/movies", response_model=CategoryPage)
async def get_genre_movies(
    genre_id: int,
    page: int = Query(1, ge=1),
    service: TMDBService = Depends(get_tmdb_service)
):
    """Popular movies of one genre, with the genre name for the page title"""
    try:
        return await get_category_page(service, genre_id, page)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
