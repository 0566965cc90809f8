from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException
from .dependencies import get_wishlist_store
from .models import MovieRecord, WishlistMembership, WishlistResponse
from .store import WishlistStore

# Plain def handlers: storage writes block, so FastAPI runs these in its threadpool
router = APIRouter(prefix="/wishlist", tags=["wishlist"])

@router.get("", response_model=WishlistResponse, response_model_exclude_unset=True)
def get_wishlist(store: WishlistStore = Depends(get_wishlist_store)):
    """All wishlisted movies in the order they were added"""
    return WishlistResponse(
        count=store.count(),
        movies=store.movies,
        persistence_degraded=store.persistence_degraded
    )

@router.get("/count")
def get_wishlist_count(store: WishlistStore = Depends(get_wishlist_store)):
    return {"count": store.count()}

@router.get("/{movie_id}", response_model=WishlistMembership)
def get_membership(movie_id: int, store: WishlistStore = Depends(get_wishlist_store)):
    return WishlistMembership(id=movie_id, in_wishlist=store.contains(movie_id))

@router.post("")
def add_to_wishlist(movie: MovieRecord, store: WishlistStore = Depends(get_wishlist_store)):
    """Add a movie; adding one that is already there changes nothing"""
    added = store.add(movie)
    return {"added": added, "count": store.count()}

@router.post("/{movie_id}/toggle", response_model=WishlistMembership)
def toggle_wishlist(
    movie_id: int,
    movie: Optional[MovieRecord] = Body(None),
    store: WishlistStore = Depends(get_wishlist_store)
):
    """Remove the movie if it is wishlisted, otherwise add the movie in the body"""
    if movie is not None and movie.id != movie_id:
        raise HTTPException(status_code=422, detail="Body id does not match path id")

    if not store.remove(movie_id):
        if movie is None:
            raise HTTPException(status_code=422, detail="Movie body required to add to wishlist")
        store.add(movie)
    return WishlistMembership(id=movie_id, in_wishlist=store.contains(movie_id))

@router.delete("/{movie_id}")
def remove_from_wishlist(movie_id: int, store: WishlistStore = Depends(get_wishlist_store)):
    removed = store.remove(movie_id)
    return {"removed": removed, "count": store.count()}

@router.delete("")
def clear_wishlist(store: WishlistStore = Depends(get_wishlist_store)):
    store.clear()
    return {"count": store.count()}
