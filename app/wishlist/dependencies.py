from fastapi import Request

from ..core.config import Settings
from ..core.storage import build_storage
from .store import WishlistStore

def create_wishlist_store(settings: Settings) -> WishlistStore:
    """Build the process-wide wishlist and hydrate it from storage"""
    store = WishlistStore(build_storage(settings), key=settings.WISHLIST_STORAGE_KEY)
    store.initialize()
    return store

def get_wishlist_store(request: Request) -> WishlistStore:
    return request.app.state.wishlist
