from pydantic import BaseModel, ConfigDict, StrictInt
from typing import List

class MovieRecord(BaseModel):
    """Catalog entry as returned by TMDB.

    Only the id is interpreted. Every other field (title, release_date,
    poster_path, vote_average, ...) is kept as received and written back
    unchanged.
    """
    model_config = ConfigDict(extra="allow")

    id: StrictInt

class WishlistResponse(BaseModel):
    count: int
    movies: List[MovieRecord]
    persistence_degraded: bool = False

class WishlistMembership(BaseModel):
    id: int
    in_wishlist: bool
