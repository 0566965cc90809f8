"""In-memory wishlist mirrored to a key-value storage backend.

The store owns an ordered list of :class:`MovieRecord` with at most one entry
per movie id. Every mutation that changes the list writes the whole list,
JSON-encoded, under a single storage key; there are no partial updates.

Only the integer ``id`` of a record is checked; all other fields are stored
and written back exactly as they arrived.

Loading is forgiving: a missing key or a value that is not a JSON list of
objects with integer ids yields an empty wishlist instead of an error. Writes are
best effort: when the backend reports a failure the in-memory list keeps the
change, a warning is logged and :attr:`WishlistStore.persistence_degraded`
stays set until a later write succeeds.

Mutations hold a lock while they change the list and write it, so handlers
running in a threadpool see them one at a time.
"""

import json
import logging
import threading
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..core.storage import KeyValueStorage
from .models import MovieRecord

logger = logging.getLogger(__name__)

DEFAULT_KEY = "wishlist"

_movie_list = TypeAdapter(List[MovieRecord])


class WishlistStore:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY):
        self.storage = storage
        self.key = key
        self._movies: List[MovieRecord] = []
        self.persistence_degraded = False
        self._lock = threading.RLock()

    def initialize(self) -> List[MovieRecord]:
        """Load the persisted wishlist, falling back to an empty one"""
        with self._lock:
            self._movies = self._load()
        logger.info(f"Wishlist loaded with {len(self._movies)} movies")
        return self.movies

    def _load(self) -> List[MovieRecord]:
        raw = self.storage.get(self.key)
        if raw is None:
            return []

        try:
            movies = _movie_list.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding unreadable wishlist under '{self.key}': "
                f"{e.error_count()} error(s)"
            )
            return []

        seen = set()
        unique = []
        for movie in movies:
            if movie.id not in seen:
                seen.add(movie.id)
                unique.append(movie)
        return unique

    def _persist(self) -> bool:
        payload = json.dumps(
            [movie.model_dump(mode="json", exclude_unset=True) for movie in self._movies]
        )
        ok = self.storage.set(self.key, payload)
        if not ok:
            logger.warning(
                f"Could not persist wishlist under '{self.key}'; "
                "keeping changes in memory only"
            )
        self.persistence_degraded = not ok
        return ok

    def add(self, movie: Union[MovieRecord, Dict[str, Any]]) -> bool:
        """Append ``movie`` unless its id is already present.

        Returns True when the wishlist changed.
        """
        if not isinstance(movie, MovieRecord):
            movie = MovieRecord.model_validate(movie)

        with self._lock:
            if self.contains(movie.id):
                logger.debug(f"Movie {movie.id} already in wishlist")
                return False

            self._movies.append(movie)
            logger.info(f"Added movie {movie.id} to wishlist")
            self._persist()
            return True

    def remove(self, movie_id: int) -> bool:
        with self._lock:
            remaining = [movie for movie in self._movies if movie.id != movie_id]
            if len(remaining) == len(self._movies):
                logger.debug(f"Movie {movie_id} not in wishlist")
                return False

            self._movies = remaining
            logger.info(f"Removed movie {movie_id} from wishlist")
            self._persist()
            return True

    def clear(self) -> None:
        with self._lock:
            self._movies = []
            logger.info("Cleared wishlist")
            self._persist()

    def get(self, movie_id: int) -> Optional[MovieRecord]:
        for movie in self._movies:
            if movie.id == movie_id:
                return movie
        return None

    def contains(self, movie_id: int) -> bool:
        return self.get(movie_id) is not None

    def count(self) -> int:
        return len(self._movies)

    @property
    def movies(self) -> List[MovieRecord]:
        return list(self._movies)

    def __len__(self) -> int:
        return len(self._movies)

    def __contains__(self, movie_id: object) -> bool:
        return isinstance(movie_id, int) and self.contains(movie_id)

    def __iter__(self) -> Iterator[MovieRecord]:
        return iter(list(self._movies))
