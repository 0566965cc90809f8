"""Key-value persistence adapters.

The wishlist only needs the browser local-storage contract: ``get`` returns
the string stored under a key (or ``None``) and ``set`` overwrites it,
reporting success as a bool instead of raising. Three backends implement it:
an in-memory dict, a JSON file on disk, and a Firestore collection.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from .config import Settings

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> bool:
        ...


class MemoryStorage:
    """Dict-backed storage, used by tests and the ``memory`` backend"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True


class FileStorage:
    """A JSON object of key -> string kept in a single file.

    Every ``set`` rewrites the file through a temporary sibling and
    ``os.replace``, so readers never observe a half-written value.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> bool:
        data = self._read_all()
        data[key] = value

        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
            return True
        except OSError as e:
            logger.warning(f"Failed to write storage file {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            return False


class FirestoreStorage:
    """One Firestore document per key, the string kept in its ``value`` field"""

    def __init__(self, collection: str = "local_storage", db=None):
        self.collection = collection
        self._db = db

    @property
    def db(self):
        if self._db is None:
            from .firebase import get_db
            self._db = get_db()
        return self._db

    def get(self, key: str) -> Optional[str]:
        try:
            doc = self.db.collection(self.collection).document(key).get()
            if not doc.exists:
                return None
            value = doc.to_dict().get("value")
        except Exception as e:
            logger.warning(f"Failed to read '{key}' from Firestore: {e}")
            return None
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        try:
            self.db.collection(self.collection).document(key).set({"value": value})
            return True
        except Exception as e:
            logger.warning(f"Failed to write '{key}' to Firestore: {e}")
            return False


def build_storage(settings: Settings) -> KeyValueStorage:
    """Pick the storage backend named by WISHLIST_BACKEND"""
    backend = settings.WISHLIST_BACKEND.lower()
    if backend == "file":
        return FileStorage(settings.WISHLIST_STORAGE_PATH_ABSOLUTE)
    if backend == "memory":
        return MemoryStorage()
    if backend == "firestore":
        return FirestoreStorage(collection=settings.FIRESTORE_COLLECTION)
    raise ValueError(f"Unknown wishlist backend: {settings.WISHLIST_BACKEND}")
