from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(Path(ROOT_DIR) / '.env')

class Settings(BaseSettings):
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p"
    TMDB_TOKEN: str = ""
    TMDB_API_KEY: str = ""
    TMDB_LANGUAGE: str = "en-US"
    TMDB_TIMEOUT: float = 10.0

    WISHLIST_BACKEND: str = "file"
    WISHLIST_STORAGE_PATH: str = "local_storage.json"
    WISHLIST_STORAGE_KEY: str = "wishlist"

    FIREBASE_CREDS_PATH: str = ""
    FIRESTORE_COLLECTION: str = "local_storage"

    LOG_LEVEL: str = "INFO"

    @property
    def WISHLIST_STORAGE_PATH_ABSOLUTE(self) -> Path:
        """Returns absolute path to the wishlist storage file"""
        return ROOT_DIR / self.WISHLIST_STORAGE_PATH

    @property
    def FIREBASE_CREDS_PATH_ABSOLUTE(self) -> Path:
        """Returns absolute path to Firebase credentials file"""
        return ROOT_DIR / self.FIREBASE_CREDS_PATH

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
