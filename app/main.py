import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings as default_settings
from .core.logging_config import configure_logging
from .genres.router import router as genres_router
from .movies.router import router as movies_router
from .wishlist.dependencies import create_wishlist_store
from .wishlist.router import router as wishlist_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        logger.info(f"Starting with '{settings.WISHLIST_BACKEND}' wishlist storage")
        app.state.wishlist = create_wishlist_store(settings)
        yield

    app = FastAPI(title="Movie Discovery API", lifespan=lifespan)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Movie Discovery API"}

    app.include_router(movies_router)
    app.include_router(genres_router)
    app.include_router(wishlist_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
