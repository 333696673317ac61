"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from lostpet.config import get_config
from lostpet.data.store import LocalStore
from lostpet.tracker import LostPetTracker


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize shared resources on startup.

    Loads the key-value store and builds the LostPetTracker that every
    request reads and mutates.
    """
    config = get_config()

    app.state.config = config
    app.state.store = LocalStore(config.store_path)
    app.state.tracker = LostPetTracker(app.state.store, config)

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Lost Pet Finder",
        description="Match lost pets with sightings and raise nearby alerts",
        version="0.1.0",
        lifespan=lifespan,
    )

    from lostpet.api.routes import router

    app.include_router(router)

    return app
