# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests replace `get_place_store` through app.dependency_overrides to get
# a fresh store per test.
# =============================================================================

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.place_service import PlaceService
from lib.place_store import InMemoryPlaceStore, PlaceStore, SupabasePlaceStore

logger = logging.getLogger(__name__)


@lru_cache
def get_place_store() -> PlaceStore:
    """
    Get the configured Place Store.

    Cached so every request shares one store (and, for the memory
    backend, one set of places).
    """
    if settings.PLACE_STORE_BACKEND == "supabase":
        logger.info("Using Supabase place store")
        return SupabasePlaceStore()
    logger.info("Using in-memory place store")
    return InMemoryPlaceStore()


def get_place_service(
    store: Annotated[PlaceStore, Depends(get_place_store)],
) -> PlaceService:
    """Build a PlaceService over the configured store."""
    return PlaceService(store)


# Type aliases for dependency injection
PlaceStoreDep = Annotated[PlaceStore, Depends(get_place_store)]
PlaceServiceDep = Annotated[PlaceService, Depends(get_place_service)]
