# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for the places table
# - place_store.py: Place Store interface plus in-memory and Supabase stores
# - utils.py: Shared utilities (error base class, UUID normalization)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.place_store import (
    DuplicatePlaceError,
    InMemoryPlaceStore,
    PlaceStore,
    SupabasePlaceStore,
)
from lib.utils import ApplicationError, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Place Store
    "DuplicatePlaceError",
    "InMemoryPlaceStore",
    "PlaceStore",
    "SupabasePlaceStore",
    # Utils
    "ApplicationError",
    "normalize_uuid",
]
