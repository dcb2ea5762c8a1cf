# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .place_service import PlaceService

__all__ = [
    "PlaceService",
]
