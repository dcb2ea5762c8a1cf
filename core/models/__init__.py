# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - place.py: Place, PlaceFields and listing schemas
# - outcome.py: Tagged results returned by the place service
#
# These models define the "contract" between API and clients.
# =============================================================================

from .place import (
    Place,
    PlaceFields,
    PlaceList,
)
from .outcome import (
    OutcomeKind,
    PlaceOutcome,
    SUCCESS_KINDS,
)

__all__ = [
    # Place
    "Place",
    "PlaceFields",
    "PlaceList",
    # Outcome
    "OutcomeKind",
    "PlaceOutcome",
    "SUCCESS_KINDS",
]
