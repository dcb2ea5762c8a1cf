# =============================================================================
# core/models/outcome.py - Place Operation Outcomes
# =============================================================================
# Every PlaceService operation returns a PlaceOutcome instead of raising.
# The HTTP layer decides how each outcome kind is rendered
# (status code, redirect, or form re-render).
#
# Example:
#   outcome = service.create_place(fields, current_user=user)
#   if outcome.kind is OutcomeKind.CONFLICT:
#       ...
# =============================================================================

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .place import Place


class OutcomeKind(str, Enum):
    """
    Tagged result of a place operation.

    Success kinds:
    - ok: Check passed / listing succeeded
    - found: Place located (show/edit)
    - created, updated, deleted: Mutation applied

    Failure kinds (all expected, recoverable):
    - unauthenticated: Caller must log in first
    - not_found: No place with that id
    - forbidden: Caller does not own the place
    - validation_failed: Submitted fields are invalid
    - conflict: Same owner already has a place with this name and address
    """
    OK = "ok"
    FOUND = "found"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"


SUCCESS_KINDS = frozenset({
    OutcomeKind.OK,
    OutcomeKind.FOUND,
    OutcomeKind.CREATED,
    OutcomeKind.UPDATED,
    OutcomeKind.DELETED,
})


class PlaceOutcome(BaseModel):
    """
    Result of a PlaceService operation.

    `place` is set for found/created/updated outcomes and for
    forbidden/conflict outcomes on an existing place. `places` is only
    populated by list_places(). `errors` carries validation messages.
    """

    kind: OutcomeKind

    place: Place | None = Field(
        default=None,
        description="The place the operation acted on, when there is one"
    )

    places: list[Place] = Field(
        default_factory=list,
        description="Listing result (list_places only)"
    )

    errors: list[str] = Field(
        default_factory=list,
        description="Validation messages for validation_failed outcomes"
    )

    @property
    def ok(self) -> bool:
        """True for every success kind."""
        return self.kind in SUCCESS_KINDS

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, kind: OutcomeKind, place: Place | None = None) -> PlaceOutcome:
        return cls(kind=kind, place=place)

    @classmethod
    def invalid(cls, errors: list[str], place: Place | None = None) -> PlaceOutcome:
        return cls(kind=OutcomeKind.VALIDATION_FAILED, errors=errors, place=place)
