# =============================================================================
# core/services/place_service.py - Place Business Logic
# =============================================================================
# Handles the place lifecycle: listing, showing, creating, editing, updating,
# destroying, and checking whether a place would be a duplicate.
# Separates HTTP concerns from persistence and ownership rules.
#
# Every operation returns a PlaceOutcome; expected failures (not logged in,
# unknown id, not the owner, invalid fields, duplicate) are never raised.
# Checks always run in this order:
#   authentication -> existence -> ownership -> validation -> uniqueness -> mutation
# Store failures are infrastructure faults and propagate unchanged.
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.models.outcome import OutcomeKind, PlaceOutcome
from core.models.place import Place, PlaceFields
from lib.place_store import DuplicatePlaceError, PlaceStore

if TYPE_CHECKING:
    from app.auth.models import AuthUser

logger = logging.getLogger(__name__)


class PlaceService:
    """
    Service for place management operations.

    The current user is passed explicitly to every operation; None means
    an anonymous caller.
    """

    def __init__(self, store: PlaceStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Shared Checks
    # -------------------------------------------------------------------------

    def _owned_place(
        self,
        place_id: str,
        current_user: AuthUser | None,
    ) -> tuple[Place | None, PlaceOutcome | None]:
        """
        Run the auth -> existence -> ownership checks for an existing place.

        Returns:
            (place, None) when the caller may act on the place,
            (None or place, outcome) when a check failed
        """
        if current_user is None:
            return None, PlaceOutcome.of(OutcomeKind.UNAUTHENTICATED)

        place = self.store.get_place(place_id)
        if place is None:
            return None, PlaceOutcome.of(OutcomeKind.NOT_FOUND)

        if not place.is_owned_by(current_user.id):
            logger.info(f"User {current_user.id} denied access to place {place_id}")
            return place, PlaceOutcome.of(OutcomeKind.FORBIDDEN, place)

        return place, None

    def _duplicate_of(
        self,
        fields: PlaceFields,
        current_user: AuthUser,
        exclude_id: str | None = None,
    ) -> Place | None:
        """Find another place of this user with the same name and address."""
        existing = self.store.find_place(current_user.id, fields.name, fields.address)
        if existing is not None and existing.id != exclude_id:
            return existing
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def list_places(self) -> PlaceOutcome:
        """List every place. No authentication required."""
        return PlaceOutcome(kind=OutcomeKind.OK, places=self.store.list_places())

    def new_place(self, current_user: AuthUser | None) -> PlaceOutcome:
        """Check that the caller may open the creation form."""
        if current_user is None:
            return PlaceOutcome.of(OutcomeKind.UNAUTHENTICATED)
        return PlaceOutcome.of(OutcomeKind.OK)

    def create_place(
        self,
        fields: PlaceFields,
        current_user: AuthUser | None,
    ) -> PlaceOutcome:
        """
        Create a place owned by the current user.

        Args:
            fields: Submitted name, description and address
            current_user: The caller, or None if anonymous

        Returns:
            created(place) on success; unauthenticated, validation_failed
            or conflict otherwise. Nothing is written unless created.
        """
        if current_user is None:
            return PlaceOutcome.of(OutcomeKind.UNAUTHENTICATED)

        errors = fields.validation_errors()
        if errors:
            return PlaceOutcome.invalid(errors)

        existing = self._duplicate_of(fields, current_user)
        if existing is not None:
            logger.info(f"User {current_user.id} already has place {existing.id}")
            return PlaceOutcome.of(OutcomeKind.CONFLICT, existing)

        try:
            place = self.store.create_place(current_user.id, fields)
        except DuplicatePlaceError:
            # Lost a race with a concurrent create of the same place
            logger.info(f"Duplicate place rejected by store for user {current_user.id}")
            return PlaceOutcome.of(OutcomeKind.CONFLICT)

        logger.info(f"Created place: {place.id} for user: {current_user.id}")
        return PlaceOutcome.of(OutcomeKind.CREATED, place)

    def show_place(self, place_id: str) -> PlaceOutcome:
        """Fetch a place by id. Anyone may view any place."""
        place = self.store.get_place(place_id)
        if place is None:
            return PlaceOutcome.of(OutcomeKind.NOT_FOUND)
        return PlaceOutcome.of(OutcomeKind.FOUND, place)

    def edit_place(self, place_id: str, current_user: AuthUser | None) -> PlaceOutcome:
        """Fetch a place for its owner's edit form."""
        place, failure = self._owned_place(place_id, current_user)
        if failure is not None:
            return failure
        return PlaceOutcome.of(OutcomeKind.FOUND, place)

    def update_place(
        self,
        place_id: str,
        fields: PlaceFields,
        current_user: AuthUser | None,
    ) -> PlaceOutcome:
        """
        Replace a place's fields.

        Ownership is checked before the fields are validated, so a non-owner
        gets forbidden even for invalid input. Updating a place to its own
        current values is not a conflict.

        Returns:
            updated(place) on success; the stored place is untouched on
            any other outcome
        """
        place, failure = self._owned_place(place_id, current_user)
        if failure is not None:
            return failure

        errors = fields.validation_errors()
        if errors:
            return PlaceOutcome.invalid(errors, place)

        if self._duplicate_of(fields, current_user, exclude_id=place.id) is not None:
            logger.info(f"Update of place {place.id} would duplicate another place")
            return PlaceOutcome.of(OutcomeKind.CONFLICT, place)

        try:
            updated = self.store.update_place(place.id, fields)
        except DuplicatePlaceError:
            return PlaceOutcome.of(OutcomeKind.CONFLICT, place)

        if updated is None:
            # Deleted between the lookup and the write
            return PlaceOutcome.of(OutcomeKind.NOT_FOUND)

        logger.info(f"Updated place: {updated.id}")
        return PlaceOutcome.of(OutcomeKind.UPDATED, updated)

    def destroy_place(self, place_id: str, current_user: AuthUser | None) -> PlaceOutcome:
        """Delete a place. Only its owner may do this."""
        place, failure = self._owned_place(place_id, current_user)
        if failure is not None:
            return failure

        if not self.store.delete_place(place.id):
            return PlaceOutcome.of(OutcomeKind.NOT_FOUND)

        logger.info(f"Deleted place: {place.id}")
        return PlaceOutcome.of(OutcomeKind.DELETED, place)

    def check_unique(
        self,
        fields: PlaceFields,
        current_user: AuthUser | None,
    ) -> PlaceOutcome:
        """
        Report whether the current user already has this name and address.

        Pure check; never writes. Other users' places are not considered.
        """
        if current_user is None:
            return PlaceOutcome.of(OutcomeKind.UNAUTHENTICATED)

        existing = self._duplicate_of(fields, current_user)
        if existing is not None:
            return PlaceOutcome.of(OutcomeKind.CONFLICT, existing)
        return PlaceOutcome.of(OutcomeKind.OK)
