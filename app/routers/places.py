# =============================================================================
# app/routers/places.py - Place CRUD Endpoints
# =============================================================================
# Thin HTTP layer over PlaceService:
# - Resolves the (optional) current user
# - Calls the service
# - Renders the outcome: redirect, JSON body, or a structured error
#
# Listing and showing are public. Everything else sends anonymous callers
# to the login page with a 302.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from app.auth import AuthUser, get_current_user_optional
from app.dependencies import PlaceServiceDep
from app.exceptions import error_for_outcome
from core.models.outcome import OutcomeKind, PlaceOutcome
from core.models.place import Place, PlaceFields, PlaceList

router = APIRouter()

CurrentUser = Annotated[AuthUser | None, Depends(get_current_user_optional)]
PlaceId = Annotated[str, Path(description="Place ID")]


# =============================================================================
# Response Models
# =============================================================================

class PlaceFormResponse(BaseModel):
    """Data needed to render the new/edit form."""
    template: str = Field(..., examples=["edit"])
    place_id: str | None = Field(default=None, description="Set when editing an existing place")
    place: PlaceFields


class UniqueCheckResponse(BaseModel):
    """Response when the current user has no matching place."""
    unique: bool = True
    message: str = Field(default="No matching place found")


# =============================================================================
# Helpers
# =============================================================================

def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=302)


def _raise_unless(
    outcome: PlaceOutcome,
    expected: OutcomeKind,
    place_id: str | None = None,
    fields: PlaceFields | None = None,
    template: str | None = None,
) -> None:
    """Raise the matching CafePlacesException unless the outcome is expected."""
    if outcome.kind is expected:
        return
    raise error_for_outcome(
        outcome,
        place_id=place_id,
        name=fields.name if fields else "",
        address=fields.address if fields else "",
        template=template,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=PlaceList)
async def list_places(service: PlaceServiceDep):
    """
    List all places.

    Public: no login required.
    """
    outcome = service.list_places()
    return PlaceList(places=outcome.places, total=len(outcome.places))


@router.get("/new", response_model=PlaceFormResponse)
async def new_place(service: PlaceServiceDep, user: CurrentUser):
    """
    Show the empty creation form.

    Redirects to the login page if the caller is not logged in.
    """
    outcome = service.new_place(user)
    _raise_unless(outcome, OutcomeKind.OK)
    return PlaceFormResponse(template="new", place=PlaceFields())


@router.post("/check_unique", response_model=UniqueCheckResponse)
async def check_unique(
    service: PlaceServiceDep,
    user: CurrentUser,
    fields: PlaceFields | None = None,
):
    """
    Check whether the current user already added this name and address.

    Returns 200 if not, 409 if so. Places of other users don't count.
    """
    fields = fields or PlaceFields()
    outcome = service.check_unique(fields, user)
    _raise_unless(outcome, OutcomeKind.OK, fields=fields)
    return UniqueCheckResponse()


@router.post("")
async def create_place(
    service: PlaceServiceDep,
    user: CurrentUser,
    fields: PlaceFields | None = None,
):
    """
    Create a place owned by the current user.

    Redirects to the index on success. Returns 422 for blank fields and
    409 (with the "new" form to re-render) if the user already added it.
    """
    fields = fields or PlaceFields()
    outcome = service.create_place(fields, user)
    _raise_unless(outcome, OutcomeKind.CREATED, fields=fields, template="new")
    return _redirect("/")


@router.get("/{place_id}", response_model=Place, name="show_place")
async def show_place(place_id: PlaceId, service: PlaceServiceDep):
    """
    Get place details.

    Public: no login required.
    """
    outcome = service.show_place(place_id)
    _raise_unless(outcome, OutcomeKind.FOUND, place_id=place_id)
    return outcome.place


@router.get("/{place_id}/edit", response_model=PlaceFormResponse)
async def edit_place(place_id: PlaceId, service: PlaceServiceDep, user: CurrentUser):
    """
    Show the edit form for a place.

    User must own the place.
    """
    outcome = service.edit_place(place_id, user)
    _raise_unless(outcome, OutcomeKind.FOUND, place_id=place_id)
    return PlaceFormResponse(
        template="edit",
        place_id=outcome.place.id,
        place=outcome.place.fields(),
    )


@router.api_route("/{place_id}", methods=["PATCH", "PUT"])
async def update_place(
    place_id: PlaceId,
    request: Request,
    service: PlaceServiceDep,
    user: CurrentUser,
    fields: PlaceFields | None = None,
):
    """
    Update a place.

    User must own the place. Redirects to the place page on success;
    returns 409 (with the "edit" form to re-render) if the new name and
    address match another of the user's places.
    """
    fields = fields or PlaceFields()
    outcome = service.update_place(place_id, fields, user)
    _raise_unless(
        outcome,
        OutcomeKind.UPDATED,
        place_id=place_id,
        fields=fields,
        template="edit",
    )
    return _redirect(str(request.app.url_path_for("show_place", place_id=outcome.place.id)))


@router.delete("/{place_id}")
async def destroy_place(place_id: PlaceId, service: PlaceServiceDep, user: CurrentUser):
    """
    Delete a place.

    User must own the place. Redirects to the index on success.
    """
    outcome = service.destroy_place(place_id, user)
    _raise_unless(outcome, OutcomeKind.DELETED, place_id=place_id)
    return _redirect("/")
