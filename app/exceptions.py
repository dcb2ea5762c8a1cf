# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
#
# The place service returns outcomes rather than raising; the places router
# turns failed outcomes into the exceptions below via `error_for_outcome`.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse

from app.config import settings
from core.models.outcome import OutcomeKind, PlaceOutcome


class CafePlacesException(Exception):
    """
    Base exception for the Cafe Places API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CAFE_PLACES_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        template: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        # Form the client should re-render ("new" or "edit"), if any
        self.template = template

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        if self.template:
            result["template"] = self.template
        return result


# =============================================================================
# Authentication Exceptions
# =============================================================================

class LoginRequiredError(CafePlacesException):
    """Raised when an anonymous caller hits a page that requires login."""

    def __init__(self):
        super().__init__(
            message="You need to sign in before continuing",
            code="LOGIN_REQUIRED",
            status_code=302,
            suggestion=f"Sign in at {settings.LOGIN_PATH}",
        )


# =============================================================================
# Place Exceptions
# =============================================================================

class PlaceNotFoundError(CafePlacesException):
    """Raised when a place ID doesn't exist."""

    def __init__(self, place_id: str):
        super().__init__(
            message=f"Place not found: {place_id}",
            code="PLACE_NOT_FOUND",
            status_code=404,
            suggestion="Check that the place_id is correct and the place hasn't been deleted",
            details={"place_id": place_id}
        )


class PlaceForbiddenError(CafePlacesException):
    """Raised when a user tries to change a place they didn't create."""

    def __init__(self, place_id: str):
        super().__init__(
            message=f"Place belongs to another user: {place_id}",
            code="PLACE_FORBIDDEN",
            status_code=403,
            suggestion="Only the user who created a place can edit or delete it",
            details={"place_id": place_id}
        )


class PlaceValidationError(CafePlacesException):
    """Raised when submitted place fields are invalid."""

    def __init__(self, errors: list[str], template: str | None = None):
        super().__init__(
            message="Place is invalid: " + "; ".join(errors),
            code="PLACE_INVALID",
            status_code=422,
            suggestion="Fill in both the name and the address",
            details={"errors": errors},
            template=template,
        )


class PlaceConflictError(CafePlacesException):
    """Raised when the user already has a place with this name and address."""

    def __init__(self, name: str, address: str, template: str | None = None):
        super().__init__(
            message=f"You already added {name} at {address}",
            code="PLACE_CONFLICT",
            status_code=409,
            suggestion="Use a different name or address, or edit the existing place",
            details={"name": name, "address": address},
            template=template,
        )


def error_for_outcome(
    outcome: PlaceOutcome,
    place_id: str | None = None,
    name: str = "",
    address: str = "",
    template: str | None = None,
) -> CafePlacesException:
    """
    Build the exception matching a failed place outcome.

    Args:
        outcome: A non-success outcome from PlaceService
        place_id: Requested place ID (for not found / forbidden messages)
        name, address: Submitted fields (for conflict messages)
        template: Form to re-render on validation or conflict failures

    Raises:
        ValueError: If the outcome is a success
    """
    if outcome.kind is OutcomeKind.UNAUTHENTICATED:
        return LoginRequiredError()
    if outcome.kind is OutcomeKind.NOT_FOUND:
        return PlaceNotFoundError(str(place_id))
    if outcome.kind is OutcomeKind.FORBIDDEN:
        return PlaceForbiddenError(str(place_id))
    if outcome.kind is OutcomeKind.VALIDATION_FAILED:
        return PlaceValidationError(outcome.errors, template=template)
    if outcome.kind is OutcomeKind.CONFLICT:
        return PlaceConflictError(name, address, template=template)
    raise ValueError(f"Outcome is not a failure: {outcome.kind.value}")


# =============================================================================
# Exception Handlers
# =============================================================================

async def cafe_places_exception_handler(
    request: Request,
    exc: CafePlacesException
) -> JSONResponse:
    """
    Convert CafePlacesException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    - template: Form to re-render (if any)
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def login_required_handler(
    request: Request,
    exc: LoginRequiredError
) -> RedirectResponse:
    """Send anonymous callers to the login page."""
    return RedirectResponse(settings.LOGIN_PATH, status_code=exc.status_code)


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request parsing errors.

    Converts validation errors to user-friendly messages.
    """
    errors = exc.errors() if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_errors(errors),
        }
    )


def jsonable_errors(errors: Any) -> Any:
    """Drop non-serializable context (e.g. exception objects) from pydantic errors."""
    if isinstance(errors, list):
        return [
            {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
            for error in errors
        ]
    return errors
