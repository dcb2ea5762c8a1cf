# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for inspecting the current session.
#
# Note: Login/logout and token issuing are handled by the external auth
# provider. These routes only report who the current token belongs to.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Get the current authenticated user.

    Raises:
        401: If not authenticated
    """
    return user


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
