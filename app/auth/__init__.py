# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Resolves the current user from a JWT session token
# (Authorization header or session cookie).
#
# Usage:
#   from app.auth import get_current_user_optional, AuthUser
#
#   @router.get("/places/new")
#   async def new_place(user: AuthUser | None = Depends(get_current_user_optional)):
#       ...
# =============================================================================

from app.auth.dependencies import (
    InvalidTokenError,
    decode_token,
    get_current_user,
    get_current_user_optional,
)
from app.auth.models import AuthUser

__all__ = [
    "InvalidTokenError",
    "decode_token",
    "get_current_user",
    "get_current_user_optional",
    "AuthUser",
]
