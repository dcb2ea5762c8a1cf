# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The session token is an HS256 JWT, read from either:
# - the Authorization header (Bearer <token>), or
# - the session cookie (SESSION_COOKIE_NAME) for browser clients
#
# Usage:
#   from app.auth import get_current_user_optional, AuthUser
#
#   @router.get("/maybe-protected")
#   async def route(user: AuthUser | None = Depends(get_current_user_optional)):
#       ...
# =============================================================================

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor (never errors; cookie is the fallback)
security_optional = HTTPBearer(auto_error=False)


class InvalidTokenError(Exception):
    """Raised when a session token cannot be turned into a user."""


def decode_token(token: str) -> AuthUser:
    """
    Verify a session token and extract the user.

    Args:
        token: Encoded JWT

    Returns:
        AuthUser: The user named by the token's `sub` claim

    Raises:
        InvalidTokenError: If the signature, audience or expiry is wrong,
            or the `sub` claim is missing or not a UUID
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.JWT_AUDIENCE,
        )
    except ExpiredSignatureError:
        raise InvalidTokenError("Token has expired")
    except JWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise InvalidTokenError("Invalid token: malformed user ID")

    return AuthUser(id=user_uuid, email=payload.get("email"))


def _extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Prefer the Authorization header, fall back to the session cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> Optional[AuthUser]:
    """
    Optionally get the current user from the session token.

    Returns None if no token is provided, instead of raising an error.
    Invalid or expired tokens are treated as anonymous.

    Returns:
        AuthUser if valid token provided, None otherwise
    """
    token = _extract_token(request, credentials)
    if not token:
        return None

    try:
        user = decode_token(token)
    except InvalidTokenError as e:
        logger.warning(f"Ignoring session token: {e}")
        return None

    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user(
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> AuthUser:
    """
    Require an authenticated user.

    Raises:
        HTTPException: 401 if no valid token was supplied
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
