# =============================================================================
# tests/helpers.py - Shared Test Helpers
# =============================================================================
# Session token helpers used by fixtures and HTTP tests.
# =============================================================================

import time

from jose import jwt

from app.auth.models import AuthUser
from app.config import settings


def make_token(user_id, email=None, expires_in=3600, secret=None, audience=None):
    """Encode a session token the way the auth provider would."""
    now = int(time.time())
    payload = {
        "sub": str(user_id),
        "aud": audience or settings.JWT_AUDIENCE,
        "iat": now,
        "exp": now + expires_in,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm="HS256")


def auth_headers(user: AuthUser) -> dict:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {make_token(user.id, user.email)}"}
