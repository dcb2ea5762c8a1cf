# =============================================================================
# tests/test_auth.py - Session Token Tests
# =============================================================================
# Tests for resolving the current user from a session token:
# - decode_token with valid, expired, forged and malformed tokens
# - Header vs cookie credentials
# - The /api/v1/auth endpoints
# =============================================================================

from uuid import uuid4

import pytest

from app.auth import InvalidTokenError, decode_token
from app.config import settings
from tests.helpers import auth_headers, make_token


# =============================================================================
# decode_token
# =============================================================================

class TestDecodeToken:
    """Tests for decode_token."""

    def test_valid_token(self):
        user_id = uuid4()

        user = decode_token(make_token(user_id, email="alice@example.com"))

        assert user.id == user_id
        assert user.email == "alice@example.com"

    def test_email_is_optional(self):
        assert decode_token(make_token(uuid4())).email is None

    def test_expired_token(self):
        with pytest.raises(InvalidTokenError, match="expired"):
            decode_token(make_token(uuid4(), expires_in=-60))

    def test_wrong_secret(self):
        token = make_token(uuid4(), secret="some-other-secret-value")
        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_wrong_audience(self):
        with pytest.raises(InvalidTokenError):
            decode_token(make_token(uuid4(), audience="anon"))

    def test_malformed_user_id(self):
        with pytest.raises(InvalidTokenError, match="malformed"):
            decode_token(make_token("not-a-uuid"))

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            decode_token("not.a.jwt")


# =============================================================================
# Credentials on requests
# =============================================================================

class TestRequestCredentials:
    """Tests for header and cookie credentials."""

    def test_me_with_bearer_header(self, client, alice):
        response = client.get("/api/v1/auth/me", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json()["id"] == str(alice.id)

    def test_me_with_session_cookie(self, client, alice):
        client.cookies.set(settings.SESSION_COOKIE_NAME, make_token(alice.id))

        response = client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == str(alice.id)

    def test_header_wins_over_cookie(self, client, alice, bob):
        client.cookies.set(settings.SESSION_COOKIE_NAME, make_token(bob.id))

        response = client.get("/api/v1/auth/verify", headers=auth_headers(alice))

        assert response.json()["user_id"] == str(alice.id)

    def test_me_without_token(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_expired_token_is_anonymous(self, client):
        headers = {"Authorization": f"Bearer {make_token(uuid4(), expires_in=-60)}"}
        assert client.get("/api/v1/auth/verify", headers=headers).status_code == 401

    def test_verify(self, client, alice):
        response = client.get("/api/v1/auth/verify", headers=auth_headers(alice))

        assert response.json() == {
            "valid": True,
            "user_id": str(alice.id),
            "email": "alice@example.com",
        }
