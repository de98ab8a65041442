# =============================================================================
# tests/test_auth.py - Token Verification Tests
# =============================================================================
# Run with: pytest tests/test_auth.py -v
# =============================================================================

import base64
import hashlib
import hmac
import json
import time
from unittest.mock import patch
from uuid import uuid4

import pytest
from jose import jwt

from app.auth import dependencies
from app.auth.dependencies import InvalidTokenError, decode_access_token
from app.config import settings


def make_token(claims: dict, secret: str | None = None) -> str:
    payload = {"aud": "authenticated", "exp": int(time.time()) + 3600, **claims}
    key = settings.SUPABASE_JWT_SECRET if secret is None else secret
    return jwt.encode(payload, key, algorithm="HS256")


def hand_signed_token(header: dict, claims: dict, secret: str) -> str:
    """HMAC-signed token with an arbitrary header (jose always writes alg=HS256)."""
    def b64(data: bytes) -> str:
        return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

    payload = {"aud": "authenticated", "exp": int(time.time()) + 3600, **claims}
    signing_input = f"{b64(json.dumps(header).encode())}.{b64(json.dumps(payload).encode())}"
    signature = hmac.new(secret.encode(), signing_input.encode(), hashlib.sha256).digest()
    return f"{signing_input}.{b64(signature)}"


class TestDecodeAccessToken:
    """Tests for HS256 verification of Supabase access tokens."""

    def test_valid_token(self):
        # Arrange
        user_id = uuid4()
        token = make_token({"sub": str(user_id), "email": "alice@example.com"})

        # Act
        user = decode_access_token(token)

        # Assert
        assert user.id == user_id
        assert user.email == "alice@example.com"

    def test_expired_token(self):
        token = make_token({"sub": str(uuid4()), "exp": int(time.time()) - 10})

        with pytest.raises(InvalidTokenError, match="expired"):
            decode_access_token(token)

    def test_wrong_secret(self):
        token = make_token({"sub": str(uuid4())}, secret="another-secret")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_wrong_audience(self):
        token = make_token({"sub": str(uuid4()), "aud": "anon"})

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_missing_subject(self):
        with pytest.raises(InvalidTokenError, match="missing user ID"):
            decode_access_token(make_token({}))

    def test_malformed_subject(self):
        with pytest.raises(InvalidTokenError, match="malformed"):
            decode_access_token(make_token({"sub": "not-a-uuid"}))

    def test_empty_token(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("")

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.jwt")


class TestSigningKeySelection:
    """The header's alg picks the scheme; no scheme falls back to another."""

    def test_hs256_rejected_without_configured_secret(self):
        # Arrange: token signed with the empty key
        token = make_token({"sub": str(uuid4())}, secret="")

        # Act / Assert
        with patch.object(settings, "SUPABASE_JWT_SECRET", ""):
            with pytest.raises(InvalidTokenError):
                decode_access_token(token)

    def test_unknown_kid_does_not_fall_back_to_hs256(self):
        # Arrange: ES256 header, but signed with the shared secret
        token = hand_signed_token(
            {"alg": "ES256", "kid": "unknown-kid", "typ": "JWT"},
            {"sub": str(uuid4())},
            settings.SUPABASE_JWT_SECRET,
        )

        # Act / Assert
        with patch.object(dependencies, "_fetch_jwks", return_value={"keys": []}):
            with pytest.raises(InvalidTokenError):
                decode_access_token(token)

    def test_unsupported_algorithm(self):
        token = hand_signed_token(
            {"alg": "HS512", "typ": "JWT"},
            {"sub": str(uuid4())},
            settings.SUPABASE_JWT_SECRET,
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_missing_algorithm(self):
        token = hand_signed_token({"typ": "JWT"}, {"sub": str(uuid4())}, settings.SUPABASE_JWT_SECRET)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
