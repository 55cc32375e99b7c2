"""Tests for session token issuance and verification."""

from __future__ import annotations

import time

import jwt as pyjwt
import pytest

from auth.exceptions import ConfigurationError
from auth.jwt import TokenIssuer
from config.settings import Settings

SECRET = "super-secret-jwt-token-for-testing-only"


class TestIssue:
    def test_claims_shape(self) -> None:
        token = TokenIssuer(SECRET).issue(7, "a@x.com")
        payload = pyjwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["sub"] == "7"
        assert payload["email"] == "a@x.com"

    def test_expires_five_minutes_after_issue(self) -> None:
        now = int(time.time())
        token = TokenIssuer(SECRET).issue(1, "a@x.com", now=now)
        payload = pyjwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["iat"] == now
        assert payload["exp"] - payload["iat"] == 300

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_empty_secret_is_fatal(self, secret: str) -> None:
        with pytest.raises(ConfigurationError):
            TokenIssuer(secret)

    def test_from_settings_without_secret(self) -> None:
        with pytest.raises(ConfigurationError):
            TokenIssuer.from_settings(Settings(jwt_secret=""))


class TestVerify:
    def test_valid_token(self) -> None:
        issuer = TokenIssuer(SECRET)
        claims = issuer.verify(issuer.issue(42, "b@x.com"))

        assert claims.sub == 42
        assert claims.email == "b@x.com"
        assert claims.exp > time.time()

    def test_expired_token_raises(self) -> None:
        issuer = TokenIssuer(SECRET)
        token = issuer.issue(1, "a@x.com", now=int(time.time()) - 600)
        with pytest.raises(pyjwt.ExpiredSignatureError):
            issuer.verify(token)

    def test_other_secret_raises(self) -> None:
        token = TokenIssuer("wrong-secret").issue(1, "a@x.com")
        with pytest.raises(pyjwt.InvalidSignatureError):
            TokenIssuer(SECRET).verify(token)

    def test_missing_sub_raises(self) -> None:
        token = pyjwt.encode(
            {"email": "a@x.com", "exp": int(time.time()) + 60},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(pyjwt.MissingRequiredClaimError):
            TokenIssuer(SECRET).verify(token)
