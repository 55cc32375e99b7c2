"""
Session token issuance and verification.

Tokens are HS256 JWTs carrying ``{"sub": <user id>, "email": ...}`` plus
``iat``/``exp``.  The signing secret comes from ``Settings`` and is passed
in when the issuer is built; nothing here reads configuration globally.
"""

from __future__ import annotations

import time
from typing import Optional

import jwt as pyjwt

from auth.exceptions import ConfigurationError
from auth.models import SessionClaims

DEFAULT_TTL_SECONDS = 300


class TokenIssuer:
    """Signs session tokens and checks them for the transport guard."""

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        algorithm: str = "HS256",
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigurationError("Token signing secret is empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings) -> "TokenIssuer":
        return cls(
            settings.require_jwt_secret(),
            ttl_seconds=settings.jwt_expiry_seconds,
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, user_id: int, email: str, *, now: Optional[int] = None) -> str:
        """Create a signed token for ``user_id`` expiring ``ttl_seconds`` from now."""
        issued_at = int(time.time()) if now is None else now
        payload = {
            # PyJWT requires a string subject
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return pyjwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionClaims:
        """
        Decode and validate a session token.

        Raises:
            pyjwt.ExpiredSignatureError: Token has expired.
            pyjwt.InvalidSignatureError: Signature doesn't match the secret.
            pyjwt.DecodeError: Malformed token.
            pyjwt.MissingRequiredClaimError: ``sub`` or ``exp`` missing.
        """
        payload = pyjwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={"require": ["exp", "sub"]},
        )
        return SessionClaims(
            sub=int(payload["sub"]),
            email=payload.get("email", ""),
            exp=payload["exp"],
        )
