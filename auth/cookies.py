"""
Session cookie handling.

Login sets the token in an HTTP-only, secure, ``SameSite=None`` cookie
scoped to ``/`` with no max-age; the token's own expiry bounds the
session.  Logout and account deletion overwrite the same cookie with an
empty value and the same attributes.  There is no server-side revocation.
"""

from __future__ import annotations

from fastapi import Response

ACCESS_TOKEN_COOKIE = "access_token"

COOKIE_ATTRIBUTES = {
    "httponly": True,
    "secure": True,
    "samesite": "none",
    "path": "/",
}


def set_session_cookie(response: Response, token: str, name: str = ACCESS_TOKEN_COOKIE) -> None:
    response.set_cookie(name, token, **COOKIE_ATTRIBUTES)


def clear_session_cookie(response: Response, name: str = ACCESS_TOKEN_COOKIE) -> None:
    response.set_cookie(name, "", **COOKIE_ATTRIBUTES)
