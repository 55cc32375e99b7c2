"""
FastAPI dependencies for authentication.

Provides the DB session, the user store, the ``AuthFlow`` and the
``get_current_claims`` guard used by every protected route.  The guard
reads the session cookie (or a Bearer header), verifies it and hands the
claims to the route as an ordinary parameter.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

import jwt as pyjwt
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.models import SessionClaims
from auth.service import AuthFlow
from auth.store import SqlAlchemyUserStore, UserStore
from database.session import get_db_session

logger = logging.getLogger(__name__)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return SqlAlchemyUserStore(session)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_cookie_name(request: Request) -> str:
    return request.app.state.settings.cookie_name


def get_auth_flow(
    store: UserStore = Depends(get_user_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthFlow:
    return AuthFlow(store, issuer)


def _extract_token(request: Request, cookie_name: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        return authorization[7:]
    return None


async def get_current_claims(
    request: Request,
    issuer: TokenIssuer = Depends(get_token_issuer),
    cookie_name: str = Depends(get_cookie_name),
) -> SessionClaims:
    """Verify the session token and return its claims, or answer 401."""
    token = _extract_token(request, cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        return issuer.verify(token)
    except (pyjwt.PyJWTError, ValueError) as exc:
        logger.debug("Rejected session token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
