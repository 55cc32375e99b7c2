"""
Auth API routes — signup, login, logout, and the current user's profile.

Route prefix: /auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from auth.cookies import clear_session_cookie, set_session_cookie
from auth.dependencies import get_auth_flow, get_cookie_name, get_current_claims
from auth.models import (
    LoginRequest,
    MessageResponse,
    SessionClaims,
    SignUpRequest,
    UpdateMeRequest,
    UserProfile,
    UserResponse,
)
from auth.service import AuthFlow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignUpRequest,
    flow: AuthFlow = Depends(get_auth_flow),
) -> UserResponse:
    """Register a new user."""
    return await flow.sign_up(
        name=req.name,
        email=req.email,
        password=req.password,
        confirm_password=req.confirm_password,
        introduction=req.introduction,
        image_id=req.image_id,
    )


@router.post("/login", response_model=MessageResponse)
async def login(
    req: LoginRequest,
    response: Response,
    flow: AuthFlow = Depends(get_auth_flow),
    cookie_name: str = Depends(get_cookie_name),
) -> MessageResponse:
    """Login with email + password; the token travels in a cookie."""
    token = await flow.login(req.email, req.password)
    set_session_cookie(response, token, cookie_name)
    return MessageResponse(message="Logged in")


@router.delete("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    cookie_name: str = Depends(get_cookie_name),
) -> MessageResponse:
    clear_session_cookie(response, cookie_name)
    logger.debug("Cleared session cookie on logout")
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserProfile)
async def get_me(
    claims: SessionClaims = Depends(get_current_claims),
    flow: AuthFlow = Depends(get_auth_flow),
) -> UserProfile:
    return await flow.get_principal(claims)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    req: UpdateMeRequest,
    claims: SessionClaims = Depends(get_current_claims),
    flow: AuthFlow = Depends(get_auth_flow),
) -> UserResponse:
    return await flow.update_profile(claims.sub, req.changes())


@router.delete("/me", response_model=MessageResponse)
async def delete_me(
    request: Request,
    response: Response,
    claims: SessionClaims = Depends(get_current_claims),
    flow: AuthFlow = Depends(get_auth_flow),
    cookie_name: str = Depends(get_cookie_name),
) -> MessageResponse:
    """
    Delete the account. The cookie is cleared whatever the outcome; on
    failure the error handler clears it on the error response.
    """
    clear_session_cookie(response, cookie_name)
    request.state.clear_session_cookie = cookie_name
    return await flow.delete_account(claims.sub)
