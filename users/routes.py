"""
User profile routes — list users and fetch a single profile.

Route prefix: /users
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from auth.dependencies import get_user_store
from auth.exceptions import NotFound
from auth.models import UserProfile
from auth.store import UserStore

router = APIRouter(tags=["users"])


@router.get("", response_model=List[UserProfile])
async def list_users(store: UserStore = Depends(get_user_store)) -> List[UserProfile]:
    users = await store.list_all()
    return [UserProfile.model_validate(user) for user in users]


@router.get("/{user_id}/profile", response_model=UserProfile)
async def get_profile(
    user_id: int,
    store: UserStore = Depends(get_user_store),
) -> UserProfile:
    user = await store.get_by_id(user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return UserProfile.model_validate(user)
