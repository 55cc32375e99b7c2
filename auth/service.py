"""
Authentication flow — sign-up, login, current-user lookup, profile
update and account deletion.

Each method is one request's worth of work against a ``UserStore``.
Records are never cached between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from auth.exceptions import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    UniqueConstraintViolation,
    ValidationError,
)
from auth.jwt import TokenIssuer
from auth.models import MessageResponse, SessionClaims, UserProfile, UserResponse
from auth.password import hash_password_async, password_problem, verify_password_async
from auth.store import UserStore

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "password", "image_id", "introduction")

_dummy_hash: Optional[str] = None


async def _dummy_password_hash() -> str:
    """A real bcrypt(12) hash to check against when the email is unknown."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = await hash_password_async("unused-dummy-password")
    return _dummy_hash


def _validate_password(password: str) -> None:
    problem = password_problem(password)
    if problem:
        raise ValidationError(problem)


class AuthFlow:
    def __init__(self, store: UserStore, issuer: TokenIssuer) -> None:
        self.store = store
        self.issuer = issuer

    async def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        introduction: Optional[str] = None,
        image_id: Optional[str] = None,
    ) -> UserResponse:
        """Register a new user. Raises ``DuplicateEmail`` if the email is taken."""
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        _validate_password(password)

        hashed = await hash_password_async(password)
        user = self.store.create(
            name=name,
            email=email,
            hashed_password=hashed,
            image_id=image_id,
            introduction=introduction,
        )
        try:
            user = await self.store.save(user)
        except UniqueConstraintViolation as exc:
            raise DuplicateEmail() from exc

        logger.info("Registered user %s", user.id)
        return UserResponse.model_validate(user)

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed session token."""
        user = await self.store.get_by_email(email)
        if user is None:
            # same bcrypt cost as a wrong password
            await verify_password_async(password, await _dummy_password_hash())
            logger.info("Rejected login attempt")
            raise InvalidCredentials()
        if not await verify_password_async(password, user.hashed_password):
            logger.info("Rejected login attempt")
            raise InvalidCredentials()

        token = self.issuer.issue(user.id, user.email)
        logger.info("Login: user %s", user.id)
        return token

    async def get_principal(self, claims: SessionClaims) -> UserProfile:
        user = await self.store.get_by_id(claims.sub)
        if user is None:
            raise NotFound("User not found")
        return UserProfile.model_validate(user)

    async def update_profile(self, user_id: int, changes: Dict[str, Any]) -> UserResponse:
        """
        Overwrite only the fields present in ``changes``.

        A new password is re-hashed before it reaches the store, and an
        email that belongs to another account raises ``DuplicateEmail``.
        """
        user = await self.store.get_by_id(user_id)
        if user is None:
            raise NotFound("User is not registered")

        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unsupported fields: {sorted(unknown)}")
        if "password" in changes:
            _validate_password(changes["password"])

        for field, value in changes.items():
            if field == "password":
                user.hashed_password = await hash_password_async(value)
            else:
                setattr(user, field, value)

        try:
            user = await self.store.save(user)
        except UniqueConstraintViolation as exc:
            raise DuplicateEmail() from exc

        logger.info("Updated user %s (fields: %s)", user.id, ", ".join(sorted(changes)))
        return UserResponse.model_validate(user)

    async def delete_account(self, user_id: int) -> MessageResponse:
        user = await self.store.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")

        await self.store.delete(user)
        logger.info("Deleted user %s", user_id)
        return MessageResponse(message="Account deleted")
