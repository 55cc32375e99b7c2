"""
User record store.

``UserStore`` is the contract the auth flow depends on;
``SqlAlchemyUserStore`` implements it on an ``AsyncSession``.  Email
uniqueness is enforced by the database, and a violation is reported as
``UniqueConstraintViolation`` when the write is flushed.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.exceptions import StoreError, UniqueConstraintViolation
from database.models import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    async def get_by_email(self, email: str) -> Optional[User]: ...

    async def get_by_id(self, user_id: int) -> Optional[User]: ...

    async def list_all(self) -> List[User]: ...

    def create(self, **fields: Any) -> User: ...

    async def save(self, user: User) -> User: ...

    async def delete(self, user: User) -> None: ...


class SqlAlchemyUserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self._session.execute(select(User).where(User.email == email))
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        try:
            return await self._session.get(User, user_id)
        except SQLAlchemyError as exc:
            raise StoreError() from exc

    async def list_all(self) -> List[User]:
        try:
            result = await self._session.execute(select(User).order_by(User.id))
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        return list(result.scalars().all())

    def create(self, **fields: Any) -> User:
        """Build an unsaved ``User``; nothing is written until ``save``."""
        return User(**fields)

    async def save(self, user: User) -> User:
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.debug("Integrity error on users write: %s", exc.orig)
            raise UniqueConstraintViolation(field="email") from exc
        except SQLAlchemyError as exc:
            raise StoreError() from exc
        await self._session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        try:
            await self._session.delete(user)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StoreError() from exc
