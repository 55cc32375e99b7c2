"""
Shared fixtures: an in-memory user store and an HTTP client bound to the app.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-for-session-tokens")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from auth.exceptions import UniqueConstraintViolation
from auth.jwt import TokenIssuer
from auth.service import AuthFlow
from database.models import User

SECRET = "test-secret-for-session-tokens"


class InMemoryUserStore:
    """Dict-backed ``UserStore`` that enforces email uniqueness on save."""

    def __init__(self) -> None:
        self.users: Dict[int, User] = {}
        self.deleted: List[int] = []
        self.saves = 0
        self._next_id = 1

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    async def list_all(self) -> List[User]:
        return [self.users[key] for key in sorted(self.users)]

    def create(self, **fields) -> User:
        return User(**fields)

    async def save(self, user: User) -> User:
        for other in self.users.values():
            if other.email == user.email and other is not user:
                raise UniqueConstraintViolation(field="email")
        now = datetime.now(timezone.utc)
        if user.id is None:
            user.id = self._next_id
            self._next_id += 1
            user.created_at = now
        user.updated_at = now
        self.users[user.id] = user
        self.saves += 1
        return user

    async def delete(self, user: User) -> None:
        del self.users[user.id]
        self.deleted.append(user.id)


@pytest.fixture()
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def issuer() -> TokenIssuer:
    return TokenIssuer(SECRET)


@pytest.fixture()
def flow(store, issuer) -> AuthFlow:
    return AuthFlow(store, issuer)


@pytest.fixture()
def app(store):
    from auth.dependencies import get_user_store
    from config.settings import Settings
    from main import create_app

    application = create_app(Settings(jwt_secret=SECRET, create_tables=False))
    application.dependency_overrides[get_user_store] = lambda: store
    return application


@pytest_asyncio.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="https://testserver") as c:
        yield c
