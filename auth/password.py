"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a fixed
work factor of 12.  bcrypt is CPU-bound, so the async helpers push the
work onto a thread and leave the event loop free for other requests.

bcrypt only accepts 72 bytes of input; longer passwords are rejected by
``password_problem`` before they get here.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import bcrypt

BCRYPT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72


def password_problem(password: str) -> Optional[str]:
    """Return why ``password`` is unacceptable, or None if it is fine."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
    return None


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 12)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
