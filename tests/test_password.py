"""
Tests for bcrypt password hashing.
"""

import pytest

from auth.password import (
    BCRYPT_ROUNDS,
    hash_password,
    hash_password_async,
    password_problem,
    verify_password,
    verify_password_async,
)


class TestHashPassword:
    def test_digest_is_not_the_plaintext(self):
        digest = hash_password("secret1")
        assert digest != "secret1"
        assert "secret1" not in digest

    def test_uses_work_factor_12(self):
        digest = hash_password("secret1")
        # $2b$12$<salt+hash>
        assert digest.split("$")[2] == "12"
        assert BCRYPT_ROUNDS == 12

    def test_same_password_hashes_differently(self):
        assert hash_password("secret1") != hash_password("secret1")


class TestVerifyPassword:
    def test_round_trip(self):
        digest = hash_password("correct horse")
        assert verify_password("correct horse", digest) is True

    def test_wrong_password(self):
        digest = hash_password("correct horse")
        assert verify_password("correct horse!", digest) is False
        assert verify_password("", digest) is False

    def test_garbage_digest_returns_false(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    @pytest.mark.asyncio
    async def test_async_helpers(self):
        digest = await hash_password_async("secret1")
        assert await verify_password_async("secret1", digest) is True
        assert await verify_password_async("secret2", digest) is False


class TestPasswordProblem:
    @pytest.mark.parametrize("password", ["secret", "p" * 72, "パ" * 24])
    def test_acceptable(self, password):
        assert password_problem(password) is None

    def test_too_short(self):
        assert "at least 6" in password_problem("abc")

    @pytest.mark.parametrize("password", ["p" * 73, "パ" * 25])
    def test_over_bcrypt_limit(self, password):
        assert "72 bytes" in password_problem(password)

    def test_every_acceptable_password_hashes(self):
        password = "パ" * 24
        assert password_problem(password) is None
        assert verify_password(password, hash_password(password))
