"""PasswordHasher 단위 테스트."""

import pytest

from admin_auth.shared.security.password_hasher import PasswordHasher


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture(scope="module")
def hashed(hasher) -> str:
    return hasher.hash("Admin123!")


class TestPasswordHasher:
    def test_hash_is_bcrypt(self, hashed):
        assert hashed.startswith("$2")
        assert hashed != "Admin123!"

    def test_verify_correct(self, hasher, hashed):
        assert hasher.verify("Admin123!", hashed) is True

    def test_verify_wrong(self, hasher, hashed):
        assert hasher.verify("wrong", hashed) is False

    def test_verify_empty_hash(self, hasher):
        assert hasher.verify("Admin123!", "") is False

    def test_verify_unknown_format(self, hasher):
        assert hasher.verify("Admin123!", "plain-text") is False

    def test_verify_2y_prefix(self, hasher, hashed):
        """`$2y$` 접두사 해시도 검증된다."""
        legacy = "$2y$" + hashed[4:]

        assert hasher.verify("Admin123!", legacy) is True


@pytest.mark.asyncio
class TestPasswordHasherAsync:
    async def test_verify_async(self, hasher, hashed):
        assert await hasher.verify_async("Admin123!", hashed) is True
        assert await hasher.verify_async("nope", hashed) is False
