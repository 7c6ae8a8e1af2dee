"""pytest fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import fakeredis.aioredis
import pytest
import pytest_asyncio
from dotenv import load_dotenv

# Load test environment variables before importing application modules
load_dotenv(Path(__file__).parent.parent / ".env.test", override=True)

from admin_auth.shared.security.config import RedisKeySettings, SecuritySettings  # noqa: E402
from admin_auth.shared.security.models import RoleDataScope, UserAuthInfo  # noqa: E402
from admin_auth.shared.security.redis_store import RedisStore  # noqa: E402


@pytest_asyncio.fixture
async def fake_redis() -> AsyncGenerator[fakeredis.aioredis.FakeRedis, None]:
    """Fake Redis client (테스트마다 독립된 서버)."""
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def store(fake_redis) -> RedisStore:
    """fakeredis를 주입한 RedisStore."""
    return RedisStore(client=fake_redis)


@pytest.fixture
def settings() -> SecuritySettings:
    """테스트용 보안 설정 (짧은 TTL)."""
    return SecuritySettings(
        env="test",
        session_mode="jwt",
        jwt_secret_key="test-secret-key-for-unit-tests-only-0123456789",
        jwt_issuer="admin-auth",
        jwt_access_ttl=7200,
        jwt_refresh_ttl=604800,
        redis_token_access_ttl=7200,
        redis_token_refresh_ttl=604800,
    )


@pytest.fixture
def redis_settings(settings) -> SecuritySettings:
    """redis-token 세션 모드 설정."""
    return settings.model_copy(update={"session_mode": "redis-token"})


@pytest.fixture
def keys() -> RedisKeySettings:
    """기본 Redis 키 템플릿."""
    return RedisKeySettings()


class InMemoryUserProvider:
    """user_id로 UserAuthInfo를 돌려주는 테스트용 사용자 원장."""

    def __init__(self) -> None:
        self.users: dict[int, UserAuthInfo] = {}
        self.calls: list[int] = []

    def add(self, user: UserAuthInfo) -> None:
        self.users[user.user_id] = user

    async def load_user_auth_info(self, user_id: int) -> UserAuthInfo | None:
        self.calls.append(user_id)
        return self.users.get(user_id)


@pytest.fixture
def user_provider() -> InMemoryUserProvider:
    return InMemoryUserProvider()


@pytest.fixture
def sample_user() -> UserAuthInfo:
    """부서 7, ADMIN 역할(DEPT 범위) 사용자."""
    return UserAuthInfo(
        user_id=42,
        dept_id=7,
        data_scopes=[RoleDataScope.dept("ADMIN")],
        authorities=["ROLE_ADMIN"],
    )
