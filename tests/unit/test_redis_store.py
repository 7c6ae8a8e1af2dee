"""RedisStore 단위 테스트."""

import pytest

from admin_auth.shared.security.redis_store import RedisStore


@pytest.mark.asyncio
class TestRedisStoreInitialization:
    """Redis Store 초기화 테스트."""

    async def test_client_property_raises_when_not_initialized(self):
        """초기화하지 않고 client 접근 시 RuntimeError."""
        store = RedisStore()

        with pytest.raises(RuntimeError) as exc_info:
            _ = store.client
        assert "초기화되지 않았습니다" in str(exc_info.value)

    async def test_injected_client(self, fake_redis):
        store = RedisStore(client=fake_redis)

        assert store.client is fake_redis


@pytest.mark.asyncio
class TestRedisStoreOperations:
    """문자열 및 해시 연산 테스트."""

    async def test_get_missing_key(self, store):
        assert await store.get("missing") is None

    async def test_set_and_get(self, store):
        assert await store.set("k", "v") is True
        assert await store.get("k") == "v"

    async def test_set_nx_does_not_overwrite(self, store):
        await store.set("version", 3)

        assert await store.set("version", 1, nx=True) is False
        assert await store.get("version") == "3"

    async def test_setex_sets_ttl(self, store):
        await store.setex("temp", 120, "1")

        ttl = await store.ttl("temp")
        assert 0 < ttl <= 120

    async def test_incr_is_atomic_counter(self, store):
        assert await store.incr("counter") == 1
        assert await store.incr("counter") == 2

    async def test_exists_and_delete(self, store):
        await store.set("a", "1")
        await store.set("b", "1")

        assert await store.exists("a") is True
        assert await store.delete("a", "b", "c") == 2
        assert await store.exists("a") is False

    async def test_delete_without_keys(self, store):
        assert await store.delete() == 0

    async def test_hash_operations(self, store):
        await store.hset("h", {"f1": "v1", "f2": 2})

        assert await store.hget("h", "f1") == "v1"
        assert await store.hgetall("h") == {"f1": "v1", "f2": "2"}
        assert await store.hdel("h", "f1") == 1
        assert await store.hget("h", "f1") is None
