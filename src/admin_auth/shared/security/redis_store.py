"""Redis 기반 키-값 저장소 어댑터 모듈."""

from __future__ import annotations

import redis.asyncio as redis

from admin_auth.shared.security.config import security_settings


class RedisStore:
    """토큰 버전, 블랙리스트, 세션 레코드가 공유하는 Redis 클라이언트 래퍼.

    모든 연산은 단일 명령으로 끝나며 여러 명령에 걸친 트랜잭션은 없다.
    테스트에서는 fakeredis 클라이언트를 생성자에 주입한다.
    """

    def __init__(self, client: redis.Redis | None = None) -> None:  # type: ignore[type-arg]
        self._client = client

    async def initialize(self, url: str | None = None) -> None:
        """Redis 연결을 초기화한다."""
        self._client = redis.from_url(
            url or security_settings.redis_url,
            decode_responses=True,
        )

    async def close(self) -> None:
        """Redis 연결을 종료한다."""
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> redis.Redis:  # type: ignore[type-arg]
        """Redis 클라이언트를 반환한다."""
        if not self._client:
            raise RuntimeError("Redis가 초기화되지 않았습니다")
        return self._client

    # ===== 문자열 =====

    async def get(self, key: str) -> str | None:
        """값을 조회한다. 키가 없으면 None."""
        return await self.client.get(key)  # type: ignore[no-any-return]

    async def set(self, key: str, value: str | int, nx: bool = False) -> bool:
        """값을 저장한다.

        Args:
            key: 키
            value: 값
            nx: True이면 키가 없을 때만 저장한다

        Returns:
            저장 여부
        """
        result = await self.client.set(key, value, nx=nx)
        return bool(result)

    async def setex(self, key: str, ttl_seconds: int, value: str | int) -> None:
        """TTL과 함께 값을 저장한다."""
        await self.client.setex(key, ttl_seconds, value)

    async def incr(self, key: str) -> int:
        """값을 원자적으로 1 증가시키고 증가된 값을 반환한다."""
        return int(await self.client.incr(key))

    async def exists(self, key: str) -> bool:
        """키 존재 여부를 확인한다."""
        return bool(await self.client.exists(key))

    async def delete(self, *keys: str) -> int:
        """키를 삭제하고 삭제된 개수를 반환한다."""
        if not keys:
            return 0
        return int(await self.client.delete(*keys))

    async def ttl(self, key: str) -> int:
        """남은 TTL(초)을 반환한다. 키가 없으면 -2, 만료가 없으면 -1."""
        return int(await self.client.ttl(key))

    # ===== 해시 =====

    async def hset(self, key: str, mapping: dict[str, str | int]) -> None:
        """해시 필드를 저장한다."""
        await self.client.hset(key, mapping=mapping)

    async def hget(self, key: str, field: str) -> str | None:
        """해시 필드 값을 조회한다."""
        return await self.client.hget(key, field)  # type: ignore[no-any-return]

    async def hgetall(self, key: str) -> dict[str, str]:
        """해시 전체를 조회한다."""
        return await self.client.hgetall(key)  # type: ignore[no-any-return]

    async def hdel(self, key: str, *fields: str) -> int:
        """해시 필드를 삭제한다."""
        if not fields:
            return 0
        return int(await self.client.hdel(key, *fields))


redis_store = RedisStore()
