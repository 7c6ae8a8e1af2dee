"""Database connection management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal

import asyncpg
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings."""

    primary_db_url: str = ""

    env: Literal["development", "production", "test"] = "development"
    pool_min_size: int = 5
    pool_max_size: int = 20
    pool_command_timeout: int = 60

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_db_url(self) -> "DatabaseSettings":
        if not self.primary_db_url:
            raise ValueError(
                "DB_PRIMARY_DB_URL 환경변수가 설정되지 않았습니다. "
                ".env 파일 또는 환경변수를 확인하세요."
            )
        return self

    def get_pool_config(self) -> dict:
        """Connection Pool 설정을 반환한다."""
        return {
            "min_size": self.pool_min_size,
            "max_size": self.pool_max_size,
            "command_timeout": self.pool_command_timeout,
        }


class DatabasePool:
    """Manages the primary database connection pool.

    설정은 initialize() 시점에 읽는다. DB 없이 import만 하는 테스트에서도
    DB_PRIMARY_DB_URL 누락으로 실패하지 않도록 하기 위함이다.
    """

    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        self._pool: asyncpg.Pool | None = None
        self._settings = settings

    async def _init_connection(self, connection: asyncpg.Connection) -> None:
        """연결 초기화 콜백. 각 새 연결의 타임존을 UTC로 맞춘다."""
        await connection.execute("SET timezone TO 'UTC'")

    async def initialize(self) -> None:
        """Initialize the connection pool."""
        if self._settings is None:
            self._settings = DatabaseSettings()

        self._pool = await asyncpg.create_pool(
            self._settings.primary_db_url,
            init=self._init_connection,
            **self._settings.get_pool_config(),
        )

    async def close(self) -> None:
        """Close the connection pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    async def health_check(self) -> dict:
        """Connection Pool Health Check를 수행한다.

        Returns:
            Health check 결과 딕셔너리 (healthy, status)
        """
        if not self._pool:
            return {"healthy": False, "status": "not_initialized"}
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (asyncpg.PostgresError, OSError) as e:
            return {"healthy": False, "status": "unhealthy", "error": str(e)}
        return {
            "healthy": True,
            "status": "healthy",
            "size": self._pool.get_size(),
            "free": self._pool.get_idle_size(),
        }

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a connection from the pool."""
        if not self._pool:
            raise RuntimeError("Database pool not initialized")
        async with self._pool.acquire() as connection:
            yield connection


db_pool = DatabasePool()


async def get_db_connection() -> AsyncIterator[asyncpg.Connection]:
    """FastAPI dependency for database connection."""
    async with db_pool.acquire() as connection:
        yield connection
