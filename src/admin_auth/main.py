"""FastAPI 애플리케이션 진입점 - 관리자 인증/데이터 권한 서비스."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError

from admin_auth.domains.authentication.router import router as auth_router
from admin_auth.domains.users.router import router as users_router
from admin_auth.shared.database.connection import db_pool
from admin_auth.shared.exceptions import register_exception_handlers
from admin_auth.shared.logging import configure_logging, get_logger
from admin_auth.shared.security.config import cors_settings, security_settings
from admin_auth.shared.security.redis_store import redis_store

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """애플리케이션 생명주기 관리."""
    logger.info(
        "application_startup",
        environment=security_settings.env,
        session_mode=security_settings.session_mode,
    )
    await db_pool.initialize()
    await redis_store.initialize()

    logger.info("application_ready")
    yield
    logger.info("application_shutdown")

    await redis_store.close()
    await db_pool.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Admin Auth Service API",
    description="관리자 백오피스 인증 및 데이터 권한 서비스",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Authorization", "Content-Type", "Accept", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
    max_age=600,
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])


@app.get("/health")
async def health_check() -> dict:
    """
    헬스 체크 엔드포인트.

    데이터베이스와 Redis 연결 상태를 확인한다.
    """
    result = {
        "status": "healthy",
        "services": {},
    }

    db_health = await db_pool.health_check()
    result["services"]["database"] = db_health
    if not db_health.get("healthy"):
        result["status"] = "unhealthy"

    try:
        await redis_store.client.ping()
        result["services"]["redis"] = {"status": "healthy"}
    except (RedisError, RuntimeError) as e:
        result["status"] = "unhealthy"
        result["services"]["redis"] = {"status": "unhealthy", "error": str(e)}

    return result
