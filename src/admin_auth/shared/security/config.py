"""보안 관련 설정."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SecuritySettings(BaseSettings):
    """토큰 발급 및 세션 관련 설정."""

    # 환경 설정
    env: str = Field(default="development", description="Environment (development/production)")

    # 세션 모드: jwt(무상태 서명 토큰) 또는 redis-token(서버측 불투명 토큰)
    session_mode: Literal["jwt", "redis-token"] = Field(
        default="jwt",
        validation_alias="SECURITY_SESSION_MODE",
        description="Token manager implementation selector",
    )

    # Authorization 헤더 설정
    token_type: str = "Bearer"
    token_header: str = "Authorization"
    token_prefix: str = "Bearer "

    # JWT 설정 (HS256 고정)
    jwt_secret_key: str = Field(
        description="JWT secret key for HS256 (required - set JWT_SECRET_KEY environment variable)"
    )
    jwt_issuer: str = "admin-auth"
    jwt_access_ttl: int = Field(default=7200, gt=0, description="Access token TTL (seconds)")
    jwt_refresh_ttl: int = Field(default=604800, gt=0, description="Refresh token TTL (seconds)")

    # Redis 설정
    redis_url: str = "redis://localhost:6379/0"
    redis_token_access_ttl: int = Field(default=7200, gt=0)
    redis_token_refresh_ttl: int = Field(default=604800, gt=0)

    # 블랙리스트 TTL
    blacklist_min_ttl: int = Field(default=60, gt=0, description="Blacklist entry TTL floor")
    invalidate_blacklist_ttl: int = Field(
        default=86400, gt=0, description="Blacklist TTL for explicitly surrendered tokens"
    )

    # 데이터 권한 필터를 건너뛰는 슈퍼 관리자 역할 코드
    super_admin_role: str = "ROOT"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def validate_production_security(self):
        """
        프로덕션 환경 보안 설정 검증

        프로덕션에서는:
        1. JWT secret이 최소 32바이트 이상, 약한 기본값 사용 금지
        2. localhost Redis 사용 금지, TLS 필수
        """
        if self.env == "production":
            if len(self.jwt_secret_key) < 32:
                raise ValueError(
                    "Production JWT secret must be at least 32 bytes. "
                    f"Current length: {len(self.jwt_secret_key)} bytes. Generate a strong random secret."
                )

            weak_patterns = ["dev-", "dev_", "test", "change", "secret", "password", "default"]
            if any(pattern in self.jwt_secret_key.lower() for pattern in weak_patterns):
                raise ValueError(
                    "Production JWT secret contains weak patterns (dev-, test, change, etc.). "
                    "Use a cryptographically secure random string"
                )

            if "localhost" in self.redis_url or "127.0.0.1" in self.redis_url:
                raise ValueError(
                    "Production cannot use localhost Redis. "
                    "Set REDIS_URL to production Redis server"
                )

            if not self.redis_url.startswith("rediss://"):
                raise ValueError(
                    "Production Redis must use TLS (rediss://). Current URL scheme does not use TLS"
                )

        return self


class RedisKeySettings(BaseSettings):
    """Redis 키 템플릿 설정.

    `{}` 자리표시자는 왼쪽부터 순서대로 인자로 치환된다.
    """

    access_token_user: str = "auth:token:access:{}"
    refresh_token_user: str = "auth:token:refresh:{}"
    user_access_token: str = "auth:user:access:{}"
    user_refresh_token: str = "auth:user:refresh:{}"
    blacklist_token: str = "auth:token:blacklist:{}"
    user_security_version: str = "auth:user:security_version:{}"

    model_config = SettingsConfigDict(
        env_prefix="REDIS_KEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class CORSSettings(BaseSettings):
    """CORS 관련 설정."""

    allowed_origins: list[str] = Field(
        default=[
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        description="Allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


security_settings = SecuritySettings()
redis_key_settings = RedisKeySettings()
cors_settings = CORSSettings()
