"""보안 관련 공통 모듈."""

from admin_auth.shared.security.models import (
    AuthenticationToken,
    DataScope,
    RoleDataScope,
    UserAuthInfo,
)
from admin_auth.shared.security.password_hasher import PasswordHasher, password_hasher
from admin_auth.shared.security.redis_store import RedisStore, redis_store

__all__ = [
    "AuthenticationToken",
    "DataScope",
    "PasswordHasher",
    "RedisStore",
    "RoleDataScope",
    "UserAuthInfo",
    "password_hasher",
    "redis_store",
]
