"""FastAPI 의존성 주입

인증/인가를 위한 FastAPI Depends 함수들을 정의합니다.
"""

from functools import partial

import asyncpg
from fastapi import Depends, Request

from admin_auth.domains.depts.repository import get_dept_and_sub_ids
from admin_auth.domains.permissions.service import DataPermissionService
from admin_auth.domains.users.service import DatabaseUserAuthInfoProvider
from admin_auth.shared.constants import ErrorCode, ErrorMessage
from admin_auth.shared.database.connection import db_pool, get_db_connection
from admin_auth.shared.exceptions import AccessTokenInvalidException, UnauthorizedException
from admin_auth.shared.security.config import redis_key_settings, security_settings
from admin_auth.shared.security.models import UserAuthInfo
from admin_auth.shared.security.redis_store import redis_store
from admin_auth.shared.security.resolver import TokenManagerResolver
from admin_auth.shared.security.token_manager import TokenManager

token_manager_resolver = TokenManagerResolver(
    redis_store,
    DatabaseUserAuthInfoProvider(db_pool),
    security_settings,
    redis_key_settings,
)


def extract_token(raw: str, prefix: str) -> str:
    """헤더 값에서 토큰 접두사(예: "Bearer ")를 제거하고 공백을 정리한다.

    접두사가 없으면 값 전체를 토큰으로 본다.
    """
    token = raw[len(prefix):] if prefix and raw.startswith(prefix) else raw
    return token.strip()


def get_token_manager() -> TokenManager:
    """세션 모드에 맞는 TokenManager (프로세스당 하나)"""
    return token_manager_resolver.get()


async def get_current_user(
    request: Request,
    token_manager: TokenManager = Depends(get_token_manager),
) -> UserAuthInfo:
    """현재 인증된 사용자 정보 조회

    Raises:
        UnauthorizedException: 토큰 헤더가 없는 경우 (A0301)
        AccessTokenInvalidException: 토큰이 비어 있거나 유효하지 않은 경우 (A0230)
    """
    raw = request.headers.get(security_settings.token_header)
    if raw is None:
        raise UnauthorizedException(
            error_code=ErrorCode.ACCESS_UNAUTHORIZED,
            message=ErrorMessage.ACCESS_UNAUTHORIZED,
        )

    token = extract_token(raw, security_settings.token_prefix)
    if not token:
        raise AccessTokenInvalidException(details={"reason": "empty_token"})

    return await token_manager.parse_access_token(token)


def get_data_permission_service(
    conn: asyncpg.Connection = Depends(get_db_connection),
) -> DataPermissionService:
    """요청 연결로 부서 계층을 조회하는 데이터 권한 서비스"""
    return DataPermissionService(
        partial(get_dept_and_sub_ids, conn),
        super_admin_role=security_settings.super_admin_role,
    )
