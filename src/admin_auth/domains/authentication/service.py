"""Authentication 도메인 Service

로그인, 토큰 갱신, 로그아웃 흐름을 처리하는 레이어입니다.
토큰 발급과 폐기는 세션 모드에 맞게 선택된 TokenManager에 위임합니다.
"""

import asyncpg

from admin_auth.domains.authentication import schemas
from admin_auth.domains.users import repository as users_repository
from admin_auth.domains.users import service as users_service
from admin_auth.shared.constants import ErrorCode, ErrorMessage, SecurityConstants
from admin_auth.shared.exceptions import (
    BadRequestException,
    ForbiddenException,
    RefreshTokenInvalidException,
    UnauthorizedException,
)
from admin_auth.shared.logging import security_logger
from admin_auth.shared.security.models import AuthenticationToken
from admin_auth.shared.security.password_hasher import password_hasher
from admin_auth.shared.security.token_manager import TokenManager


async def login(
    connection: asyncpg.Connection,
    request: schemas.LoginRequest,
    token_manager: TokenManager,
    session_mode: str,
) -> AuthenticationToken:
    """로그인

    Raises:
        BadRequestException: 사용자명 또는 비밀번호 누락 (A0410)
        UnauthorizedException: 계정 없음 (A0201) 또는 비밀번호 불일치 (A0210)
        ForbiddenException: 정상 상태가 아닌 계정 (A0202)
    """
    username = request.username.strip()
    if not username or not request.password:
        raise BadRequestException(
            error_code=ErrorCode.REQUEST_REQUIRED_PARAMETER_IS_EMPTY,
            message=ErrorMessage.REQUEST_REQUIRED_PARAMETER_IS_EMPTY,
        )

    # 1. 사용자 조회
    user = await users_repository.get_user_by_username(connection, username)
    if user is None:
        security_logger.log_login_failed(username, "account_not_found")
        raise UnauthorizedException(
            error_code=ErrorCode.ACCOUNT_NOT_FOUND,
            message=ErrorMessage.ACCOUNT_NOT_FOUND,
        )

    # 2. 계정 상태 확인
    if user["status"] != SecurityConstants.USER_STATUS_ENABLED:
        security_logger.log_login_failed(username, "account_frozen")
        raise ForbiddenException(
            error_code=ErrorCode.ACCOUNT_FROZEN,
            message=ErrorMessage.ACCOUNT_FROZEN,
        )

    # 3. 비밀번호 검증
    if not await password_hasher.verify_async(request.password, user["password"] or ""):
        security_logger.log_login_failed(username, "invalid_password")
        raise UnauthorizedException(
            error_code=ErrorCode.USER_PASSWORD_ERROR,
            message=ErrorMessage.USER_PASSWORD_ERROR,
        )

    # 4. 인증 정보 구성 후 토큰 발급
    user_auth_info = await users_service.build_user_auth_info(connection, user)
    tokens = await token_manager.generate_token(user_auth_info)

    security_logger.log_login_success(user["id"], username, session_mode)
    return tokens


async def refresh_token(refresh_token: str, token_manager: TokenManager) -> AuthenticationToken:
    """토큰 갱신

    Raises:
        RefreshTokenInvalidException: 리프레시 토큰이 비어 있거나 유효하지 않은 경우
    """
    if not refresh_token:
        raise RefreshTokenInvalidException(details={"reason": "missing"})
    return await token_manager.refresh_token(refresh_token)


async def logout(
    access_token: str | None, refresh_token: str | None, token_manager: TokenManager
) -> None:
    """로그아웃. 이미 무효한 토큰이어도 성공으로 처리한다."""
    await token_manager.invalidate(access_token or None, refresh_token or None)
