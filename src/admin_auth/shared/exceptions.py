"""공통 예외 클래스 및 전역 핸들러

도메인 예외를 정의하고 FastAPI 애플리케이션에 전역 예외 핸들러를 등록합니다.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from admin_auth.shared.constants import ErrorCode, ErrorMessage


class AppException(Exception):
    """애플리케이션 기본 예외 클래스"""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BadRequestException(AppException):
    """잘못된 요청 (400)"""

    def __init__(self, error_code: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, error_code, message, details)


class UnauthorizedException(AppException):
    """인증 실패 (401)"""

    def __init__(self, error_code: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(status.HTTP_401_UNAUTHORIZED, error_code, message, details)


class ForbiddenException(AppException):
    """권한 부족 (403)"""

    def __init__(self, error_code: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(status.HTTP_403_FORBIDDEN, error_code, message, details)


class AccessTokenInvalidException(UnauthorizedException):
    """액세스 토큰이 변조, 만료, 블랙리스트 등록, 버전 불일치 또는 유형 불일치인 경우"""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(ErrorCode.ACCESS_TOKEN_INVALID, ErrorMessage.ACCESS_TOKEN_INVALID, details)


class RefreshTokenInvalidException(UnauthorizedException):
    """리프레시 토큰이 유효하지 않거나 대상 사용자가 더 이상 존재하지 않는 경우"""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(
            ErrorCode.REFRESH_TOKEN_INVALID, ErrorMessage.REFRESH_TOKEN_INVALID, details
        )


class SystemException(AppException):
    """호출 계약 위반 등 시스템 실행 오류 (500)"""

    def __init__(self, message: str = ErrorMessage.SYSTEM_ERROR, details: dict[str, Any] | None = None):
        super().__init__(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.SYSTEM_ERROR, message, details
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """AppException 전역 핸들러

    표준 에러 응답 형식:
    {
        "success": false,
        "data": null,
        "error": {
            "code": "A0230",
            "message": "Error message",
            "details": {...}
        }
    }
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "data": None,
            "error": {
                "code": str(exc.error_code),
                "message": exc.message,
                "details": exc.details,
            },
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 예외 핸들러"""
    logger = structlog.get_logger("exceptions")
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=str(request.url),
        method=request.method,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "data": None,
            "error": {
                "code": ErrorCode.INTERNAL_ERROR.value,
                "message": ErrorMessage.INTERNAL_SERVER_ERROR,
                "details": {},
            },
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """FastAPI 애플리케이션에 예외 핸들러 등록"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
