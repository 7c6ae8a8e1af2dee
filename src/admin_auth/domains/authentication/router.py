"""Authentication 도메인 Router

로그인, 토큰 갱신, 로그아웃 API 엔드포인트를 정의합니다.
"""

import asyncpg
from fastapi import APIRouter, Body, Depends, Query, Request

from admin_auth.domains.authentication import schemas, service
from admin_auth.shared.database.connection import get_db_connection
from admin_auth.shared.dependencies import extract_token, get_token_manager
from admin_auth.shared.schemas import ApiResponse
from admin_auth.shared.security.config import security_settings
from admin_auth.shared.security.token_manager import TokenManager

router = APIRouter()


@router.post(
    "/login",
    response_model=ApiResponse[schemas.TokenResponse],
    response_model_by_alias=True,
    summary="로그인",
    description="사용자명과 비밀번호로 로그인하고 토큰을 발급받습니다",
)
async def login(
    request: schemas.LoginRequest,
    conn: asyncpg.Connection = Depends(get_db_connection),
    token_manager: TokenManager = Depends(get_token_manager),
):
    """로그인"""
    tokens = await service.login(conn, request, token_manager, security_settings.session_mode)
    return ApiResponse(
        success=True,
        data=tokens,
        message="로그인에 성공했습니다",
    )


@router.post(
    "/refresh-token",
    response_model=ApiResponse[schemas.TokenResponse],
    summary="토큰 갱신",
    description="리프레시 토큰(쿼리 파라미터 또는 JSON 본문)으로 토큰 쌍을 재발급합니다",
)
async def refresh_token(
    refresh_token_param: str | None = Query(None, alias="refreshToken"),
    body: schemas.RefreshTokenRequest | None = Body(None),
    token_manager: TokenManager = Depends(get_token_manager),
):
    """토큰 갱신"""
    token = (refresh_token_param or "").strip()
    if not token and body is not None:
        token = body.refresh_token.strip()

    tokens = await service.refresh_token(token, token_manager)
    return ApiResponse(
        success=True,
        data=tokens,
        message="토큰이 갱신되었습니다",
    )


@router.delete(
    "/logout",
    response_model=ApiResponse[None],
    summary="로그아웃",
    description="현재 토큰을 폐기합니다. 토큰이 이미 무효해도 성공으로 응답합니다",
)
async def logout(
    http_request: Request,
    body: schemas.LogoutRequest | None = Body(None),
    token_manager: TokenManager = Depends(get_token_manager),
):
    """로그아웃"""
    raw = http_request.headers.get(security_settings.token_header)
    access_token = extract_token(raw, security_settings.token_prefix) if raw else None
    refresh_token = body.refresh_token if body else None

    await service.logout(access_token, refresh_token, token_manager)
    return ApiResponse(
        success=True,
        message="로그아웃되었습니다",
    )
