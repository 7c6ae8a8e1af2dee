"""Users 도메인 Router

사용자 조회 API 엔드포인트를 정의합니다.
"""

import asyncpg
from fastapi import APIRouter, Depends, Query

from admin_auth.domains.permissions.service import DataPermissionService
from admin_auth.domains.users import schemas, service
from admin_auth.shared.constants import Pagination
from admin_auth.shared.database.connection import get_db_connection
from admin_auth.shared.dependencies import get_current_user, get_data_permission_service
from admin_auth.shared.schemas import ApiResponse, PaginatedResponse
from admin_auth.shared.security.models import UserAuthInfo

router = APIRouter()


@router.get(
    "/page",
    response_model=ApiResponse[PaginatedResponse[schemas.UserPageItem]],
    summary="사용자 목록",
    description="호출자의 데이터 권한 범위 안에서 사용자 목록을 페이징 조회합니다",
)
async def get_user_page(
    page: int = Query(1, ge=1, description="페이지 번호"),
    page_size: int = Query(
        Pagination.DEFAULT_PAGE_SIZE, ge=1, le=Pagination.MAX_PAGE_SIZE, description="페이지 크기"
    ),
    current_user: UserAuthInfo = Depends(get_current_user),
    permission_service: DataPermissionService = Depends(get_data_permission_service),
    conn: asyncpg.Connection = Depends(get_db_connection),
):
    """사용자 목록 조회"""
    page_query = schemas.UserPageQuery(page=page, page_size=page_size)
    result = await service.get_user_page(conn, current_user, permission_service, page_query)
    return ApiResponse(
        success=True,
        data=result,
    )
