"""Users 도메인 Service

비즈니스 로직을 처리하는 레이어입니다.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import asyncpg

from admin_auth.domains.permissions.service import DataPermissionService
from admin_auth.domains.users import repository, schemas
from admin_auth.shared.constants import SecurityConstants
from admin_auth.shared.database.connection import DatabasePool
from admin_auth.shared.schemas import PaginatedResponse
from admin_auth.shared.security.models import DataScope, RoleDataScope, UserAuthInfo


def build_role_data_scopes(rows: Sequence[Mapping[str, Any]]) -> list[RoleDataScope]:
    """역할 권한 행을 RoleDataScope 목록으로 변환한다.

    dept_ids는 CUSTOM 범위에서만 사용된다. data_scope가 비어 있으면 0으로 두며
    데이터 권한 엔진에서 SELF로 취급된다.
    """
    scopes = []
    for row in rows:
        data_scope = row["data_scope"] or 0
        if data_scope == DataScope.CUSTOM:
            scopes.append(RoleDataScope.custom(row["role_code"], list(row["dept_ids"] or [])))
        else:
            scopes.append(RoleDataScope(role_code=row["role_code"], data_scope=data_scope))
    return scopes


def build_authorities(scopes: Sequence[RoleDataScope]) -> list[str]:
    """역할 코드에 `ROLE_` 접두사를 붙인 권한 목록 (중복 제거, 순서 유지)"""
    authorities: list[str] = []
    for scope in scopes:
        authority = f"{SecurityConstants.ROLE_PREFIX}{scope.role_code}"
        if authority not in authorities:
            authorities.append(authority)
    return authorities


async def build_user_auth_info(
    connection: asyncpg.Connection, user_row: Mapping[str, Any]
) -> UserAuthInfo:
    """사용자 행으로부터 토큰 발급용 UserAuthInfo를 구성한다."""
    user_id = user_row["id"]
    role_rows = await repository.get_user_role_scopes(connection, user_id)
    data_scopes = build_role_data_scopes(role_rows)
    return UserAuthInfo(
        user_id=user_id,
        dept_id=user_row["dept_id"],
        data_scopes=data_scopes,
        authorities=build_authorities(data_scopes),
    )


class DatabaseUserAuthInfoProvider:
    """토큰 갱신 시 원장(sys_user, sys_role)에서 사용자 인증 정보를 다시 읽는다.

    삭제되었거나 정상 상태가 아닌 사용자는 None을 반환한다.
    """

    def __init__(self, pool: DatabasePool) -> None:
        self._pool = pool

    async def load_user_auth_info(self, user_id: int) -> UserAuthInfo | None:
        async with self._pool.acquire() as connection:
            user_row = await repository.get_user_auth_row(connection, user_id)
            if user_row is None:
                return None
            if user_row["status"] != SecurityConstants.USER_STATUS_ENABLED:
                return None
            return await build_user_auth_info(connection, user_row)


async def get_user_page(
    connection: asyncpg.Connection,
    auth_user: UserAuthInfo,
    permission_service: DataPermissionService,
    page_query: schemas.UserPageQuery,
) -> PaginatedResponse[schemas.UserPageItem]:
    """호출자의 데이터 권한 범위 안에서 사용자 목록을 페이징 조회한다."""
    query = await permission_service.apply(
        repository.user_page_query(), "u.dept_id", "u.id", auth_user
    )

    total = await repository.count_user_page(connection, query)
    rows = await repository.fetch_user_page(
        connection, query, offset=page_query.offset, limit=page_query.page_size
    )

    items = [schemas.UserPageItem(**dict(row)) for row in rows]
    return PaginatedResponse.create(
        items=items,
        total=total,
        page=page_query.page,
        page_size=page_query.page_size,
    )
