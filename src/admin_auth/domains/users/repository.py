"""Users 도메인 Repository

데이터베이스 쿼리를 실행하는 레이어입니다.
"""

import asyncpg

from admin_auth.shared.database.query import Eq, QueryBuilder
from admin_auth.shared.utils.query_timing import track_query
from admin_auth.shared.utils.sql_loader import create_sql_loader

sql = create_sql_loader("users")


def user_page_query() -> QueryBuilder:
    """데이터 권한 필터를 적용하기 전의 사용자 목록 기본 쿼리"""
    return QueryBuilder(
        table="sys_user u",
        columns="u.id, u.username, u.nickname, u.dept_id, u.status",
    ).where(Eq("u.is_deleted", 0))


async def get_user_by_username(
    connection: asyncpg.Connection, username: str
) -> asyncpg.Record | None:
    """사용자명으로 조회 (비밀번호 해시 포함)

    Args:
        connection: 데이터베이스 연결
        username: 사용자명

    Returns:
        사용자 레코드 또는 None
    """
    query = sql.load_query("get_user_by_username")
    async with track_query("get_user_by_username"):
        result = await connection.fetchrow(query, username)
    return result


async def get_user_auth_row(connection: asyncpg.Connection, user_id: int) -> asyncpg.Record | None:
    """사용자 ID로 인증 정보 구성에 필요한 행 조회"""
    query = sql.load_query("get_user_auth_row")
    async with track_query("get_user_auth_row"):
        result = await connection.fetchrow(query, user_id)
    return result


async def get_user_role_scopes(
    connection: asyncpg.Connection, user_id: int
) -> list[asyncpg.Record]:
    """사용자 역할별 데이터 권한 조회

    Returns:
        role_code, data_scope, dept_ids 컬럼을 가진 레코드 목록 (역할 ID 순)
    """
    query = sql.load_query("get_user_role_scopes")
    async with track_query("get_user_role_scopes"):
        result = await connection.fetch(query, user_id)
    return result


async def fetch_user_page(
    connection: asyncpg.Connection, query: QueryBuilder, offset: int, limit: int
) -> list[asyncpg.Record]:
    """필터가 적용된 쿼리로 사용자 목록 페이지 조회"""
    statement, params = query.order_by("u.id").paginate(limit, offset).build()
    async with track_query("fetch_user_page"):
        result = await connection.fetch(statement, *params)
    return result


async def count_user_page(connection: asyncpg.Connection, query: QueryBuilder) -> int:
    """필터가 적용된 쿼리의 전체 행 수"""
    statement, params = query.build_count()
    async with track_query("count_user_page"):
        result = await connection.fetchval(statement, *params)
    return result or 0
