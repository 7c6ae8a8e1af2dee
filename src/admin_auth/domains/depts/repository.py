"""Depts 도메인 Repository

부서 계층(sys_dept.parent_id) 조회를 담당합니다.
"""

import asyncpg

from admin_auth.shared.utils.query_timing import track_query
from admin_auth.shared.utils.sql_loader import create_sql_loader

sql = create_sql_loader("depts")


async def get_dept_and_sub_ids(connection: asyncpg.Connection, dept_id: int) -> list[int]:
    """부서 자신과 모든 하위 부서 ID 조회

    Args:
        connection: 데이터베이스 연결
        dept_id: 기준 부서 ID

    Returns:
        부서 ID 목록. 부서가 없거나 삭제된 경우 빈 목록
    """
    query = sql.load_query("get_dept_and_sub_ids")
    async with track_query("get_dept_and_sub_ids"):
        rows = await connection.fetch(query, dept_id)
    return [row["id"] for row in rows]
