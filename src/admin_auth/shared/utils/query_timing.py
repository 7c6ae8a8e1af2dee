"""쿼리 실행 시간 측정 유틸리티."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from admin_auth.shared.logging import security_logger

SLOW_QUERY_THRESHOLD_MS = 100


@asynccontextmanager
async def track_query(query_name: str) -> AsyncIterator[None]:
    """쿼리 실행 시간을 측정하고 느린 쿼리를 로깅한다.

    Usage:
        async with track_query("get_dept_and_sub_ids"):
            rows = await connection.fetch(query, dept_id)
    """
    start = time.monotonic()
    try:
        yield
    finally:
        elapsed_ms = (time.monotonic() - start) * 1000
        if elapsed_ms > SLOW_QUERY_THRESHOLD_MS:
            security_logger.log_slow_query(query_name, elapsed_ms)
