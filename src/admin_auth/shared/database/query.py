"""asyncpg용 불변 SELECT 쿼리 빌더

조건은 `$n` 위치 파라미터를 사용하는 SQL로 렌더링되며, 메모리상의 행(mapping)에
대해서도 평가할 수 있습니다. `QueryBuilder`는 변경되지 않고 `where()`마다 새
빌더를 반환하므로, 한 인증 컨텍스트용으로 필터링된 쿼리가 다른 컨텍스트로
새어 나가지 않습니다.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)?$")


def _validate_column(column: str) -> str:
    """컬럼 참조 검증 (테이블 별칭 한정 허용)

    Raises:
        ValueError: 영문자, 숫자, 밑줄, 별칭 구분용 점 하나 외의 문자가 포함된 경우
    """
    if not _IDENTIFIER.match(column):
        raise ValueError(f"Invalid column reference: {column!r}")
    return column


def _column_value(row: Mapping[str, Any], column: str) -> Any:
    if column in row:
        return row[column]
    return row.get(column.rsplit(".", 1)[-1])


class Condition(ABC):
    """WHERE 절 조각"""

    @abstractmethod
    def to_sql(self, params: list[Any]) -> str:
        """SQL로 렌더링하고 바인딩 값을 `params`에 추가한다."""

    @abstractmethod
    def matches(self, row: Mapping[str, Any]) -> bool:
        """행 하나에 대해 조건을 평가한다."""


@dataclass(frozen=True)
class Eq(Condition):
    column: str
    value: Any

    def __post_init__(self) -> None:
        _validate_column(self.column)

    def to_sql(self, params: list[Any]) -> str:
        params.append(self.value)
        return f"{self.column} = ${len(params)}"

    def matches(self, row: Mapping[str, Any]) -> bool:
        return _column_value(row, self.column) == self.value


@dataclass(frozen=True)
class In(Condition):
    column: str
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        _validate_column(self.column)

    def to_sql(self, params: list[Any]) -> str:
        if not self.values:
            return "1 = 0"
        placeholders = []
        for value in self.values:
            params.append(value)
            placeholders.append(f"${len(params)}")
        return f"{self.column} IN ({', '.join(placeholders)})"

    def matches(self, row: Mapping[str, Any]) -> bool:
        return _column_value(row, self.column) in self.values


@dataclass(frozen=True)
class Or(Condition):
    conditions: tuple[Condition, ...]

    def to_sql(self, params: list[Any]) -> str:
        if not self.conditions:
            return "1 = 0"
        return "(" + " OR ".join(c.to_sql(params) for c in self.conditions) + ")"

    def matches(self, row: Mapping[str, Any]) -> bool:
        return any(c.matches(row) for c in self.conditions)


@dataclass(frozen=True)
class Never(Condition):
    """항상 거짓인 조건 (`1 = 0`)"""

    def to_sql(self, params: list[Any]) -> str:
        return "1 = 0"

    def matches(self, row: Mapping[str, Any]) -> bool:
        return False


@dataclass(frozen=True)
class QueryBuilder:
    """불변 SELECT 쿼리

    Args:
        table: FROM 절 (예: "sys_user u")
        columns: SELECT 컬럼 목록
    """

    table: str
    columns: str = "*"
    conditions: tuple[Condition, ...] = field(default_factory=tuple)
    order: str | None = None
    limit: int | None = None
    offset: int | None = None

    def where(self, condition: Condition) -> QueryBuilder:
        return replace(self, conditions=(*self.conditions, condition))

    def order_by(self, clause: str) -> QueryBuilder:
        return replace(self, order=clause)

    def paginate(self, limit: int, offset: int = 0) -> QueryBuilder:
        return replace(self, limit=limit, offset=offset)

    def _where_sql(self, params: list[Any]) -> str:
        if not self.conditions:
            return ""
        return " WHERE " + " AND ".join(c.to_sql(params) for c in self.conditions)

    def build(self) -> tuple[str, list[Any]]:
        """SELECT 문과 바인딩 파라미터를 생성한다."""
        params: list[Any] = []
        sql = f"SELECT {self.columns} FROM {self.table}{self._where_sql(params)}"
        if self.order:
            sql += f" ORDER BY {self.order}"
        if self.limit is not None:
            params.append(self.limit)
            sql += f" LIMIT ${len(params)}"
        if self.offset:
            params.append(self.offset)
            sql += f" OFFSET ${len(params)}"
        return sql, params

    def build_count(self) -> tuple[str, list[Any]]:
        """같은 FROM/WHERE에 대한 COUNT(*) 문 (정렬과 페이징은 무시)"""
        params: list[Any] = []
        return f"SELECT COUNT(*) AS count FROM {self.table}{self._where_sql(params)}", params

    def matches(self, row: Mapping[str, Any]) -> bool:
        return all(c.matches(row) for c in self.conditions)

    def filter_rows(self, rows: Sequence[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
        """메모리에 있는 행 목록에 WHERE 조건을 적용한다."""
        return [row for row in rows if self.matches(row)]
