"""Permissions 도메인 Service

역할별 데이터 권한(RoleDataScope)을 하나의 행 필터로 병합합니다.
여러 역할의 권한은 합집합(OR)으로 합쳐지며, 어떤 권한도 조건을 만들지
못하면 아무 행도 보이지 않습니다 (전체 허용으로 열리지 않음).
"""

from collections.abc import Awaitable, Callable

from admin_auth.shared.database.query import Condition, Eq, In, Never, Or, QueryBuilder
from admin_auth.shared.logging import security_logger
from admin_auth.shared.security.models import DataScope, RoleDataScope, UserAuthInfo

DeptResolver = Callable[[int], Awaitable[list[int]]]


class DataPermissionService:
    """데이터 권한 필터를 쿼리에 적용하는 서비스.

    Args:
        dept_resolver: 부서 ID를 받아 해당 부서와 모든 하위 부서 ID를 반환하는 코루틴 함수
        super_admin_role: 필터링을 건너뛰는 최고 관리자 역할 코드
    """

    def __init__(self, dept_resolver: DeptResolver, super_admin_role: str = "ROOT") -> None:
        self._dept_resolver = dept_resolver
        self._super_admin_role = super_admin_role

    async def apply(
        self,
        query: QueryBuilder,
        dept_id_column: str,
        user_id_column: str,
        auth_user: UserAuthInfo,
    ) -> QueryBuilder:
        """호출자의 데이터 권한으로 제한된 새 쿼리를 반환한다.

        원본 쿼리는 변경되지 않는다. 반환된 쿼리는 이 호출자 전용이며
        다른 인증 컨텍스트에서 재사용하면 안 된다.

        Args:
            query: 기본 쿼리
            dept_id_column: 행의 소속 부서 컬럼 (예: "u.dept_id")
            user_id_column: 행의 소유 사용자 컬럼 (예: "u.id")
            auth_user: 인증된 호출자 정보
        """
        user_id = auth_user.user_id
        scope_values = [scope.data_scope for scope in auth_user.data_scopes]

        if self._is_super_admin(auth_user):
            security_logger.log_data_scope_applied(user_id, scope_values, unrestricted=True)
            return query

        if not auth_user.data_scopes:
            security_logger.log_data_scope_applied(user_id, scope_values, unrestricted=False)
            if user_id <= 0:
                return query.where(Never())
            return query.where(Eq(user_id_column, user_id))

        if any(DataScope.is_all(value) for value in scope_values):
            security_logger.log_data_scope_applied(user_id, scope_values, unrestricted=True)
            return query

        conditions: list[Condition] = []
        for scope in auth_user.data_scopes:
            condition = await self._build_role_condition(
                scope, dept_id_column, user_id_column, auth_user
            )
            if condition is not None:
                conditions.append(condition)

        security_logger.log_data_scope_applied(user_id, scope_values, unrestricted=False)
        if not conditions:
            return query.where(Never())
        if len(conditions) == 1:
            return query.where(conditions[0])
        return query.where(Or(tuple(conditions)))

    def has_all_permission(self, auth_user: UserAuthInfo) -> bool:
        """최고 관리자이거나 ALL 권한 역할을 보유했는지 여부."""
        if self._is_super_admin(auth_user):
            return True
        return any(DataScope.is_all(scope.data_scope) for scope in auth_user.data_scopes)

    def _is_super_admin(self, auth_user: UserAuthInfo) -> bool:
        return self._super_admin_role in auth_user.roles

    async def _build_role_condition(
        self,
        scope: RoleDataScope,
        dept_id_column: str,
        user_id_column: str,
        auth_user: UserAuthInfo,
    ) -> Condition | None:
        """단일 역할 권한의 조건. None이면 이 역할은 OR 그룹에서 빠진다."""
        dept_id = auth_user.dept_id
        user_id = auth_user.user_id

        match DataScope.from_value(scope.data_scope):
            case DataScope.ALL:
                return None
            case DataScope.DEPT:
                if dept_id is None or dept_id <= 0:
                    return None
                return Eq(dept_id_column, dept_id)
            case DataScope.DEPT_AND_SUB:
                if dept_id is None or dept_id <= 0:
                    return None
                dept_ids = await self._dept_resolver(dept_id)
                if not dept_ids:
                    # 계층 데이터가 깨진 경우 본인 부서로 축소
                    return Eq(dept_id_column, dept_id)
                return In(dept_id_column, tuple(dept_ids))
            case DataScope.CUSTOM:
                if not scope.custom_dept_ids:
                    return Never()
                return In(dept_id_column, tuple(scope.custom_dept_ids))
            case _:
                return Eq(user_id_column, user_id) if user_id > 0 else None
