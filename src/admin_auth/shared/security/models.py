"""인증 토큰 및 데이터 권한 모델 모듈.

토큰 발급 입력(UserAuthInfo), 발급 결과(AuthenticationToken),
서명 토큰 페이로드(TokenClaims), 역할별 데이터 권한(RoleDataScope)을
Pydantic 모델로 정의합니다. 직렬화 형식은 camelCase입니다.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from admin_auth.shared.constants import SecurityConstants, TokenType


class DataScope(IntEnum):
    """데이터 권한 범위.

    값이 작을수록 범위가 넓다. 다중 역할의 범위는 합집합(OR)으로 병합되며
    ALL이 하나라도 있으면 필터링 자체를 건너뛴다.
    """

    ALL = 1
    DEPT_AND_SUB = 2
    DEPT = 3
    SELF = 4
    CUSTOM = 5

    @property
    def label(self) -> str:
        return _DATA_SCOPE_LABELS[self]

    @classmethod
    def from_value(cls, value: int | None) -> DataScope | None:
        """정의된 값이면 열거형을, 아니면 None을 반환한다."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def is_all(cls, value: int | None) -> bool:
        return value == cls.ALL


_DATA_SCOPE_LABELS = {
    DataScope.ALL: "All data",
    DataScope.DEPT_AND_SUB: "Department and sub-departments",
    DataScope.DEPT: "Own department",
    DataScope.SELF: "Own data",
    DataScope.CUSTOM: "Custom departments",
}


class CamelModel(BaseModel):
    """camelCase 별칭으로 직렬화되는 기본 모델."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleDataScope(CamelModel):
    """단일 역할의 데이터 권한 범위.

    Attributes:
        role_code: 역할 코드
        data_scope: DataScope 값 (정의되지 않은 값은 SELF로 취급된다)
        custom_dept_ids: CUSTOM 범위에서만 설정되는 부서 ID 목록
    """

    model_config = ConfigDict(frozen=True)

    role_code: str
    data_scope: int = 0
    custom_dept_ids: list[int] | None = None

    @model_validator(mode="after")
    def _custom_dept_ids_only_for_custom(self) -> RoleDataScope:
        if self.custom_dept_ids is not None and self.data_scope != DataScope.CUSTOM:
            raise ValueError("customDeptIds is only allowed for the CUSTOM data scope")
        return self

    @classmethod
    def all(cls, role_code: str) -> RoleDataScope:
        return cls(role_code=role_code, data_scope=DataScope.ALL)

    @classmethod
    def dept_and_sub(cls, role_code: str) -> RoleDataScope:
        return cls(role_code=role_code, data_scope=DataScope.DEPT_AND_SUB)

    @classmethod
    def dept(cls, role_code: str) -> RoleDataScope:
        return cls(role_code=role_code, data_scope=DataScope.DEPT)

    @classmethod
    def self_(cls, role_code: str) -> RoleDataScope:
        return cls(role_code=role_code, data_scope=DataScope.SELF)

    @classmethod
    def custom(cls, role_code: str, dept_ids: list[int]) -> RoleDataScope:
        return cls(role_code=role_code, data_scope=DataScope.CUSTOM, custom_dept_ids=list(dept_ids))


class UserAuthInfo(CamelModel):
    """토큰 발급 입력이자 토큰 해석 결과인 사용자 인증 정보.

    Attributes:
        user_id: 사용자 ID (발급 시 0보다 커야 한다)
        dept_id: 소속 부서 ID
        data_scopes: 보유 역할별 데이터 권한 목록 (순서 유지)
        authorities: `ROLE_` 접두사가 붙은 역할 권한 목록
        access_token: 토큰 해석 시 입력 토큰을 그대로 되돌려준다
    """

    user_id: int = 0
    dept_id: int | None = None
    data_scopes: list[RoleDataScope] = Field(default_factory=list)
    authorities: list[str] = Field(default_factory=list)
    access_token: str | None = None

    @property
    def roles(self) -> list[str]:
        """authorities에서 `ROLE_` 접두사를 제거한 역할 코드 목록."""
        prefix = SecurityConstants.ROLE_PREFIX
        return [
            authority[len(prefix):]
            for authority in self.authorities
            if authority.startswith(prefix)
        ]


class AuthenticationToken(CamelModel):
    """발급된 토큰 쌍. 생성 후 변경할 수 없다."""

    model_config = ConfigDict(frozen=True)

    token_type: str = Field(..., description="토큰 타입 (예: Bearer)")
    access_token: str = Field(..., description="액세스 토큰")
    refresh_token: str = Field(..., description="리프레시 토큰")
    expires_in: int = Field(..., description="액세스 토큰 만료 시간 (초)")


class TokenClaims(CamelModel):
    """서명 토큰 페이로드.

    서명 검증만으로 형식이 보장되지 않으므로 디코딩 후 이 모델로 필드를 검증한다.
    """

    iss: str
    iat: int
    exp: int
    jti: str
    token_type: TokenType
    user_id: int
    security_version: int
    dept_id: int | None = None
    data_scopes: list[RoleDataScope] | None = None
    authorities: list[str] = Field(default_factory=list)

    def to_user_auth_info(self, access_token: str | None = None) -> UserAuthInfo:
        return UserAuthInfo(
            user_id=self.user_id,
            dept_id=self.dept_id,
            data_scopes=self.data_scopes or [],
            authorities=self.authorities,
            access_token=access_token,
        )
