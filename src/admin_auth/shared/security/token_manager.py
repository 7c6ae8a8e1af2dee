"""토큰 관리자 계약 모듈."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from admin_auth.shared.security.models import AuthenticationToken, UserAuthInfo


class UserAuthInfoProvider(Protocol):
    """시스템 원장에서 사용자 인증 정보를 다시 구성하는 제공자.

    토큰 갱신 시 이전 토큰의 부서/권한 정보를 신뢰하지 않고 새로 조회하는 데 쓰인다.
    """

    async def load_user_auth_info(self, user_id: int) -> UserAuthInfo | None:
        """사용자가 없거나 소프트 삭제된 경우 None을 반환한다."""
        ...


class TokenManager(ABC):
    """토큰 발급, 해석, 갱신, 무효화 계약.

    구현체는 세션 모드 설정에 따라 하나가 선택된다.
    - JwtTokenManager: 자기완결형 서명 토큰 + 보안 버전 + 블랙리스트
    - RedisTokenManager: 서버측 세션 레코드에 매핑된 불투명 토큰
    """

    @abstractmethod
    async def generate_token(self, user_auth_info: UserAuthInfo) -> AuthenticationToken:
        """토큰 쌍을 발급하고 사용자의 이전 토큰을 무효화한다.

        Raises:
            SystemException: user_id가 0 이하인 경우 ("Invalid userId")
        """

    @abstractmethod
    async def parse_access_token(self, access_token: str) -> UserAuthInfo:
        """액세스 토큰을 해석한다.

        Raises:
            AccessTokenInvalidException: 변조, 유형 불일치, 블랙리스트, 버전 만료
        """

    @abstractmethod
    async def refresh_token(self, refresh_token: str) -> AuthenticationToken:
        """리프레시 토큰으로 새 토큰 쌍을 발급한다.

        Raises:
            RefreshTokenInvalidException: 검증 실패 또는 사용자가 더 이상 존재하지 않는 경우
        """

    @abstractmethod
    async def invalidate(
        self, access_token: str | None = None, refresh_token: str | None = None
    ) -> None:
        """전달된 토큰을 무효화한다. 빈 값에 대해서도 안전하게 여러 번 호출할 수 있다."""
