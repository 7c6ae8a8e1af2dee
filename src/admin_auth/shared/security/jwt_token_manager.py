"""무상태 서명 토큰(JWT) 관리자 모듈."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from pydantic import ValidationError

from admin_auth.shared.constants import TokenType
from admin_auth.shared.exceptions import (
    AccessTokenInvalidException,
    RefreshTokenInvalidException,
    SystemException,
)
from admin_auth.shared.logging import security_logger
from admin_auth.shared.security.config import RedisKeySettings, SecuritySettings
from admin_auth.shared.security.models import AuthenticationToken, TokenClaims, UserAuthInfo
from admin_auth.shared.security.redis_keys import format_key
from admin_auth.shared.security.redis_store import RedisStore
from admin_auth.shared.security.token_manager import TokenManager, UserAuthInfoProvider


class TokenRejectedError(Exception):
    """토큰 검증 실패. 호출한 연산에 맞는 공개 예외로 변환된다."""

    def __init__(self, reason: str, user_id: int | None = None) -> None:
        self.reason = reason
        self.user_id = user_id
        super().__init__(reason)


class JwtTokenManager(TokenManager):
    """HS256 서명 토큰을 발급하고 검증하는 토큰 관리자.

    두 가지 무효화 수단을 함께 쓴다.
    - 사용자별 보안 버전: 증가시키면 그 사용자의 기존 토큰 전체가 즉시 만료된다.
    - 토큰 블랙리스트: 원문 토큰 단위로 특정 토큰 하나만 거부한다.

    토큰의 보안 버전이 현재 값보다 작으면 거부한다. 같거나 크면 통과한다.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        store: RedisStore,
        user_provider: UserAuthInfoProvider,
        settings: SecuritySettings,
        keys: RedisKeySettings,
    ) -> None:
        self._store = store
        self._user_provider = user_provider
        self._settings = settings
        self._keys = keys

    # ===== 발급 =====

    async def generate_token(self, user_auth_info: UserAuthInfo) -> AuthenticationToken:
        """액세스/리프레시 토큰 쌍을 발급한다.

        사용자의 이전 토큰 쌍은 원문 그대로 블랙리스트에 등록되어
        사용자당 하나의 활성 토큰 쌍만 유지된다.

        Raises:
            SystemException: user_id가 0 이하인 경우
        """
        user_id = user_auth_info.user_id
        if user_id <= 0:
            raise SystemException("Invalid userId")

        access_ttl = self._settings.jwt_access_ttl
        refresh_ttl = self._settings.jwt_refresh_ttl
        security_version = await self._ensure_security_version(user_id)

        now = datetime.now(UTC)
        common: dict[str, Any] = {
            "iss": self._settings.jwt_issuer,
            "iat": now,
            "userId": user_id,
            "securityVersion": security_version,
        }

        access_payload: dict[str, Any] = {
            **common,
            "exp": now + timedelta(seconds=access_ttl),
            "jti": uuid.uuid4().hex,
            "tokenType": TokenType.ACCESS.value,
            "deptId": user_auth_info.dept_id,
            "dataScopes": [
                scope.model_dump(by_alias=True) for scope in user_auth_info.data_scopes
            ],
            "authorities": list(user_auth_info.authorities),
        }
        refresh_payload: dict[str, Any] = {
            **common,
            "exp": now + timedelta(seconds=refresh_ttl),
            "jti": uuid.uuid4().hex,
            "tokenType": TokenType.REFRESH.value,
        }

        access_token = jwt.encode(
            access_payload, self._settings.jwt_secret_key, algorithm=self.ALGORITHM
        )
        refresh_token = jwt.encode(
            refresh_payload, self._settings.jwt_secret_key, algorithm=self.ALGORITHM
        )

        user_access_key = format_key(self._keys.user_access_token, user_id)
        user_refresh_key = format_key(self._keys.user_refresh_token, user_id)
        old_access = await self._store.get(user_access_key)
        old_refresh = await self._store.get(user_refresh_key)

        await self._store.setex(user_access_key, access_ttl, access_token)
        await self._store.setex(user_refresh_key, refresh_ttl, refresh_token)

        if old_access:
            await self._blacklist(old_access, access_ttl)
        if old_refresh:
            await self._blacklist(old_refresh, refresh_ttl)
        if old_access or old_refresh:
            security_logger.log_session_superseded(user_id)

        return AuthenticationToken(
            token_type=self._settings.token_type,
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=access_ttl,
        )

    # ===== 해석 / 갱신 =====

    async def parse_access_token(self, access_token: str) -> UserAuthInfo:
        try:
            claims = await self._decode_and_validate(access_token, TokenType.ACCESS)
        except TokenRejectedError as e:
            security_logger.log_token_rejected(TokenType.ACCESS, e.reason, e.user_id)
            raise AccessTokenInvalidException(details={"reason": e.reason}) from None

        return claims.to_user_auth_info(access_token=access_token)

    async def refresh_token(self, refresh_token: str) -> AuthenticationToken:
        """리프레시 토큰을 검증하고 새 토큰 쌍을 발급한다.

        부서, 데이터 권한, 역할은 이전 토큰에서 가져오지 않고 사용자 원장에서 다시 조회한다.
        """
        try:
            claims = await self._decode_and_validate(refresh_token, TokenType.REFRESH)
        except TokenRejectedError as e:
            security_logger.log_token_rejected(TokenType.REFRESH, e.reason, e.user_id)
            raise RefreshTokenInvalidException(details={"reason": e.reason}) from None

        user_auth_info = await self._user_provider.load_user_auth_info(claims.user_id)
        if user_auth_info is None:
            security_logger.log_token_rejected(TokenType.REFRESH, "user_not_found", claims.user_id)
            raise RefreshTokenInvalidException(details={"reason": "user_not_found"})

        return await self.generate_token(user_auth_info)

    # ===== 무효화 =====

    async def invalidate(
        self, access_token: str | None = None, refresh_token: str | None = None
    ) -> None:
        """보안 버전을 증가시키고 전달된 토큰을 블랙리스트에 등록한다.

        사용자 ID 복구를 위한 디코딩 실패만 무시한다.
        저장소 오류는 그대로 전파된다.
        """
        user_id: int | None = None
        if access_token:
            try:
                claims = await self._decode_and_validate(access_token, None, check_blacklist=False)
                user_id = claims.user_id
            except TokenRejectedError:
                user_id = None

        security_version: int | None = None
        if user_id is not None and user_id > 0:
            security_version = await self._store.incr(self._security_version_key(user_id))

        ttl = self._settings.invalidate_blacklist_ttl
        if access_token:
            await self._blacklist(access_token, ttl)
        if refresh_token:
            await self._blacklist(refresh_token, ttl)

        security_logger.log_tokens_invalidated(user_id, security_version)

    # ===== 내부 =====

    async def _decode_and_validate(
        self,
        token: str,
        expected_type: TokenType | None,
        check_blacklist: bool = True,
    ) -> TokenClaims:
        """서명, 클레임 형식, 보안 버전, 토큰 유형을 차례로 검증한다.

        Raises:
            TokenRejectedError: 검증 실패
        """
        if check_blacklist and await self._is_blacklisted(token):
            raise TokenRejectedError("blacklisted")

        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self._settings.jwt_issuer,
            )
        except JWTError:
            raise TokenRejectedError("malformed") from None

        try:
            claims = TokenClaims.model_validate(payload)
        except ValidationError:
            raise TokenRejectedError("invalid_claims") from None

        if claims.user_id <= 0 or claims.security_version <= 0:
            raise TokenRejectedError("invalid_claims")

        current = await self._current_security_version(claims.user_id)
        if claims.security_version < current:
            raise TokenRejectedError("stale_version", claims.user_id)

        if expected_type is not None and claims.token_type != expected_type:
            raise TokenRejectedError("wrong_type", claims.user_id)

        return claims

    def _security_version_key(self, user_id: int) -> str:
        return format_key(self._keys.user_security_version, user_id)

    async def _current_security_version(self, user_id: int) -> int:
        raw = await self._store.get(self._security_version_key(user_id))
        return max(int(raw), 1) if raw else 1

    async def _ensure_security_version(self, user_id: int) -> int:
        # 첫 발급 시 기준값 1로 초기화하고 기존 값은 덮어쓰지 않는다
        await self._store.set(self._security_version_key(user_id), 1, nx=True)
        return await self._current_security_version(user_id)

    async def _is_blacklisted(self, token: str) -> bool:
        return await self._store.exists(format_key(self._keys.blacklist_token, token))

    async def _blacklist(self, token: str, ttl_seconds: int) -> None:
        key = format_key(self._keys.blacklist_token, token)
        await self._store.setex(key, max(self._settings.blacklist_min_ttl, ttl_seconds), "1")
