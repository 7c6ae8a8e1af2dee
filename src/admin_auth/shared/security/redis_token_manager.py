"""서버측 세션(불투명 토큰) 관리자 모듈."""

from __future__ import annotations

import secrets

from pydantic import ValidationError

from admin_auth.shared.constants import TokenType
from admin_auth.shared.exceptions import (
    AccessTokenInvalidException,
    RefreshTokenInvalidException,
    SystemException,
)
from admin_auth.shared.logging import security_logger
from admin_auth.shared.security.config import RedisKeySettings, SecuritySettings
from admin_auth.shared.security.models import AuthenticationToken, UserAuthInfo
from admin_auth.shared.security.redis_keys import format_key
from admin_auth.shared.security.redis_store import RedisStore
from admin_auth.shared.security.token_manager import TokenManager, UserAuthInfoProvider

TOKEN_BYTES = 16


class RedisTokenManager(TokenManager):
    """무작위 불투명 토큰을 발급하고 Redis 세션 레코드로 사용자를 식별하는 토큰 관리자.

    토큰의 유효성은 "세션 레코드가 존재하는가"로만 판단한다.
    레코드를 지우는 즉시 폐기되므로 보안 버전이나 블랙리스트가 필요 없다.
    """

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

    async def generate_token(self, user_auth_info: UserAuthInfo) -> AuthenticationToken:
        """사용자의 이전 세션 레코드를 삭제하고 새 불투명 토큰 쌍을 발급한다.

        Raises:
            SystemException: user_id가 0 이하인 경우
        """
        user_id = user_auth_info.user_id
        if user_id <= 0:
            raise SystemException("Invalid userId")

        access_ttl = self._settings.redis_token_access_ttl
        refresh_ttl = self._settings.redis_token_refresh_ttl

        user_access_key = format_key(self._keys.user_access_token, user_id)
        user_refresh_key = format_key(self._keys.user_refresh_token, user_id)

        # 역방향 인덱스로 이전 세션을 찾아 제거 (사용자당 하나의 세션)
        old_access = await self._store.get(user_access_key)
        old_refresh = await self._store.get(user_refresh_key)
        stale_keys = []
        if old_access:
            stale_keys.append(format_key(self._keys.access_token_user, old_access))
        if old_refresh:
            stale_keys.append(format_key(self._keys.refresh_token_user, old_refresh))
        if stale_keys:
            await self._store.delete(*stale_keys)
            security_logger.log_session_superseded(user_id)

        access_token = secrets.token_hex(TOKEN_BYTES)
        refresh_token = secrets.token_hex(TOKEN_BYTES)

        session = user_auth_info.model_copy(update={"access_token": None})
        session_json = session.model_dump_json(by_alias=True)

        await self._store.setex(
            format_key(self._keys.access_token_user, access_token), access_ttl, session_json
        )
        await self._store.setex(
            format_key(self._keys.refresh_token_user, refresh_token), refresh_ttl, session_json
        )
        await self._store.setex(user_access_key, access_ttl, access_token)
        await self._store.setex(user_refresh_key, refresh_ttl, refresh_token)

        return AuthenticationToken(
            token_type=self._settings.token_type,
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=access_ttl,
        )

    async def parse_access_token(self, access_token: str) -> UserAuthInfo:
        session = await self._load_session(self._keys.access_token_user, access_token)
        if session is None:
            security_logger.log_token_rejected(TokenType.ACCESS, "session_not_found")
            raise AccessTokenInvalidException(details={"reason": "session_not_found"})

        return session.model_copy(update={"access_token": access_token})

    async def refresh_token(self, refresh_token: str) -> AuthenticationToken:
        """리프레시 세션을 찾아 토큰 쌍 전체를 교체한다.

        세션에 저장된 사용자 ID로 원장을 다시 조회해 최신 부서와 권한으로 발급한다.
        """
        session = await self._load_session(self._keys.refresh_token_user, refresh_token)
        if session is None:
            security_logger.log_token_rejected(TokenType.REFRESH, "session_not_found")
            raise RefreshTokenInvalidException(details={"reason": "session_not_found"})

        user_auth_info = await self._user_provider.load_user_auth_info(session.user_id)
        if user_auth_info is None:
            security_logger.log_token_rejected(TokenType.REFRESH, "user_not_found", session.user_id)
            raise RefreshTokenInvalidException(details={"reason": "user_not_found"})

        return await self.generate_token(user_auth_info)

    async def invalidate(
        self, access_token: str | None = None, refresh_token: str | None = None
    ) -> None:
        """사용자 포인터 키와 전달된 토큰의 세션 레코드를 삭제한다."""
        user_id: int | None = None
        if access_token:
            try:
                user_id = (await self.parse_access_token(access_token)).user_id
            except AccessTokenInvalidException:
                user_id = None

        keys: list[str] = []
        if user_id is not None and user_id > 0:
            keys.append(format_key(self._keys.user_access_token, user_id))
            keys.append(format_key(self._keys.user_refresh_token, user_id))
        if access_token:
            keys.append(format_key(self._keys.access_token_user, access_token))
        if refresh_token:
            keys.append(format_key(self._keys.refresh_token_user, refresh_token))

        await self._store.delete(*keys)
        security_logger.log_tokens_invalidated(user_id, None)

    async def _load_session(self, pattern: str, token: str) -> UserAuthInfo | None:
        if not token:
            return None
        raw = await self._store.get(format_key(pattern, token))
        if not raw:
            return None
        try:
            session = UserAuthInfo.model_validate_json(raw)
        except ValidationError:
            return None
        if session.user_id <= 0:
            return None
        return session
