"""세션 모드 설정에 따른 토큰 관리자 선택 모듈."""

from __future__ import annotations

from admin_auth.shared.security.config import RedisKeySettings, SecuritySettings
from admin_auth.shared.security.jwt_token_manager import JwtTokenManager
from admin_auth.shared.security.redis_store import RedisStore
from admin_auth.shared.security.redis_token_manager import RedisTokenManager
from admin_auth.shared.security.token_manager import TokenManager, UserAuthInfoProvider


class TokenManagerResolver:
    """session_mode를 한 번 읽어 토큰 관리자 하나를 생성하고 재사용한다."""

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
        self._manager: TokenManager | None = None

    def get(self) -> TokenManager:
        if self._manager is not None:
            return self._manager

        if self._settings.session_mode == "redis-token":
            manager_cls: type[JwtTokenManager] | type[RedisTokenManager] = RedisTokenManager
        else:
            manager_cls = JwtTokenManager

        self._manager = manager_cls(self._store, self._user_provider, self._settings, self._keys)
        return self._manager
