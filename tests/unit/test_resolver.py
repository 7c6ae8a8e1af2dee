"""TokenManagerResolver 단위 테스트."""

from admin_auth.shared.security.jwt_token_manager import JwtTokenManager
from admin_auth.shared.security.redis_token_manager import RedisTokenManager
from admin_auth.shared.security.resolver import TokenManagerResolver


class TestTokenManagerResolver:
    def test_jwt_mode(self, store, user_provider, settings, keys):
        resolver = TokenManagerResolver(store, user_provider, settings, keys)

        assert isinstance(resolver.get(), JwtTokenManager)

    def test_redis_token_mode(self, store, user_provider, redis_settings, keys):
        resolver = TokenManagerResolver(store, user_provider, redis_settings, keys)

        assert isinstance(resolver.get(), RedisTokenManager)

    def test_manager_is_memoized(self, store, user_provider, settings, keys):
        """설정이 바뀌어도 처음 만든 관리자를 계속 반환한다."""
        resolver = TokenManagerResolver(store, user_provider, settings, keys)
        first = resolver.get()

        settings.session_mode = "redis-token"

        assert resolver.get() is first
