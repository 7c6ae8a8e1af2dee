"""Redis 키 템플릿 테스트."""

from admin_auth.shared.security.config import RedisKeySettings
from admin_auth.shared.security.redis_keys import format_key


class TestFormatKey:
    def test_single_placeholder(self):
        assert format_key("auth:user:access:{}", 42) == "auth:user:access:42"

    def test_placeholders_filled_left_to_right(self):
        assert format_key("a:{}:b:{}", 1, "x") == "a:1:b:x"

    def test_surplus_placeholders_kept(self):
        assert format_key("a:{}:b:{}", 1) == "a:1:b:{}"

    def test_surplus_args_ignored(self):
        assert format_key("a:{}", 1, 2) == "a:1"

    def test_argument_containing_placeholder_not_rescanned(self):
        assert format_key("a:{}:b:{}", "{}", 2) == "a:{}:b:2"

    def test_no_placeholder(self):
        assert format_key("static", 1) == "static"

    def test_default_templates(self):
        keys = RedisKeySettings()

        assert format_key(keys.user_security_version, 5) == "auth:user:security_version:5"
        assert format_key(keys.blacklist_token, "abc") == "auth:token:blacklist:abc"
