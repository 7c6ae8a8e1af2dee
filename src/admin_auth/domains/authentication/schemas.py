"""Authentication 도메인 Pydantic 스키마"""

from pydantic import Field

from admin_auth.shared.security.models import AuthenticationToken, CamelModel


class LoginRequest(CamelModel):
    """로그인 요청

    누락된 값은 빈 문자열로 받아 서비스에서 A0410으로 거절한다.
    """

    username: str = Field("", max_length=64, description="사용자명")
    password: str = Field("", max_length=128, description="비밀번호")


class RefreshTokenRequest(CamelModel):
    """토큰 갱신 요청 (JSON 본문)"""

    refresh_token: str = Field("", description="리프레시 토큰")


class LogoutRequest(CamelModel):
    """로그아웃 요청"""

    refresh_token: str | None = Field(None, description="리프레시 토큰 (전달 시 해당 토큰도 폐기)")


TokenResponse = AuthenticationToken
