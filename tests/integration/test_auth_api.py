"""Authentication / Users API 통합 테스트 (fakeredis + mock DB 연결)."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from admin_auth.domains.permissions.service import DataPermissionService
from admin_auth.main import app
from admin_auth.shared.database.connection import get_db_connection
from admin_auth.shared.dependencies import get_data_permission_service, get_token_manager
from admin_auth.shared.security.jwt_token_manager import JwtTokenManager
from admin_auth.shared.security.password_hasher import password_hasher
from admin_auth.shared.security.redis_token_manager import RedisTokenManager

PASSWORD = "Admin123!"

USER_ROW = {
    "id": 42,
    "username": "admin",
    "nickname": "Admin",
    "dept_id": 7,
    "status": 1,
    "password": password_hasher.hash(PASSWORD),
}

ROLE_ROWS = [{"role_code": "ADMIN", "data_scope": 3, "dept_ids": []}]


@pytest.fixture
def db_connection() -> AsyncMock:
    return AsyncMock()


@pytest.fixture(params=["jwt", "redis-token"])
def token_manager(request, store, user_provider, settings, redis_settings, keys):
    if request.param == "jwt":
        return JwtTokenManager(store, user_provider, settings, keys)
    return RedisTokenManager(store, user_provider, redis_settings, keys)


@pytest_asyncio.fixture
async def client(token_manager, db_connection) -> AsyncGenerator[AsyncClient, None]:
    async def override_db_connection():
        yield db_connection

    app.dependency_overrides[get_token_manager] = lambda: token_manager
    app.dependency_overrides[get_db_connection] = override_db_connection

    with (
        patch(
            "admin_auth.domains.authentication.service.users_repository.get_user_by_username",
            AsyncMock(side_effect=lambda conn, name: USER_ROW if name == "admin" else None),
        ),
        patch(
            "admin_auth.domains.users.service.repository.get_user_role_scopes",
            AsyncMock(return_value=ROLE_ROWS),
        ),
    ):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac

    app.dependency_overrides.clear()


async def _login(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": PASSWORD}
    )
    assert response.status_code == 200
    return response.json()["data"]


@pytest.mark.asyncio
class TestLoginAPI:
    async def test_login_returns_camel_case_tokens(self, client):
        data = await _login(client)

        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 7200
        assert data["accessToken"]
        assert data["refreshToken"]

    async def test_login_wrong_password(self, client):
        response = await client.post(
            "/api/v1/auth/login", json={"username": "admin", "password": "wrong"}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "A0210"

    async def test_login_unknown_user(self, client):
        response = await client.post(
            "/api/v1/auth/login", json={"username": "ghost", "password": PASSWORD}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "A0201"

    async def test_login_missing_parameters(self, client):
        response = await client.post("/api/v1/auth/login", json={"username": "admin"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "A0410"


@pytest.mark.asyncio
class TestRefreshAPI:
    async def test_refresh_with_query_parameter(self, client, user_provider, sample_user):
        user_provider.add(sample_user)
        tokens = await _login(client)

        response = await client.post(
            "/api/v1/auth/refresh-token", params={"refreshToken": tokens["refreshToken"]}
        )

        assert response.status_code == 200
        assert response.json()["data"]["accessToken"] != tokens["accessToken"]

    async def test_refresh_with_json_body(self, client, user_provider, sample_user):
        user_provider.add(sample_user)
        tokens = await _login(client)

        response = await client.post(
            "/api/v1/auth/refresh-token", json={"refreshToken": tokens["refreshToken"]}
        )

        assert response.status_code == 200

    async def test_refresh_missing_token(self, client):
        response = await client.post("/api/v1/auth/refresh-token")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "A0231"

    async def test_refresh_with_access_token(self, client):
        tokens = await _login(client)

        response = await client.post(
            "/api/v1/auth/refresh-token", params={"refreshToken": tokens["accessToken"]}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "A0231"


@pytest.mark.asyncio
class TestLogoutAndProtectedAPI:
    async def test_user_page_requires_token(self, client):
        response = await client.get("/api/v1/users/page")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "A0301"

    async def test_user_page_with_invalid_token(self, client):
        response = await client.get(
            "/api/v1/users/page", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "A0230"

    async def test_user_page_scoped_to_caller_department(self, client, db_connection):
        """ADMIN(DEPT 범위) 사용자는 본인 부서(7) 사용자만 조회한다."""
        app.dependency_overrides[get_data_permission_service] = lambda: DataPermissionService(
            AsyncMock(return_value=[])
        )
        db_connection.fetchval.return_value = 1
        db_connection.fetch.return_value = [
            {"id": 42, "username": "admin", "nickname": "Admin", "dept_id": 7, "status": 1}
        ]
        tokens = await _login(client)

        response = await client.get(
            "/api/v1/users/page",
            params={"page": 1, "page_size": 20},
            headers={"Authorization": f"Bearer {tokens['accessToken']}"},
        )

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["total"] == 1
        assert page["items"][0]["username"] == "admin"
        count_sql, *count_params = db_connection.fetchval.call_args.args
        assert count_sql.endswith("WHERE u.is_deleted = $1 AND u.dept_id = $2")
        assert count_params == [0, 7]

    async def test_logout_revokes_access_token(self, client):
        tokens = await _login(client)
        headers = {"Authorization": f"Bearer {tokens['accessToken']}"}

        response = await client.request(
            "DELETE",
            "/api/v1/auth/logout",
            headers=headers,
            json={"refreshToken": tokens["refreshToken"]},
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = await client.get("/api/v1/users/page", headers=headers)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "A0230"

    async def test_logout_without_token_succeeds(self, client):
        response = await client.delete("/api/v1/auth/logout")

        assert response.status_code == 200
