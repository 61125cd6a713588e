"""
Tests for the platform auth client against a mocked HTTP transport.
"""
import json
import httpx
import pytest
from onboarding.modules.platform_auth import PlatformAuthClient, PlatformAuthError


def _client(handler, **kwargs):
    params = {
        "base_url": "https://project.example.co/",
        "anon_key": "anon-key",
        "service_role_key": "service-key",
        "transport": httpx.MockTransport(handler),
    }
    params.update(kwargs)
    return PlatformAuthClient(**params)


@pytest.mark.asyncio
async def test_sign_in_uses_password_grant():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers["apikey"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"access_token": "at", "refresh_token": "rt", "user": {"id": "u1"}})

    data = await _client(handler).sign_in_with_password("hr@company.com", "pw")

    assert seen["url"] == "https://project.example.co/auth/v1/token?grant_type=password"
    assert seen["apikey"] == "anon-key"
    assert seen["body"] == {"email": "hr@company.com", "password": "pw"}
    assert data["access_token"] == "at"


@pytest.mark.asyncio
async def test_sign_in_error_message_is_surfaced():
    def handler(request):
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

    with pytest.raises(PlatformAuthError) as exc:
        await _client(handler).sign_in_with_password("hr@company.com", "wrong")
    assert exc.value.message == "Invalid login credentials"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_get_user_sends_bearer_token():
    def handler(request):
        assert request.headers["Authorization"] == "Bearer user-token"
        assert request.url.path == "/auth/v1/user"
        return httpx.Response(200, json={"id": "u1", "email": "hr@company.com"})

    user = await _client(handler).get_user("user-token")
    assert user["id"] == "u1"


@pytest.mark.asyncio
async def test_sign_out_with_empty_response():
    def handler(request):
        assert request.url.path == "/auth/v1/logout"
        return httpx.Response(204)

    assert await _client(handler).sign_out("user-token") is None


@pytest.mark.asyncio
async def test_admin_create_user_uses_service_role():
    def handler(request):
        assert request.url.path == "/auth/v1/admin/users"
        assert request.headers["Authorization"] == "Bearer service-key"
        body = json.loads(request.content)
        assert body["email_confirm"] is True
        assert body["user_metadata"] == {"full_name": "Jane"}
        return httpx.Response(200, json={"id": "u2", "email": body["email"]})

    user = await _client(handler).admin_create_user("jane@company.com", "pw", {"full_name": "Jane"})
    assert user == {"id": "u2", "email": "jane@company.com"}


@pytest.mark.asyncio
async def test_admin_create_user_existing_account():
    def handler(request):
        return httpx.Response(422, json={"code": 422, "msg": "A user with this email address has already been registered"})

    with pytest.raises(PlatformAuthError) as exc:
        await _client(handler).admin_create_user("jane@company.com", "pw")
    assert exc.value.already_exists is True


@pytest.mark.asyncio
async def test_admin_create_user_requires_service_key():
    def handler(request):
        raise AssertionError("no request expected")

    client = _client(handler, service_role_key="")
    assert client.admin_configured is False
    with pytest.raises(PlatformAuthError) as exc:
        await client.admin_create_user("jane@company.com", "pw")
    assert exc.value.message == "Missing platform environment variables"


@pytest.mark.asyncio
async def test_unreachable_platform_is_503():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PlatformAuthError) as exc:
        await _client(handler).get_user("t")
    assert exc.value.status_code == 503


def test_already_exists_detection():
    assert PlatformAuthError("User already exists").already_exists is True
    assert PlatformAuthError("Password should be at least 6 characters").already_exists is False


@pytest.mark.asyncio
async def test_non_json_success_body_is_an_auth_error():
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(PlatformAuthError) as exc:
        await _client(handler).admin_create_user("jane@company.com", "pw")
    assert exc.value.status_code == 502
    assert exc.value.already_exists is False
