"""Tests for the HTTP client using httpx.MockTransport."""
import json

import httpx
import pytest

from staffdesk.services.api_client import APIClient, APIError, AuthError


def _client(handler) -> APIClient:
    return APIClient("http://backend.test/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_login_stores_token_and_sends_bearer() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/auth/login":
            body = json.loads(request.content)
            assert body == {"username": "owner", "password": "pw", "account_id": "acme"}
            return httpx.Response(200, json={"access_token": "abc", "expires_at": "2030-01-01T00:00:00"})
        return httpx.Response(200, json=[])

    api = _client(handler)
    token = await api.login("owner", "pw", "acme")
    assert token.access_token == "abc"
    assert api.has_token()

    assert await api.list_employees() == []
    assert seen[-1].headers["Authorization"] == "Bearer abc"
    assert seen[-1].url.path == "/employees/"
    await api.close()


@pytest.mark.asyncio
async def test_login_rejected_raises_auth_error() -> None:
    api = _client(lambda request: httpx.Response(401, json={"detail": "Invalid credentials"}))
    with pytest.raises(AuthError):
        await api.login("owner", "bad", "acme")
    assert not api.has_token()


@pytest.mark.asyncio
async def test_authed_call_without_token_raises() -> None:
    api = _client(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(AuthError):
        await api.list_employees()


@pytest.mark.asyncio
async def test_unauthorized_response_drops_token_and_calls_hook() -> None:
    calls = []
    api = _client(lambda request: httpx.Response(401, json={"detail": "expired"}))
    api.set_token("stale")
    api.on_unauthorized = lambda: calls.append(True)

    with pytest.raises(AuthError):
        await api.get_user()

    assert calls == [True]
    assert api.token is None


@pytest.mark.asyncio
async def test_server_error_maps_to_api_error() -> None:
    api = _client(lambda request: httpx.Response(500, text="database is locked"))
    api.set_token("tok")

    with pytest.raises(APIError) as excinfo:
        await api.create_employee({"name": "Ana Ruiz"})

    assert not isinstance(excinfo.value, AuthError)
    assert "database is locked" in str(excinfo.value)
    assert api.has_token()


@pytest.mark.asyncio
async def test_network_error_maps_to_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = _client(handler)
    api.set_token("tok")
    with pytest.raises(APIError):
        await api.delete_employee(3)


@pytest.mark.asyncio
async def test_update_sends_full_record_with_put() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 5})

    api = _client(handler)
    api.set_token("tok")
    await api.update_employee(5, {"name": "Ana Ruiz", "last_day_of_working": None})

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/employees/5"
    assert json.loads(seen[0].content)["last_day_of_working"] is None


@pytest.mark.asyncio
async def test_list_must_be_a_list() -> None:
    api = _client(lambda request: httpx.Response(200, json={"items": []}))
    api.set_token("tok")
    with pytest.raises(APIError):
        await api.list_employees()


@pytest.mark.asyncio
async def test_logout_forgets_token_even_when_call_fails() -> None:
    api = _client(lambda request: httpx.Response(500))
    api.set_token("tok")
    with pytest.raises(APIError):
        await api.logout()
    assert api.token is None


def test_set_token_rejects_empty() -> None:
    api = APIClient("http://backend.test")
    with pytest.raises(ValueError):
        api.set_token("")
