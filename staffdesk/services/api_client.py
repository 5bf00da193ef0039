"""
HTTP client for the StaffDesk backend.

Usage pattern:

    from staffdesk.services.api_client import APIClient

    client = APIClient("http://127.0.0.1:8000")
    await client.login(username="owner", password="secret", account_id="acme")
    rows = await client.list_employees()
    await client.close()

Every failure surfaces as ``APIError``; rejected or missing credentials as its
subclass ``AuthError``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


# -----------------------------
# Error types
# -----------------------------


class APIError(Exception):
    """The backend rejected the call or could not be reached."""


class AuthError(APIError):
    """No token, or the backend refused the credentials/token."""


@dataclass
class TokenInfo:
    access_token: str
    expires_at: Optional[str] = None  # ISO8601, as sent by the backend


def _check(resp: httpx.Response, what: str) -> httpx.Response:
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise APIError(f"{what} failed ({resp.status_code}): {resp.text}") from exc
    return resp


def _token_from(data: Dict[str, Any], what: str) -> TokenInfo:
    token = TokenInfo(access_token=data.get("access_token") or "", expires_at=data.get("expires_at"))
    if not token.access_token:
        raise APIError(f"{what} did not return an access token")
    return token


# -----------------------------
# Main API client
# -----------------------------


class APIClient:
    """
    Async client holding one bearer token.

    ``on_unauthorized`` is called whenever an authenticated request comes back
    401, after the token has been dropped, so the session owner can announce
    the sign-out.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url: str = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._token: Optional[TokenInfo] = None
        self.on_unauthorized: Optional[Callable[[], None]] = None

    # ---------- plumbing ----------

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _get_auth_header(self) -> Dict[str, str]:
        if not self.has_token():
            raise AuthError("Not signed in")
        return {"Authorization": f"Bearer {self._token.access_token}"}  # type: ignore[union-attr]

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = await self._ensure_client()
        try:
            return await client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise APIError(f"{method} {path}: cannot reach {self.base_url} ({exc})") from exc

    async def _authed(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        resp = await self._send(method, path, headers=self._get_auth_header(), **kwargs)
        if resp.status_code == 401:
            logger.warning("%s %s returned 401; dropping token", method, path)
            self._token = None
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            raise AuthError(f"{method} {path}: token missing or expired")
        return _check(resp, f"{method} {path}")

    # ---------- token ----------

    def has_token(self) -> bool:
        return bool(self._token and self._token.access_token)

    @property
    def token(self) -> Optional[TokenInfo]:
        return self._token

    def set_token(self, access_token: str, expires_at: Optional[str] = None) -> None:
        """Install a token restored from disk."""

        if not access_token:
            raise ValueError("access_token cannot be empty")
        self._token = TokenInfo(access_token=access_token, expires_at=expires_at)

    def clear_token(self) -> None:
        self._token = None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ---------- unauthenticated ----------

    async def health(self) -> Dict[str, Any]:
        return _check(await self._send("GET", "/health"), "GET /health").json()

    async def login(self, username: str, password: str, account_id: str) -> TokenInfo:
        """Exchange credentials for a token and keep it for later calls."""

        body = {"username": username, "password": password, "account_id": account_id}
        resp = await self._send("POST", "/auth/login", json=body)
        if resp.status_code == 401:
            raise AuthError("Invalid username, password, or account")
        self._token = _token_from(_check(resp, "POST /auth/login").json(), "Login")
        return self._token

    async def register_user(
        self,
        username: str,
        password: str,
        account_id: str,
        email: str = "",
    ) -> Dict[str, Any]:
        body = {"username": username, "password": password, "account_id": account_id, "email": email}
        resp = await self._send("POST", "/auth/register", json=body)
        if resp.status_code == 400:
            # e.g. {"detail": "Username already exists"}
            raise APIError(f"Registration refused: {resp.json().get('detail', resp.text)}")
        return _check(resp, "POST /auth/register").json()

    # ---------- session ----------

    async def get_user(self) -> Dict[str, Any]:
        """The principal behind the current token."""
        return (await self._authed("GET", "/auth/me")).json()

    async def refresh(self) -> TokenInfo:
        self._token = _token_from((await self._authed("POST", "/auth/refresh")).json(), "Refresh")
        return self._token

    async def logout(self) -> None:
        """Tell the backend, then forget the token whatever the outcome."""

        try:
            if self.has_token():
                await self._authed("POST", "/auth/logout")
        finally:
            self._token = None

    # ---------- employees ----------

    async def list_employees(self) -> List[Dict[str, Any]]:
        """All employees in the caller's account, newest first."""

        data = (await self._authed("GET", "/employees/")).json()
        if not isinstance(data, list):
            raise APIError("Expected a list from GET /employees/")
        return data

    async def get_employee(self, emp_id: int) -> Dict[str, Any]:
        return (await self._authed("GET", f"/employees/{emp_id}")).json()

    async def create_employee(self, employee_data: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._authed("POST", "/employees/", json=employee_data)).json()

    async def update_employee(self, emp_id: int, employee_data: Dict[str, Any]) -> Dict[str, Any]:
        """Full overwrite: every field in ``employee_data`` replaces the stored one."""
        return (await self._authed("PUT", f"/employees/{emp_id}", json=employee_data)).json()

    async def delete_employee(self, emp_id: int) -> None:
        await self._authed("DELETE", f"/employees/{emp_id}")


# -----------------------------
# Manual check
# -----------------------------


async def _demo(base_url: str) -> None:
    """
    Ping /health.

        python -m staffdesk.services.api_client
    """
    client = APIClient(base_url)
    try:
        print(f"Base URL: {client.base_url}")
        print(await client.health())
    finally:
        await client.close()


if __name__ == "__main__":
    from staffdesk.core.config import load_settings

    asyncio.run(_demo(load_settings().api_base_url))
