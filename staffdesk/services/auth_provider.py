"""
Authentication provider: the client's view of the identity service.

Offers a session pull (``get_session``), a push subscription for session
changes (``on_auth_state_change``), sign-in, token refresh and sign-out. The
access token is persisted in a small JSON file so a restarted client can pick
the session up again on its first pull.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, List, Optional

from ..core.session import AuthEvent, Session
from .api_client import APIClient, APIError, AuthError, TokenInfo

logger = logging.getLogger(__name__)

AuthCallback = Callable[[AuthEvent, Optional[Session]], None]


class SessionStore:
    """Persists the access token between runs.

    Structure:
    {
      "access_token": "...",
      "expires_at": "2025-11-19T13:15:24.193355"
    }
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[TokenInfo]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return None
        if not isinstance(data, dict) or not data.get("access_token"):
            return None
        return TokenInfo(access_token=str(data["access_token"]), expires_at=data.get("expires_at"))

    def save(self, token: TokenInfo) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump({"access_token": token.access_token, "expires_at": token.expires_at}, f)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class Subscription:
    """Handle returned by ``on_auth_state_change``."""

    def __init__(self, provider: "AuthProvider", callback: AuthCallback) -> None:
        self._provider = provider
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._provider._remove(self)


class AuthProvider:
    def __init__(self, api: APIClient, store: Optional[SessionStore] = None) -> None:
        self._api = api
        self._store = store
        self._session: Optional[Session] = None
        self._subscriptions: List[Subscription] = []
        api.on_unauthorized = self._handle_unauthorized

    @property
    def session(self) -> Optional[Session]:
        return self._session

    # ---------- push ----------

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)

    def _emit(self, event: AuthEvent) -> None:
        logger.info("Auth event %s", event.value)
        for sub in list(self._subscriptions):
            if not sub.active:
                continue
            try:
                sub.callback(event, self._session)
            except Exception:
                logger.exception("Auth state callback failed for %s", event.value)

    def _handle_unauthorized(self) -> None:
        # Only a session we actually held can be "lost"
        if self._session is None:
            return
        self._session = None
        if self._store is not None:
            self._store.clear()
        self._emit(AuthEvent.SIGNED_OUT)

    # ---------- pull ----------

    async def _resolve(self, token: TokenInfo) -> Session:
        user = await self._api.get_user()
        return Session(
            user_id=int(user["id"]),
            username=str(user.get("username", "")),
            account_id=str(user.get("account_id", "")),
            access_token=token.access_token,
            expires_at=token.expires_at,
        )

    async def get_session(self) -> Optional[Session]:
        """Return the current session, restoring and validating a stored token."""

        if self._session is not None:
            return self._session

        token = self._api.token
        if token is None and self._store is not None:
            token = self._store.load()
            if token is not None:
                self._api.set_token(token.access_token, token.expires_at)
        if token is None:
            return None

        try:
            self._session = await self._resolve(token)
        except AuthError:
            logger.info("Stored session is no longer valid")
            self._api.clear_token()
            if self._store is not None:
                self._store.clear()
            return None
        return self._session

    # ---------- commands ----------

    async def sign_in(self, username: str, password: str, account_id: str) -> Session:
        token = await self._api.login(username=username, password=password, account_id=account_id)
        self._session = await self._resolve(token)
        if self._store is not None:
            self._store.save(token)
        self._emit(AuthEvent.SIGNED_IN)
        return self._session

    async def refresh_session(self) -> Session:
        if self._session is None:
            raise AuthError("No session to refresh")
        token = await self._api.refresh()
        self._session = await self._resolve(token)
        if self._store is not None:
            self._store.save(token)
        self._emit(AuthEvent.TOKEN_REFRESHED)
        return self._session

    async def sign_out(self) -> None:
        """Drop the session locally; a failing logout call is only logged."""

        try:
            await self._api.logout()
        except APIError:
            logger.warning("Backend logout failed; signing out locally", exc_info=True)
        had_session = self._session is not None
        self._session = None
        if self._store is not None:
            self._store.clear()
        if had_session:
            self._emit(AuthEvent.SIGNED_OUT)
