"""Keeps the session context in step with the auth provider."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..services.api_client import APIError
from ..services.auth_provider import AuthProvider, Subscription
from .session import AuthEvent, Session, SessionContext, SessionTransition

logger = logging.getLogger(__name__)


class SessionWatcher:
    """
    The only writer of a SessionContext.

    ``start()`` subscribes to pushed auth events first and then pulls the
    current session once, so a session that exists before the first push is
    still picked up. Whichever update arrives last wins. After ``stop()``
    late completions are dropped.
    """

    def __init__(self, provider: AuthProvider, context: SessionContext) -> None:
        self._provider = provider
        self._context = context
        self._writer = context.claim_writer()
        self._subscription: Optional[Subscription] = None
        self._alive = False

    @property
    def alive(self) -> bool:
        return self._alive

    async def start(self) -> None:
        self._alive = True
        self._subscription = self._provider.on_auth_state_change(self._on_auth_event)
        try:
            session = await self._provider.get_session()
        except APIError:
            logger.exception("Initial session check failed")
            session = None
        if not self._alive:
            logger.debug("Watcher stopped before the initial session check finished")
            return
        self._writer.apply(AuthEvent.INITIAL_SESSION, session)

    def _on_auth_event(self, event: AuthEvent, session: Optional[Session]) -> None:
        if not self._alive:
            return
        self._writer.apply(event, session)

    def stop(self) -> None:
        self._alive = False
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._context.release_writer(self._writer)


class SignInRedirect:
    """Drives navigation to the sign-in view from session transitions."""

    def __init__(self, context: SessionContext, navigate: Callable[[], None]) -> None:
        self._navigate = navigate
        self._unsubscribe = context.subscribe(self)

    def __call__(self, transition: SessionTransition) -> None:
        if transition.should_redirect:
            logger.info("Session ended (%s); showing sign-in", transition.event.value)
            self._navigate()

    def close(self) -> None:
        self._unsubscribe()
