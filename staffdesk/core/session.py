"""Session context shared by every component of the client.

The context holds the current session (or ``None``). Exactly one writer, the
session watcher, may change it; everything else reads ``current`` and
``user_id`` or observes transitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True)
class Session:
    """An authenticated principal as reported by the backend."""

    user_id: int
    username: str
    account_id: str
    access_token: str
    expires_at: Optional[str] = None


@dataclass(frozen=True)
class SessionTransition:
    """One applied auth event: what the session was and what it is now."""

    event: AuthEvent
    previous: Optional[Session]
    current: Optional[Session]
    had_session_before: bool

    @property
    def acquired(self) -> bool:
        """A session appeared, or a different user took over."""
        if self.current is None:
            return False
        return self.previous is None or self.previous.user_id != self.current.user_id

    @property
    def lost(self) -> bool:
        return self.previous is not None and self.current is None

    @property
    def should_redirect(self) -> bool:
        """Whether the sign-in view must be forced.

        The start-up check finding nothing, when nothing was ever held, is
        not a loss of session; the app simply opens on the sign-in view.
        """
        if self.current is not None:
            return False
        if self.event is AuthEvent.INITIAL_SESSION and not self.had_session_before:
            return False
        return True


SessionObserver = Callable[[SessionTransition], None]


class SessionContext:
    """Read-only view of the current session plus transition observers."""

    def __init__(self) -> None:
        self._current: Optional[Session] = None
        self._had_session = False
        self._observers: List[SessionObserver] = []
        self._writer: Optional[SessionWriter] = None

    @property
    def current(self) -> Optional[Session]:
        return self._current

    @property
    def user_id(self) -> Optional[int]:
        return self._current.user_id if self._current else None

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def has_had_session(self) -> bool:
        return self._had_session

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it."""

        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def claim_writer(self) -> "SessionWriter":
        """Hand out the single writer. A second claim is a wiring bug."""

        if self._writer is not None:
            raise RuntimeError("SessionContext already has a writer")
        self._writer = SessionWriter(self)
        return self._writer

    def release_writer(self, writer: "SessionWriter") -> None:
        if self._writer is writer:
            self._writer = None

    def _apply(self, event: AuthEvent, session: Optional[Session]) -> SessionTransition:
        transition = SessionTransition(
            event=event,
            previous=self._current,
            current=session,
            had_session_before=self._had_session,
        )
        self._current = session
        if session is not None:
            self._had_session = True

        logger.debug(
            "Session %s: %s -> %s",
            event.value,
            transition.previous.username if transition.previous else None,
            session.username if session else None,
        )
        for observer in list(self._observers):
            try:
                observer(transition)
            except Exception:
                logger.exception("Session observer %r failed", observer)
        return transition


class SessionWriter:
    """Write handle for a SessionContext; obtained via ``claim_writer``."""

    def __init__(self, context: SessionContext) -> None:
        self._context = context

    def apply(self, event: AuthEvent, session: Optional[Session]) -> SessionTransition:
        return self._context._apply(event, session)
