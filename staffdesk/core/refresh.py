"""Single consumer of mutation results: refetch-on-write."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Set

from .list_loader import RecordListLoader
from .mutations import MutationResult
from .session import SessionContext, SessionTransition

logger = logging.getLogger(__name__)


class RefreshOrchestrator:
    """
    Reloads the list after every successful mutation and whenever a session
    is acquired. Losing the session empties the list.
    """

    def __init__(self, loader: RecordListLoader) -> None:
        self._loader = loader
        self._pending: Set["asyncio.Task[object]"] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def consume(self, result: MutationResult) -> bool:
        """Refresh for a successful result; returns whether a refresh ran."""

        if not result.ok:
            logger.debug("No refresh after %s %s", result.kind.value, result.outcome.value)
            return False
        await self._loader.load()
        return True

    def watch_session(self, context: SessionContext) -> None:
        self._unsubscribe = context.subscribe(self._on_session)

    def _on_session(self, transition: SessionTransition) -> None:
        if transition.acquired:
            if transition.previous is not None:
                # another user took over without a sign-out in between
                self._loader.clear()
            task = asyncio.get_running_loop().create_task(self._loader.load())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        elif transition.lost:
            self._loader.clear()

    async def wait_idle(self) -> None:
        """Wait for session-triggered loads that are still running."""

        while self._pending:
            await asyncio.gather(*list(self._pending))

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
