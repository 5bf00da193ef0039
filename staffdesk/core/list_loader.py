"""Loads the employee list for the signed-in user."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..services.api_client import APIClient, APIError
from . import notifications as msg
from .notifications import Notifier
from .records import EmployeeRecord
from .session import SessionContext

logger = logging.getLogger(__name__)

ChangeListener = Callable[["RecordListLoader"], None]


class RecordListLoader:
    """
    Holds the in-memory list and refetches it on demand.

    A failed fetch keeps the previous list. Overlapping loads are allowed and
    the one that finishes last decides the list. ``loading`` is true until a
    load has finished for the current session. A fetch that returns after the
    list was cleared, or after another user signed in, is dropped.
    """

    def __init__(self, api: APIClient, context: SessionContext, notifier: Notifier) -> None:
        self._api = api
        self._context = context
        self._notifier = notifier
        self._records: List[EmployeeRecord] = []
        self._loading = True
        self._generation = 0
        self._listeners: List[ChangeListener] = []

    @property
    def records(self) -> List[EmployeeRecord]:
        return list(self._records)

    @property
    def loading(self) -> bool:
        return self._loading

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set_loading(self, value: bool) -> None:
        self._loading = value
        self._changed()

    def _is_stale(self, generation: int, user_id: Optional[int]) -> bool:
        if generation == self._generation and user_id == self._context.user_id:
            return False
        logger.info("Dropping employee list fetched for user %s; session changed", user_id)
        return True

    def clear(self) -> None:
        """Forget the list; fetches still in flight will not repopulate it."""

        self._generation += 1
        self._records = []
        self._loading = True
        self._changed()

    async def load(self) -> List[EmployeeRecord]:
        if not self._context.is_authenticated:
            return self.records

        generation = self._generation
        user_id = self._context.user_id
        self._set_loading(True)

        try:
            rows = await self._api.list_employees()
            records = [EmployeeRecord.from_api(row) for row in rows]
        except (APIError, ValueError):
            if self._is_stale(generation, user_id):
                return self.records
            logger.exception("Error fetching employees")
            self._notifier.notify(msg.error(msg.FETCH_FAILED))
        else:
            if self._is_stale(generation, user_id):
                return self.records
            self._records = records
        self._set_loading(False)
        return self.records
