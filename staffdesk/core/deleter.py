"""Confirmed, permanent deletion of a single employee record."""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Union

from ..services.api_client import APIClient, APIError, AuthError
from . import notifications as msg
from .mutations import MutationKind, MutationResult, Outcome
from .notifications import Notifier
from .session import SessionContext

logger = logging.getLogger(__name__)

CONFIRM_DELETE = "Are you sure you want to delete this employee?"

# May answer synchronously or hand back an awaitable (non-blocking dialogs)
Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


class RecordDeleter:
    def __init__(
        self,
        api: APIClient,
        context: SessionContext,
        notifier: Notifier,
        confirm: Confirm,
    ) -> None:
        self._api = api
        self._context = context
        self._notifier = notifier
        self._confirm = confirm
        self._deleting = False

    @property
    def deleting(self) -> bool:
        return self._deleting

    async def delete(self, record_id: int) -> MutationResult:
        if self._deleting:
            return MutationResult(MutationKind.DELETE, Outcome.IGNORED, record_id=record_id)

        answer = self._confirm(CONFIRM_DELETE)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return MutationResult(MutationKind.DELETE, Outcome.CANCELLED, record_id=record_id)

        if self._context.user_id is None:
            self._notifier.notify(msg.error(msg.LOGIN_REQUIRED))
            return MutationResult.failed(MutationKind.DELETE, AuthError(msg.LOGIN_REQUIRED), record_id)

        self._deleting = True
        try:
            await self._api.delete_employee(record_id)
        except APIError as exc:
            logger.exception("Error deleting employee %s", record_id)
            self._notifier.notify(msg.error(msg.DELETE_FAILED))
            return MutationResult.failed(MutationKind.DELETE, exc, record_id)
        finally:
            self._deleting = False

        self._notifier.notify(msg.success(msg.DELETED))
        return MutationResult.succeeded(MutationKind.DELETE, record_id)
