"""Create/update form logic for a single employee record."""

from __future__ import annotations

import logging
from typing import Optional

from ..services.api_client import APIClient, APIError, AuthError
from . import notifications as msg
from .mutations import MutationKind, MutationResult, Outcome
from .notifications import Notifier
from .records import EmployeeForm, EmployeeRecord, RecordValidationError
from .session import SessionContext

logger = logging.getLogger(__name__)


class RecordEditor:
    """
    Binds a form to one record.

    Without a record the editor inserts; with one it overwrites that record by
    id. ``submit()`` never raises for expected failures: it notifies the user
    and returns a failed MutationResult, leaving the form untouched.
    """

    def __init__(
        self,
        api: APIClient,
        context: SessionContext,
        notifier: Notifier,
        record: Optional[EmployeeRecord] = None,
    ) -> None:
        self._api = api
        self._context = context
        self._notifier = notifier
        self.record = record
        self.form = EmployeeForm.from_record(record) if record else EmployeeForm()
        self._submitting = False

    @property
    def is_editing(self) -> bool:
        return self.record is not None

    @property
    def kind(self) -> MutationKind:
        return MutationKind.UPDATE if self.is_editing else MutationKind.CREATE

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def title(self) -> str:
        return "Edit Employee" if self.is_editing else "Add New Employee"

    @property
    def submit_label(self) -> str:
        if self._submitting:
            return "Saving..."
        return "Update Employee" if self.is_editing else "Add Employee"

    async def submit(self) -> MutationResult:
        record_id = self.record.id if self.record else None
        if self._submitting:
            return MutationResult(self.kind, Outcome.IGNORED, record_id=record_id)

        self._submitting = True
        try:
            # Resolved at submit time; the session may have changed since the form opened
            user_id = self._context.user_id
            if user_id is None:
                self._notifier.notify(msg.error(msg.LOGIN_REQUIRED))
                return MutationResult.failed(self.kind, AuthError(msg.LOGIN_REQUIRED), record_id)

            try:
                payload = self.form.to_payload(user_id)
            except RecordValidationError as exc:
                self._notifier.notify(msg.error(str(exc)))
                return MutationResult.failed(self.kind, exc, record_id)

            try:
                if record_id is not None:
                    data = await self._api.update_employee(record_id, payload)
                else:
                    data = await self._api.create_employee(payload)
                saved = EmployeeRecord.from_api(data)
            except (APIError, ValueError) as exc:
                logger.exception("Error saving employee")
                self._notifier.notify(msg.error(msg.SAVE_FAILED))
                return MutationResult.failed(self.kind, exc, record_id)

            self._notifier.notify(msg.success(msg.UPDATED if self.is_editing else msg.CREATED))
            return MutationResult.succeeded(self.kind, saved.id, saved)
        finally:
            self._submitting = False
