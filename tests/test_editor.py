"""Tests for the create/update editor."""
import asyncio
from unittest.mock import AsyncMock

import pytest

from staffdesk.core import notifications as msg
from staffdesk.core.editor import RecordEditor
from staffdesk.core.mutations import MutationKind, Outcome
from staffdesk.core.records import EmployeeRecord, RecordValidationError
from staffdesk.services.api_client import APIError, AuthError


def _fill(editor: RecordEditor) -> None:
    f = editor.form
    f.name = "Ana Ruiz"
    f.email = "ana@x.com"
    f.designation = "Engineer"
    f.department = "R&D"
    f.salary = 90000
    f.date_of_joining = "2024-01-15"


@pytest.mark.asyncio
async def test_create_inserts_with_current_user(api, signed_in, notifier, make_row) -> None:
    api.create_employee.return_value = make_row(11)
    editor = RecordEditor(api, signed_in, notifier)
    _fill(editor)

    result = await editor.submit()

    payload = api.create_employee.await_args.args[0]
    assert payload["user_id"] == 7
    assert payload["last_day_of_working"] is None
    assert result.ok and result.kind is MutationKind.CREATE
    assert result.record_id == 11
    assert notifier.successes == [msg.CREATED]
    api.update_employee.assert_not_awaited()


@pytest.mark.asyncio
async def test_edit_overwrites_by_id(api, signed_in, notifier, make_row) -> None:
    record = EmployeeRecord.from_api(make_row(4))
    api.update_employee.return_value = make_row(4, last_day_of_working="2024-06-30")
    editor = RecordEditor(api, signed_in, notifier, record)
    editor.form.last_day_of_working = "2024-06-30"

    result = await editor.submit()

    emp_id, payload = api.update_employee.await_args.args
    assert emp_id == 4
    assert payload["last_day_of_working"] == "2024-06-30"
    assert payload["name"] == "Ana Ruiz"
    assert result.kind is MutationKind.UPDATE
    assert not result.record.is_active
    assert notifier.successes == [msg.UPDATED]


def test_labels_follow_mode(api, context, notifier, make_row) -> None:
    creating = RecordEditor(api, context, notifier)
    editing = RecordEditor(api, context, notifier, EmployeeRecord.from_api(make_row(1)))

    assert (creating.title, creating.submit_label) == ("Add New Employee", "Add Employee")
    assert (editing.title, editing.submit_label) == ("Edit Employee", "Update Employee")
    assert editing.form.name == "Ana Ruiz"


@pytest.mark.asyncio
async def test_submit_without_session_sends_nothing(api, context, notifier) -> None:
    editor = RecordEditor(api, context, notifier)
    _fill(editor)

    result = await editor.submit()

    assert result.outcome is Outcome.FAILED
    assert isinstance(result.error, AuthError)
    assert notifier.errors == [msg.LOGIN_REQUIRED]
    api.create_employee.assert_not_awaited()


@pytest.mark.asyncio
async def test_validation_failure_keeps_form(api, signed_in, notifier) -> None:
    editor = RecordEditor(api, signed_in, notifier)
    _fill(editor)
    editor.form.email = ""

    result = await editor.submit()

    assert isinstance(result.error, RecordValidationError)
    assert notifier.errors == ["Email is required."]
    assert editor.form.name == "Ana Ruiz"
    api.create_employee.assert_not_awaited()


@pytest.mark.asyncio
async def test_backend_failure_notifies_and_keeps_form(api, signed_in, notifier) -> None:
    api.create_employee.side_effect = APIError("500")
    editor = RecordEditor(api, signed_in, notifier)
    _fill(editor)

    result = await editor.submit()

    assert result.outcome is Outcome.FAILED
    assert notifier.errors == [msg.SAVE_FAILED]
    assert editor.form.department == "R&D"
    assert not editor.submitting


@pytest.mark.asyncio
async def test_second_submit_while_in_flight_is_ignored(api, signed_in, notifier, make_row) -> None:
    gate = asyncio.Event()

    async def slow_create(payload):
        await gate.wait()
        return make_row(1)

    api.create_employee = AsyncMock(side_effect=slow_create)
    editor = RecordEditor(api, signed_in, notifier)
    _fill(editor)

    first = asyncio.create_task(editor.submit())
    await asyncio.sleep(0)
    assert editor.submitting
    assert editor.submit_label == "Saving..."
    second = await editor.submit()
    gate.set()

    assert second.outcome is Outcome.IGNORED
    assert (await first).ok
    assert api.create_employee.await_count == 1
