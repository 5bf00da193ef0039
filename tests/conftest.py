"""Shared fixtures for the client component tests."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from staffdesk.core.notifications import Notification, Variant
from staffdesk.core.session import AuthEvent, Session, SessionContext
from staffdesk.services.api_client import APIClient


class RecordingNotifier:
    """Collects notifications instead of showing them."""

    def __init__(self) -> None:
        self.items: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.items.append(notification)

    @property
    def errors(self) -> list[str]:
        return [n.description for n in self.items if n.variant is Variant.DESTRUCTIVE]

    @property
    def successes(self) -> list[str]:
        return [n.description for n in self.items if n.variant is Variant.DEFAULT]


def _employee_row(emp_id: int, name: str = "Ana Ruiz", **overrides) -> dict:
    row = {
        "id": emp_id,
        "name": name,
        "email": f"{name.split()[0].lower()}@x.com",
        "designation": "Engineer",
        "department": "R&D",
        "salary": 90000,
        "date_of_joining": "2024-01-15",
        "last_day_of_working": None,
        "user_id": 7,
        "created_at": f"2024-02-0{emp_id % 9 + 1}T10:00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_row():
    """Factory for employee dicts shaped like the backend responses."""

    return _employee_row


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def session() -> Session:
    return Session(user_id=7, username="owner", account_id="acme", access_token="tok")


@pytest.fixture
def context() -> SessionContext:
    return SessionContext()


@pytest.fixture
def signed_in(context: SessionContext, session: Session) -> SessionContext:
    """A context that already holds a session."""

    writer = context.claim_writer()
    writer.apply(AuthEvent.INITIAL_SESSION, session)
    context.release_writer(writer)
    return context


@pytest.fixture
def api() -> MagicMock:
    """APIClient double with every network call mocked."""

    client = MagicMock(spec=APIClient)
    client.list_employees = AsyncMock(return_value=[])
    client.create_employee = AsyncMock()
    client.update_employee = AsyncMock()
    client.delete_employee = AsyncMock(return_value=None)
    client.get_user = AsyncMock()
    client.login = AsyncMock()
    client.logout = AsyncMock(return_value=None)
    client.refresh = AsyncMock()
    client.token = None
    return client
