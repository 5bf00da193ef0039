"""User-facing notifications (toasts) raised by the record components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Variant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = Variant.DEFAULT


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


def success(description: str) -> Notification:
    return Notification("Success", description)


def error(description: str, title: str = "Error") -> Notification:
    return Notification(title, description, Variant.DESTRUCTIVE)


# Message catalogue
FETCH_FAILED = "Failed to fetch employees."
SAVE_FAILED = "Failed to save employee. Please try again."
DELETE_FAILED = "Failed to delete employee."
CREATED = "Employee added successfully!"
UPDATED = "Employee updated successfully!"
DELETED = "Employee deleted successfully!"
LOGIN_REQUIRED = "You must be logged in to manage employees."
AUTH_REQUIRED_TITLE = "Authentication Required"
SIGN_IN_PROMPT = "Please sign in to access employee management."
