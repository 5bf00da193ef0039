"""Results returned by the editor and deleter.

A result is the completion signal for one create/update/delete; the refresh
orchestrator is its only consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .records import EmployeeRecord


class MutationKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Outcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"  # user declined the confirmation
    IGNORED = "ignored"  # another request was already in flight


@dataclass(frozen=True)
class MutationResult:
    kind: MutationKind
    outcome: Outcome
    record_id: Optional[int] = None
    record: Optional[EmployeeRecord] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCEEDED

    @classmethod
    def succeeded(
        cls, kind: MutationKind, record_id: Optional[int], record: Optional[EmployeeRecord] = None
    ) -> "MutationResult":
        return cls(kind, Outcome.SUCCEEDED, record_id=record_id, record=record)

    @classmethod
    def failed(cls, kind: MutationKind, error: Exception, record_id: Optional[int] = None) -> "MutationResult":
        return cls(kind, Outcome.FAILED, record_id=record_id, error=error)
