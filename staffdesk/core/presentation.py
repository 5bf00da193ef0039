"""Pure view-model helpers for the employee list and form."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from .records import EmployeeRecord

ACTIVE = "Active"
INACTIVE = "Inactive"

COLUMNS = (
    "Name",
    "Email",
    "Designation",
    "Department",
    "Salary",
    "Date of Joining",
    "Status",
)

Row = Tuple[str, str, str, str, str, str, str]


def status_label(record: EmployeeRecord) -> str:
    return INACTIVE if record.last_day_of_working else ACTIVE


def format_salary(value: float) -> str:
    if float(value).is_integer():
        return f"${value:,.0f}"
    return f"${value:,.2f}"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


def build_row(record: EmployeeRecord) -> Row:
    return (
        record.name,
        record.email,
        record.designation,
        record.department,
        format_salary(record.salary),
        format_date(record.date_of_joining),
        status_label(record),
    )


def build_rows(records: Iterable[EmployeeRecord]) -> List[Row]:
    return [build_row(r) for r in records]


def view_state(loading: bool, records: Sequence[EmployeeRecord]) -> str:
    """'loading' while a fetch runs, then 'empty' or 'list'."""
    if loading:
        return "loading"
    return "list" if records else "empty"


def employees_title(records: Sequence[EmployeeRecord]) -> str:
    return f"Employees ({len(records)})"
