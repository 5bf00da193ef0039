"""Employee record and the editable form that produces insert/update payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

REQUIRED_FIELDS = (
    "name",
    "email",
    "designation",
    "department",
    "salary",
    "date_of_joining",
)

FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "designation": "Designation",
    "department": "Department",
    "salary": "Salary",
    "date_of_joining": "Date of Joining",
    "last_day_of_working": "Last Day of Working",
}


class RecordValidationError(ValueError):
    """Raised when a form is submitted with required fields missing or malformed."""

    def __init__(self, message: str, fields: List[str]) -> None:
        super().__init__(message)
        self.fields = fields


def _parse_date(value: Union[str, date, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


@dataclass
class EmployeeRecord:
    """One employee row as returned by the backend."""

    id: int
    name: str
    email: str
    designation: str
    department: str
    salary: float
    date_of_joining: date
    last_day_of_working: Optional[date] = None
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.last_day_of_working is None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "EmployeeRecord":
        """Build a record from an API dict; raises ValueError on malformed data."""

        try:
            created = data.get("created_at")
            return cls(
                id=int(data["id"]),
                name=str(data["name"]),
                email=str(data["email"]),
                designation=str(data["designation"]),
                department=str(data["department"]),
                salary=float(data["salary"]),
                date_of_joining=_parse_date(data["date_of_joining"]),
                last_day_of_working=_parse_date(data.get("last_day_of_working")),
                user_id=int(data["user_id"]) if data.get("user_id") is not None else None,
                created_at=datetime.fromisoformat(created) if created else None,
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed employee payload: {data!r}") from exc


@dataclass
class EmployeeForm:
    """Editable field values, kept as entered until submission."""

    name: str = ""
    email: str = ""
    designation: str = ""
    department: str = ""
    salary: Union[float, str, None] = 0
    date_of_joining: Union[str, date, None] = ""
    last_day_of_working: Union[str, date, None] = ""
    errors: Dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_record(cls, record: EmployeeRecord) -> "EmployeeForm":
        return cls(
            name=record.name,
            email=record.email,
            designation=record.designation,
            department=record.department,
            salary=record.salary,
            date_of_joining=record.date_of_joining,
            last_day_of_working=record.last_day_of_working or "",
        )

    def missing_fields(self) -> List[str]:
        missing = []
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def to_payload(self, user_id: int) -> Dict[str, Any]:
        """Validate and return the full-record payload stamped with ``user_id``.

        A blank last day of working becomes ``None``.
        """

        self.errors = {}
        for name in self.missing_fields():
            self.errors[name] = f"{FIELD_LABELS[name]} is required."

        salary: Optional[float] = None
        if "salary" not in self.errors:
            try:
                salary = float(self.salary)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                self.errors["salary"] = "Salary must be a number."
            else:
                if salary < 0:
                    self.errors["salary"] = "Salary cannot be negative."

        dates: Dict[str, Optional[date]] = {}
        for name in ("date_of_joining", "last_day_of_working"):
            if name in self.errors:
                continue
            try:
                dates[name] = _parse_date(getattr(self, name))
            except ValueError:
                self.errors[name] = f"{FIELD_LABELS[name]} must be a date (YYYY-MM-DD)."

        if self.errors:
            fields = list(self.errors)
            raise RecordValidationError(" ".join(self.errors.values()), fields)

        last_day = dates["last_day_of_working"]
        return {
            "name": self.name.strip(),
            "email": self.email.strip(),
            "designation": self.designation.strip(),
            "department": self.department.strip(),
            "salary": salary,
            "date_of_joining": dates["date_of_joining"].isoformat(),
            "last_day_of_working": last_day.isoformat() if last_day else None,
            "user_id": user_id,
        }
