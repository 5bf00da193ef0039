"""Pydantic schemas used across the backend API."""
from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class TokenData(BaseModel):
    """Information encoded into JWTs."""

    uid: int
    username: str
    account_id: str


class UserLogin(BaseModel):
    """Credentials supplied during login."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    account_id: str = Field(min_length=1)


class UserCreate(UserLogin):
    """Payload for user registration."""

    email: str | None = None


class UserRead(BaseModel):
    """Public representation of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    account_id: str
    email: str | None = None


class EmployeeBase(BaseModel):
    """Fields the editor submits; every one but the last day is required."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    designation: str = Field(min_length=1)
    department: str = Field(min_length=1)
    salary: float = Field(ge=0)
    date_of_joining: date
    last_day_of_working: date | None = None


class EmployeeWrite(EmployeeBase):
    """Insert/update payload.

    ``user_id`` is optional; the backend falls back to the caller and never
    changes it once a row exists.
    """

    user_id: int | None = None


class EmployeeRead(EmployeeBase):
    """Employee representation returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    created_at: datetime


def compute_expiry(minutes: int) -> datetime:
    """Return an absolute expiration timestamp for tokens."""

    return datetime.now(timezone.utc) + timedelta(minutes=minutes)
