"""SQLAlchemy models exposed by the backend."""
from .base import Base
from .employee import Employee
from .user import User

__all__ = ["Base", "Employee", "User"]
