"""SQLAlchemy ORM models."""

from account_api.models.base import Base
from account_api.models.user import User

__all__ = ["Base", "User"]
