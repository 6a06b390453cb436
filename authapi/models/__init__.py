"""SQLAlchemy ORM models."""

from authapi.models.base import Base
from authapi.models.user import User

__all__ = ["Base", "User"]
