"""Core configuration, database, security and token handling."""

from authapi.core.config import get_settings, settings
from authapi.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
