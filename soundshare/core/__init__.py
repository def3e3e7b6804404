"""Core app configuration, database and security."""

from soundshare.core.config import get_settings, settings
from soundshare.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
