"""Core infrastructure utilities for database, settings and logging."""

from .db import AsyncSessionLocal, engine, get_session, init_db
from .settings import settings

__all__ = [
    "AsyncSessionLocal",
    "engine",
    "get_session",
    "init_db",
    "settings",
]
