"""Infrastructure layer - Configuration and persistence"""

from .db import DatabaseEngine, get_engine, init_db
from .repository import JournalRepository, KeyValueRepository, PreferencesRepository

__all__ = [
    "DatabaseEngine", "get_engine", "init_db",
    "JournalRepository", "KeyValueRepository", "PreferencesRepository",
]
