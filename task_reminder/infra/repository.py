"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. Makes it easy to:
- Switch storage implementations
- Mock data for testing
- Change data sources (local DB to cloud API)

KeyValueRepository is the raw get/set capability. The typed repositories on
top of it own the key names and the JSON shapes stored under them.
"""

import json
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from task_reminder.domain.models import AudioSettings, JournalEntry, UserPreferences
from task_reminder.infra.db import PreferenceModel, get_engine

logger = logging.getLogger(__name__)


class KeyValueRepository:
    """
    Handles raw key/value persistence.

    A session may be injected (tests); otherwise a new one is opened per call.
    """

    def __init__(self, session: Optional[Session] = None):
        self.session = session

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        if self.session is not None:
            yield self.session
            return
        with get_engine().get_session() as session:
            yield session

    def get(self, key: str) -> Optional[str]:
        """Get the stored value for a key"""
        with self._session_scope() as session:
            result = session.execute(
                select(PreferenceModel.value).where(PreferenceModel.key == key)
            )
            return result.scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key"""
        with self._session_scope() as session:
            session.merge(PreferenceModel(key=key, value=value))
            session.commit()

    def delete(self, key: str) -> None:
        with self._session_scope() as session:
            session.execute(delete(PreferenceModel).where(PreferenceModel.key == key))
            session.commit()


class PreferencesRepository:
    """
    Handles UserPreferences persistence.

    Every key is optional on load; a missing or unreadable value keeps the
    default for that field only.
    """

    LAST_TASK = "lastTask"
    LAST_TIME = "lastTime"
    DARK_MODE = "darkMode"
    AUDIO_SETTINGS = "audioSettings"

    def __init__(self, store: Optional[KeyValueRepository] = None):
        self.store = store or KeyValueRepository()

    def load(self) -> UserPreferences:
        """Get current user preferences"""
        prefs = UserPreferences()

        last_task = self.store.get(self.LAST_TASK)
        if last_task is not None:
            prefs.last_task = last_task

        last_time = self.store.get(self.LAST_TIME)
        if last_time is not None:
            try:
                minutes = int(last_time)
                if minutes > 0:
                    prefs.last_minutes = minutes
            except ValueError:
                logger.warning(f"Ignoring stored duration {last_time!r}")

        dark_mode = self.store.get(self.DARK_MODE)
        if dark_mode is not None:
            try:
                prefs.dark_mode = bool(json.loads(dark_mode))
            except ValueError:
                logger.warning(f"Ignoring stored dark mode flag {dark_mode!r}")

        audio = self.store.get(self.AUDIO_SETTINGS)
        if audio is not None:
            try:
                prefs.audio = AudioSettings.model_validate_json(audio).revalidated()
            except ValidationError as e:
                logger.warning(f"Ignoring stored audio settings: {e}")

        return prefs

    def save(self, prefs: UserPreferences) -> None:
        """Update user preferences"""
        self.store.set(self.LAST_TASK, prefs.last_task)
        self.store.set(self.LAST_TIME, str(prefs.last_minutes))
        self.store.set(self.DARK_MODE, json.dumps(prefs.dark_mode))
        self.store.set(self.AUDIO_SETTINGS, json.dumps(prefs.audio.to_descriptor()))


class JournalRepository:
    """
    Handles journal persistence as one newest-first JSON list.
    """

    KEY = "journalEntries"

    def __init__(self, store: Optional[KeyValueRepository] = None):
        self.store = store or KeyValueRepository()

    def load(self) -> List[JournalEntry]:
        raw = self.store.get(self.KEY)
        if not raw:
            return []

        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored journal is not valid JSON, starting empty: {e}")
            return []
        if not isinstance(items, list):
            logger.warning("Stored journal is not a list, starting empty")
            return []

        entries = []
        for item in items:
            try:
                entries.append(JournalEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping stored journal entry: {e}")
        return entries

    def save(self, entries: Sequence[JournalEntry]) -> None:
        self.store.set(self.KEY, json.dumps([entry.to_wire() for entry in entries]))
