"""
Journal Service - Owner of the in-memory journal.

Entries are kept newest first. Local adds are persisted and announced on
entry_added so the sync channel can forward them; merges from the channel
are persisted but never announced, so peers do not echo each other.
"""

import logging
import uuid
from typing import List, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, Signal
from sqlalchemy.exc import SQLAlchemyError

from task_reminder.domain.models import JournalEntry
from task_reminder.domain.rules import merge_journal, validate_journal_text
from task_reminder.infra.repository import JournalRepository

logger = logging.getLogger(__name__)


class JournalService(QObject):

    # Signals
    entries_changed = Signal()
    entry_added = Signal(object)  # JournalEntry

    def __init__(self, repository: Optional[JournalRepository] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.repository = repository or JournalRepository()
        self._entries: List[JournalEntry] = []

    @property
    def entries(self) -> Tuple[JournalEntry, ...]:
        return tuple(self._entries)

    def load(self) -> None:
        """Restore the persisted journal"""
        try:
            self._entries = self.repository.load()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load journal: {e}")
            self._entries = []
        self.entries_changed.emit()

    def add(self, text: str) -> JournalEntry:
        """
        Add a note at the top of the journal.

        Raises InvalidJournalText for blank text.
        """
        text = validate_journal_text(text)
        entry = JournalEntry(id=uuid.uuid4().hex, text=text)

        self._entries.insert(0, entry)
        self._persist()
        self.entries_changed.emit()
        self.entry_added.emit(entry)
        return entry

    def delete(self, entry_id: str) -> bool:
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return False

        self._entries = remaining
        self._persist()
        self.entries_changed.emit()
        return True

    def merge(self, inbound: Sequence[JournalEntry]) -> None:
        """Apply entries received from the sync channel"""
        merged = merge_journal(self._entries, inbound)
        if merged == self._entries:
            return

        self._entries = merged
        self._persist()
        self.entries_changed.emit()

    def _persist(self) -> None:
        try:
            self.repository.save(self._entries)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save journal: {e}")
