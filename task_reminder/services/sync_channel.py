"""
Journal Sync Channel - Real-time journal exchange over a WebSocket.

Protocol (JSON text frames):
    out  {"type": "get_journal"}                      once per connection
    out  {"type": "journal_entry", "entry": {...}}    for every local add
    in   {"type": "journal_entries", "entries": [...]}
    in   {"type": "journal_entry", "entry": {...}}

Inbound payloads go through JournalService.merge in arrival order. Payloads
that do not decode are logged and skipped; the connection stays up.
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QUrl, Signal

from task_reminder.domain.errors import MalformedSyncMessage
from task_reminder.domain.models import JournalEntry
from task_reminder.domain.rules import decode_sync_message, encode_get_journal, encode_journal_entry
from .journal_service import JournalService

logger = logging.getLogger(__name__)


class JournalSyncChannel(QObject):

    # Signals
    connected = Signal()
    disconnected = Signal()
    malformed_message = Signal(str)  # reason

    def __init__(self, journal: JournalService, socket=None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.journal = journal
        self.socket = socket if socket is not None else self._create_socket()
        self.is_open = False
        self._closed = False

        self.socket.connected.connect(self._on_connected)
        self.socket.disconnected.connect(self._on_disconnected)
        self.socket.textMessageReceived.connect(self.handle_message)
        self.socket.errorOccurred.connect(self._on_error)
        self.journal.entry_added.connect(self.send_entry)

    def _create_socket(self):
        from PySide6.QtWebSockets import QWebSocket

        socket = QWebSocket()
        socket.setParent(self)
        return socket

    def connect_to(self, url: str) -> None:
        """Open the connection; the journal is requested once it is up."""
        if self._closed:
            logger.debug("Channel already closed, not reconnecting")
            return
        logger.info(f"Connecting journal sync to {url}")
        self.socket.open(QUrl(url))

    def send_entry(self, entry: JournalEntry) -> bool:
        """Forward a locally added entry. Dropped when not connected."""
        if not self.is_open:
            logger.debug(f"Sync channel offline, entry {entry.id} not sent")
            return False
        self.socket.sendTextMessage(encode_journal_entry(entry))
        return True

    def handle_message(self, raw: str) -> None:
        try:
            entries = decode_sync_message(raw)
        except MalformedSyncMessage as e:
            logger.warning(f"Ignoring sync message: {e}")
            self.malformed_message.emit(str(e))
            return

        if entries is None:
            logger.debug("Ignoring sync message of unknown type")
            return
        self.journal.merge(entries)

    def close(self) -> None:
        """Tear down the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.journal.entry_added.disconnect(self.send_entry)
        self.socket.close()
        self.is_open = False

    def _on_connected(self) -> None:
        self.is_open = True
        logger.info("Journal sync connected")
        self.socket.sendTextMessage(encode_get_journal())
        self.connected.emit()

    def _on_disconnected(self) -> None:
        was_open = self.is_open
        self.is_open = False
        if was_open:
            logger.info("Journal sync disconnected")
            self.disconnected.emit()

    def _on_error(self, error) -> None:
        logger.warning(f"Journal sync error: {self.socket.errorString() or error}")
