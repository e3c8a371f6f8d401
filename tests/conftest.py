"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
from PySide6.QtCore import QCoreApplication, QObject, Signal
from sqlalchemy.pool import StaticPool

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from task_reminder.domain.errors import PlaybackBlocked
from task_reminder.infra.db import DatabaseEngine
from task_reminder.infra.repository import KeyValueRepository


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """QTimer and friends need a Qt application object"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = DatabaseEngine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    engine.create_tables()

    yield engine

    engine.drop_tables()
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a new session for a test"""
    with db_engine.get_session() as session:
        yield session


@pytest.fixture
def kv_store(db_session):
    return KeyValueRepository(session=db_session)


class FakeAudioBackend(QObject):
    """Records playback calls instead of producing sound."""

    error_occurred = Signal(str)

    def __init__(self):
        super().__init__()
        self.plays = []
        self.stops = 0
        self.volumes = []
        self.playing = None
        self.block_next = False

    def play(self, source, volume, loop):
        if self.block_next:
            self.block_next = False
            raise PlaybackBlocked("autoplay refused")
        self.playing = (source.toString(), volume, loop)
        self.plays.append(self.playing)

    def stop(self):
        self.stops += 1
        self.playing = None

    def set_volume(self, volume):
        self.volumes.append(volume)


@pytest.fixture
def fake_backend():
    return FakeAudioBackend()


class FakeSocket(QObject):
    """Stands in for QWebSocket."""

    connected = Signal()
    disconnected = Signal()
    textMessageReceived = Signal(str)
    errorOccurred = Signal(object)

    def __init__(self):
        super().__init__()
        self.opened_url = None
        self.sent = []
        self.closed = False

    def open(self, url):
        self.opened_url = url.toString()

    def sendTextMessage(self, message):
        self.sent.append(message)
        return len(message)

    def close(self):
        self.closed = True
        self.disconnected.emit()

    def errorString(self):
        return ""


@pytest.fixture
def fake_socket():
    return FakeSocket()
