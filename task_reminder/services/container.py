"""
Service wiring and scoped teardown.

open_services() builds the whole reminder core and guarantees that the tick
source, the sync connection and any audio resource are released on every
exit path.
"""

import logging
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from task_reminder.domain.models import UserPreferences
from task_reminder.domain.rules import Effect, settings_changed
from task_reminder.infra.config import Settings
from task_reminder.infra.repository import JournalRepository, KeyValueRepository, PreferencesRepository
from .alarm_audio_service import AlarmAudioService
from .escalation_service import AlarmEscalationService
from .journal_service import JournalService
from .sync_channel import JournalSyncChannel
from .timer_service import TimerService

logger = logging.getLogger(__name__)


@dataclass
class ReminderServices:
    settings: Settings
    preferences_repo: PreferencesRepository
    preferences: UserPreferences
    timer: TimerService
    audio: AlarmAudioService
    escalation: AlarmEscalationService
    journal: JournalService
    channel: JournalSyncChannel
    _exit_stack: ExitStack = field(default_factory=ExitStack, repr=False)

    def update_preferences(self, new: UserPreferences) -> UserPreferences:
        """Apply changed preferences: reconfigure audio, then persist."""
        effects = settings_changed(self.preferences, new)

        if Effect.RECONFIGURE_AUDIO in effects:
            stored_audio = self.audio.configure(new.audio)
            new = new.model_copy(update={"audio": stored_audio})

        self.preferences = new
        if Effect.PERSIST_PREFERENCES in effects:
            try:
                self.preferences_repo.save(new)
            except SQLAlchemyError as e:
                logger.error(f"Failed to save preferences: {e}")
        return new

    def close(self) -> None:
        self._exit_stack.close()


def build_services(settings: Settings, store: Optional[KeyValueRepository] = None,
                   audio_backend=None, socket=None) -> ReminderServices:
    """Create and connect all services. Nothing is started yet."""
    store = store or KeyValueRepository()
    preferences_repo = PreferencesRepository(store)

    try:
        preferences = preferences_repo.load()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load preferences, using defaults: {e}")
        preferences = UserPreferences()

    # Released in reverse order, also when construction fails part way
    with ExitStack() as stack:
        timer = TimerService(
            tick_interval_ms=settings.tick_interval_ms,
            max_minutes=settings.max_minutes,
        )
        stack.callback(timer.shutdown)

        audio = AlarmAudioService(
            backend=audio_backend,
            builtin_source=settings.builtin_alarm_source,
            preview_ms=settings.test_preview_ms,
        )
        stack.callback(audio.shutdown)
        preferences = preferences.model_copy(update={"audio": audio.configure(preferences.audio)})

        journal = JournalService(JournalRepository(store))
        journal.load()

        channel = JournalSyncChannel(journal, socket=socket)
        stack.callback(channel.close)

        return ReminderServices(
            settings=settings,
            preferences_repo=preferences_repo,
            preferences=preferences,
            timer=timer,
            audio=audio,
            escalation=AlarmEscalationService(timer, audio),
            journal=journal,
            channel=channel,
            _exit_stack=stack.pop_all(),
        )


@contextmanager
def open_services(settings: Settings, **kwargs) -> Iterator[ReminderServices]:
    services = build_services(settings, **kwargs)
    try:
        yield services
    finally:
        services.close()
