"""
Escalation Service - The required acknowledgement when a session expires.

While the alarm is active, exactly one resolution is accepted:
extend the timer, accept the task now, or dismiss. The visual alarm state
does not depend on the sound actually playing.
"""

import logging
from enum import Enum
from typing import Optional

from PySide6.QtCore import QObject, Signal

from task_reminder.domain.errors import NoFileSelected
from task_reminder.domain.models import PlaybackMode
from .alarm_audio_service import AlarmAudioService
from .timer_service import TimerService

logger = logging.getLogger(__name__)


class Resolution(str, Enum):
    EXTENDED = "extended"
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"


class AlarmEscalationService(QObject):
    """Turns TimerService.alarm_triggered into a modal alarm state."""

    # Signals
    alarm_opened = Signal(str)  # task
    alarm_closed = Signal(str)  # Resolution value
    audio_failed = Signal(str)  # reason

    def __init__(self, timer: TimerService, audio: AlarmAudioService,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.timer = timer
        self.audio = audio
        self.alarm_active = False
        self.task = ""

        self.timer.alarm_triggered.connect(self._on_alarm_triggered)

    def _on_alarm_triggered(self, task: str) -> None:
        if self.alarm_active:
            return

        self.alarm_active = True
        self.task = task
        self.alarm_opened.emit(task)

        try:
            self.audio.play(PlaybackMode.CONTINUOUS)
        except NoFileSelected as e:
            logger.warning(f"Alarm for '{task}' is silent: {e}")
            self.audio_failed.emit(str(e))

    def extend(self, minutes) -> bool:
        """
        Add time and keep going.

        An invalid duration raises InvalidDuration and leaves the alarm open.
        Returns False, also leaving it open, when the timer is not expired.
        """
        if not self.alarm_active:
            return False

        if self.timer.extend(minutes) is None:
            return False
        self.audio.stop()
        self._close(Resolution.EXTENDED)
        return True

    def accept_task_now(self) -> bool:
        """The user starts the task; no timer keeps running."""
        if not self.alarm_active:
            return False

        self.audio.stop()
        self.timer.reset()
        self._close(Resolution.ACCEPTED)
        return True

    def dismiss(self) -> bool:
        """Silence the alarm. The timer stays expired."""
        if not self.alarm_active:
            return False

        self.audio.stop()
        self._close(Resolution.DISMISSED)
        return True

    def _close(self, resolution: Resolution) -> None:
        self.alarm_active = False
        logger.info(f"Alarm for '{self.task}' {resolution.value}")
        self.alarm_closed.emit(resolution.value)
