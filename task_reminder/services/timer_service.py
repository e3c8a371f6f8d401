"""
Timer Service - Countdown engine for the current task.

Architecture Decision: Observer Pattern (Qt Signals)
The service emits signals when state changes, keeping it decoupled from UI.
The QTimer is the only tick source; it runs only while the session is
Running, so pausing, resetting or expiring stops ticks synchronously.
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from task_reminder.domain.models import TimerSession, TimerStatus
from task_reminder.domain.rules import (
    MAX_MINUTES, Effect, format_clock, new_session, progress_percent,
    tick_session, validate_minutes, validate_task,
)

logger = logging.getLogger(__name__)


class TimerService(QObject):
    """
    The countdown engine. Manages state but knows nothing about the UI.

    State machine:
        idle --start--> running --pause--> paused --resume--> running
        running --last tick--> expired --extend--> running
        running/paused/expired --reset--> idle
    Anything else is a no-op.
    """

    # Signals
    ticked = Signal(int)  # remaining_seconds
    state_changed = Signal(str)  # TimerStatus value
    alarm_triggered = Signal(str)  # task

    def __init__(self, tick_interval_ms: int = 1000, max_minutes: int = MAX_MINUTES,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.session = TimerSession()
        self.max_minutes = max_minutes

        # Internal timer that fires every second
        self.timer = QTimer(self)
        self.timer.setInterval(tick_interval_ms)
        self.timer.timeout.connect(self.tick)

    @property
    def status(self) -> TimerStatus:
        return self.session.status

    def start(self, task: str, minutes) -> TimerSession:
        """
        Start a new countdown for a task.

        Raises InvalidTask or InvalidDuration without touching the current
        session.
        """
        task = validate_task(task)
        minutes = validate_minutes(minutes, self.max_minutes)

        if self.session.status is not TimerStatus.IDLE:
            logger.info(f"Replacing {self.session.status.value} session for '{self.session.task}'")

        self._begin(new_session(task, minutes))
        logger.info(f"Started '{task}' for {minutes} min")
        return self.session.model_copy()

    def pause(self) -> None:
        if self.session.status is not TimerStatus.RUNNING:
            logger.debug(f"Ignoring pause while {self.session.status.value}")
            return

        self.timer.stop()
        self.session.status = TimerStatus.PAUSED
        self.state_changed.emit(self.session.status.value)

    def resume(self) -> None:
        if self.session.status is not TimerStatus.PAUSED:
            logger.debug(f"Ignoring resume while {self.session.status.value}")
            return

        self.session.status = TimerStatus.RUNNING
        self.timer.start()
        self.state_changed.emit(self.session.status.value)

    def toggle_pause(self) -> None:
        if self.session.status is TimerStatus.RUNNING:
            self.pause()
        else:
            self.resume()

    def reset(self) -> None:
        """Return to idle, dropping the task and counters."""
        self.timer.stop()
        if self.session.status is TimerStatus.IDLE:
            return

        self.session = TimerSession()
        self.ticked.emit(0)
        self.state_changed.emit(self.session.status.value)

    def extend(self, minutes) -> Optional[TimerSession]:
        """
        Give an expired task more time.

        Opens a new Running session for the same task; the old denominator is
        discarded. Returns None when the timer has not expired.
        """
        if self.session.status is not TimerStatus.EXPIRED:
            logger.debug(f"Ignoring extend while {self.session.status.value}")
            return None

        minutes = validate_minutes(minutes, self.max_minutes)
        self._begin(new_session(self.session.task, minutes))
        logger.info(f"Extended '{self.session.task}' by {minutes} min")
        return self.session.model_copy()

    def tick(self) -> None:
        """Called every second while running"""
        session, effects = tick_session(self.session)
        if session is self.session:
            return

        self.session = session
        if Effect.STOP_TICKS in effects:
            self.timer.stop()

        self.ticked.emit(session.remaining_seconds)

        if Effect.RAISE_ALARM in effects:
            logger.info(f"Time is up for '{session.task}'")
            self.state_changed.emit(session.status.value)
            self.alarm_triggered.emit(session.task)

    def progress_percent(self) -> float:
        return progress_percent(self.session)

    def formatted_remaining(self) -> str:
        return format_clock(self.session.remaining_seconds)

    def shutdown(self) -> None:
        """Release the tick source"""
        self.timer.stop()

    def _begin(self, session: TimerSession) -> None:
        self.timer.stop()
        self.session = session
        self.timer.start()
        self.ticked.emit(session.remaining_seconds)
        self.state_changed.emit(session.status.value)
