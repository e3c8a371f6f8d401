"""
Tests for the countdown engine.
"""

import pytest

from task_reminder.domain.errors import InvalidDuration, InvalidTask
from task_reminder.domain.models import TimerStatus
from task_reminder.services.timer_service import TimerService


@pytest.fixture
def timer():
    service = TimerService()
    yield service
    service.shutdown()


def run_ticks(timer: TimerService, count: int):
    for _ in range(count):
        timer.tick()


class TestStart:

    def test_start_initializes_running_session(self, timer):
        session = timer.start("Write report", 25)

        assert session.status is TimerStatus.RUNNING
        assert session.total_seconds == 1500
        assert session.remaining_seconds == 1500
        assert session.task == "Write report"
        assert timer.timer.isActive()

    def test_task_is_trimmed(self, timer):
        assert timer.start("  Email Bob  ", 5).task == "Email Bob"

    @pytest.mark.parametrize("task", ["", "   ", "\n\t"])
    def test_blank_task_is_rejected(self, timer, task):
        with pytest.raises(InvalidTask):
            timer.start(task, 5)
        assert timer.status is TimerStatus.IDLE
        assert not timer.timer.isActive()

    @pytest.mark.parametrize("minutes", [0, -5, 1441, 2.5, True, "abc", "", None, "\u00b2"])
    def test_invalid_duration_is_rejected(self, timer, minutes):
        with pytest.raises(InvalidDuration):
            timer.start("Task", minutes)
        assert timer.status is TimerStatus.IDLE

    def test_failed_start_keeps_running_session(self, timer):
        timer.start("First", 5)
        run_ticks(timer, 10)

        with pytest.raises(InvalidDuration):
            timer.start("Second", 0)

        assert timer.session.task == "First"
        assert timer.session.remaining_seconds == 290

    def test_digit_string_minutes_are_accepted(self, timer):
        assert timer.start("Task", "15").total_seconds == 900

    def test_upper_bound_is_inclusive(self, timer):
        assert timer.start("Task", 1440).total_seconds == 86400


class TestTicking:

    @pytest.mark.parametrize("minutes", [1, 2, 7])
    def test_reaches_expired_after_all_ticks(self, timer, minutes):
        timer.start("Task", minutes)
        run_ticks(timer, 60 * minutes)

        assert timer.status is TimerStatus.EXPIRED
        assert timer.session.remaining_seconds == 0
        assert not timer.timer.isActive()

    def test_progress_is_monotonic_from_0_to_100(self, timer):
        timer.start("Task", 1)
        progress = [timer.progress_percent()]
        for _ in range(60):
            timer.tick()
            progress.append(timer.progress_percent())

        assert progress[0] == 0
        assert progress[-1] == 100
        assert all(a <= b for a, b in zip(progress, progress[1:]))

    def test_progress_is_zero_when_idle(self, timer):
        assert timer.progress_percent() == 0

    def test_alarm_fires_exactly_once(self, timer):
        fired = []
        timer.alarm_triggered.connect(fired.append)

        timer.start("Task", 1)
        run_ticks(timer, 75)

        assert fired == ["Task"]

    def test_ticks_are_ignored_when_paused(self, timer):
        timer.start("Task", 1)
        run_ticks(timer, 5)
        timer.pause()
        run_ticks(timer, 5)

        assert timer.session.remaining_seconds == 55

    def test_formatted_remaining(self, timer):
        timer.start("Task", 2)
        run_ticks(timer, 5)

        assert timer.formatted_remaining() == "01:55"


class TestPauseResume:

    def test_pause_resume_round_trip_keeps_remaining(self, timer):
        timer.start("Task", 5)
        run_ticks(timer, 3)

        timer.pause()
        assert timer.status is TimerStatus.PAUSED
        assert not timer.timer.isActive()

        timer.resume()
        assert timer.status is TimerStatus.RUNNING
        assert timer.timer.isActive()
        assert timer.session.remaining_seconds == 297

    def test_double_pause_is_harmless(self, timer):
        states = []
        timer.state_changed.connect(states.append)
        timer.start("Task", 5)

        timer.pause()
        timer.pause()

        assert states == ["running", "paused"]

    def test_resume_outside_paused_is_noop(self, timer):
        timer.resume()
        assert timer.status is TimerStatus.IDLE

    def test_toggle_pause(self, timer):
        timer.start("Task", 5)
        timer.toggle_pause()
        assert timer.status is TimerStatus.PAUSED
        timer.toggle_pause()
        assert timer.status is TimerStatus.RUNNING


class TestResetAndExtend:

    @pytest.mark.parametrize("action", ["run", "pause", "expire"])
    def test_reset_returns_to_idle(self, timer, action):
        timer.start("Task", 1)
        if action == "pause":
            timer.pause()
        elif action == "expire":
            run_ticks(timer, 60)

        timer.reset()

        assert timer.status is TimerStatus.IDLE
        assert timer.session.task == ""
        assert timer.session.total_seconds == 0
        assert timer.session.remaining_seconds == 0
        assert not timer.timer.isActive()

    def test_extend_only_when_expired(self, timer):
        timer.start("Task", 5)

        assert timer.extend(5) is None
        assert timer.session.total_seconds == 300

    def test_extend_creates_new_session(self, timer):
        timer.start("Task", 1)
        run_ticks(timer, 60)

        session = timer.extend(10)

        assert session.status is TimerStatus.RUNNING
        assert session.total_seconds == 600
        assert session.remaining_seconds == 600
        assert session.task == "Task"
        assert timer.progress_percent() == 0
        assert timer.timer.isActive()

    def test_extend_with_invalid_minutes_stays_expired(self, timer):
        timer.start("Task", 1)
        run_ticks(timer, 60)

        with pytest.raises(InvalidDuration):
            timer.extend(0)

        assert timer.status is TimerStatus.EXPIRED

    def test_extended_session_can_alarm_again(self, timer):
        fired = []
        timer.alarm_triggered.connect(fired.append)

        timer.start("Task", 1)
        run_ticks(timer, 60)
        timer.extend(1)
        run_ticks(timer, 60)

        assert fired == ["Task", "Task"]
