"""
Tests for service wiring, preferences handling and scoped teardown.
"""

import json

import pytest

from task_reminder.domain.models import AudioSettings, AudioSourceKind
from task_reminder.infra.config import Settings
from task_reminder.services import container
from task_reminder.services.container import open_services
from task_reminder.services.timer_service import TimerService


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return Settings(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture
def services(settings, kv_store, fake_backend, fake_socket):
    with open_services(settings, store=kv_store, audio_backend=fake_backend, socket=fake_socket) as services:
        yield services


class TestStartup:

    def test_restores_preferences_and_journal(self, settings, kv_store, fake_backend, fake_socket):
        kv_store.set("lastTask", "Stretch")
        kv_store.set("audioSettings", json.dumps({"type": "url", "url": "https://a/b.mp3", "volume": 0.3}))
        kv_store.set("journalEntries", json.dumps([{"id": "x", "text": "hi", "date": "2026-01-01T00:00:00Z"}]))

        with open_services(settings, store=kv_store, audio_backend=fake_backend, socket=fake_socket) as services:
            assert services.preferences.last_task == "Stretch"
            assert services.audio.settings.url == "https://a/b.mp3"
            assert services.audio.settings.volume == 0.3
            assert [e.id for e in services.journal.entries] == ["x"]

    def test_alarm_flow_is_wired(self, services, fake_backend):
        services.timer.start("Task", 1)
        for _ in range(60):
            services.timer.tick()

        assert services.escalation.alarm_active
        assert fake_backend.playing is not None


class TestPreferences:

    def test_update_persists_and_reconfigures_audio(self, services, kv_store):
        new = services.preferences.model_copy(update={
            "last_task": "Read",
            "audio": AudioSettings(volume=0.1),
        })

        services.update_preferences(new)

        assert kv_store.get("lastTask") == "Read"
        assert services.audio.settings.volume == 0.1

    def test_video_url_is_stored_as_builtin(self, services, kv_store):
        audio = AudioSettings(source_kind=AudioSourceKind.URL, url="https://www.youtube.com/embed/x")

        stored = services.update_preferences(services.preferences.model_copy(update={"audio": audio}))

        assert stored.audio.source_kind is AudioSourceKind.DEFAULT
        assert json.loads(kv_store.get("audioSettings"))["type"] == "default"

    def test_unchanged_preferences_are_not_written(self, services, kv_store):
        services.update_preferences(services.preferences)
        assert kv_store.get("lastTask") is None


class TestTeardown:

    def test_close_releases_everything(self, settings, kv_store, fake_backend, fake_socket):
        with open_services(settings, store=kv_store, audio_backend=fake_backend, socket=fake_socket) as services:
            fake_socket.connected.emit()
            services.timer.start("Task", 5)
            services.audio.play()

        assert not services.timer.timer.isActive()
        assert not services.audio.is_playing
        assert fake_socket.closed

    def test_close_runs_on_error(self, settings, kv_store, fake_backend, fake_socket):
        with pytest.raises(RuntimeError):
            with open_services(settings, store=kv_store, audio_backend=fake_backend, socket=fake_socket) as services:
                services.timer.start("Task", 5)
                raise RuntimeError("boom")

        assert not services.timer.timer.isActive()
        assert fake_socket.closed

    def test_failed_build_releases_what_was_created(self, settings, kv_store, fake_backend, monkeypatch):
        released = []
        original_shutdown = TimerService.shutdown

        def record_shutdown(timer):
            released.append("timer")
            original_shutdown(timer)

        def broken_channel(*args, **kwargs):
            raise RuntimeError("no socket")

        monkeypatch.setattr(TimerService, "shutdown", record_shutdown)
        monkeypatch.setattr(container, "JournalSyncChannel", broken_channel)

        with pytest.raises(RuntimeError):
            container.build_services(settings, store=kv_store, audio_backend=fake_backend)

        assert released == ["timer"]
        assert fake_backend.stops == 1
