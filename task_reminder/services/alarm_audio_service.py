"""
Alarm Audio Service - Owns the single alarm output.

Architecture Decision: Injected backend
The service decides *what* to play (builtin clip, streamed URL, chosen
file) and for how long; the backend only knows how to play a QUrl. The Qt
backend wraps QMediaPlayer, tests inject a recording fake.

Resources owned here:
- the backend (one playback at a time, a new play stops the previous one)
- the preview timer (test mode auto-stops after a fixed window)
- the transient copy of an uploaded file (created on play, removed on stop)
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QDir, QObject, QTemporaryFile, QTimer, QUrl, Signal

from task_reminder.domain.errors import NoFileSelected, PlaybackBlocked, UnsupportedAudioSource
from task_reminder.domain.models import AudioSettings, AudioSourceKind, PlaybackMode, clamp_volume
from task_reminder.domain.rules import check_audio_url
from task_reminder.infra.config import DEFAULT_ALARM_SOURCE

logger = logging.getLogger(__name__)

# QMediaPlayer loop counts
_LOOP_FOREVER = -1
_PLAY_ONCE = 1


class QtAudioBackend(QObject):
    """Plays one source at a time through QMediaPlayer."""

    error_occurred = Signal(str)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        # Imported lazily: multimedia backends are only needed for real output
        from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

        self.player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.player.setAudioOutput(self.audio_output)
        self.player.errorOccurred.connect(self._on_error)

    def play(self, source: QUrl, volume: float, loop: bool) -> None:
        self.player.stop()
        self.audio_output.setVolume(volume)
        self.player.setLoops(_LOOP_FOREVER if loop else _PLAY_ONCE)
        self.player.setSource(source)
        self.player.play()

    def stop(self) -> None:
        self.player.stop()
        self.player.setPosition(0)
        # Drop the source so a temporary file is no longer held open
        self.player.setSource(QUrl())

    def set_volume(self, volume: float) -> None:
        self.audio_output.setVolume(volume)

    def _on_error(self, error, error_string: str = "") -> None:
        self.error_occurred.emit(error_string or str(error))


class TransientAudioFile:
    """
    Private copy of a user-chosen audio file for one playback session.

    The copy is removed by release(); the service releases it on every stop.
    """

    def __init__(self, source: Path):
        self.source = Path(source)
        template = str(Path(QDir.tempPath()) / f"taskreminder-XXXXXX{self.source.suffix}")
        self._file: Optional[QTemporaryFile] = QTemporaryFile(template)
        self._file.setAutoRemove(True)

        try:
            data = self.source.read_bytes()
        except OSError as e:
            self._file = None
            raise PlaybackBlocked(f"Cannot read audio file {self.source}: {e}") from e

        if not self._file.open():
            message = self._file.errorString()
            self._file = None
            raise PlaybackBlocked(f"Cannot create temporary audio file: {message}")

        self._file.write(data)
        self._file.flush()
        self.path = Path(self._file.fileName())

    @property
    def released(self) -> bool:
        return self._file is None

    def url(self) -> QUrl:
        return QUrl.fromLocalFile(str(self.path))

    def release(self) -> None:
        if self._file is None:
            return
        self._file.close()
        self._file.remove()
        self._file = None


class AlarmAudioService(QObject):
    """
    Selects and plays the alarm sound.

    play() and stop() never raise for platform playback problems; those are
    logged and reported through playback_blocked. The only error play()
    raises is NoFileSelected.
    """

    # Signals
    playback_started = Signal(str)  # AudioSourceKind value actually played
    playback_stopped = Signal()
    playback_blocked = Signal(str)  # reason
    source_unsupported = Signal(str)  # rejected url

    def __init__(self, backend=None, builtin_source: str = DEFAULT_ALARM_SOURCE,
                 preview_ms: int = 3000, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.backend = backend if backend is not None else QtAudioBackend(self)
        self.backend.error_occurred.connect(self._on_backend_error)
        self.builtin_source = builtin_source
        self.settings = AudioSettings()

        self._preview_timer = QTimer(self)
        self._preview_timer.setSingleShot(True)
        self._preview_timer.setInterval(preview_ms)
        self._preview_timer.timeout.connect(self._on_preview_elapsed)

        self._transient: Optional[TransientAudioFile] = None
        self._active_kind: Optional[AudioSourceKind] = None

    @property
    def is_playing(self) -> bool:
        return self._active_kind is not None

    @property
    def is_previewing(self) -> bool:
        return self._preview_timer.isActive()

    def configure(self, settings: AudioSettings) -> AudioSettings:
        """
        Store new audio settings and return what was actually stored.

        Video-page URLs are rejected here, as they are on play, and the source
        goes back to the builtin sound.
        """
        update = {"volume": clamp_volume(settings.volume)}
        if settings.source_kind is AudioSourceKind.URL:
            try:
                check_audio_url(settings.url)
            except UnsupportedAudioSource as e:
                logger.info(str(e))
                self.source_unsupported.emit(settings.url)
                update.update(source_kind=AudioSourceKind.DEFAULT, url="")

        self.settings = settings.model_copy(update=update)
        if self.is_playing:
            self.backend.set_volume(self.settings.volume)
        return self.settings

    def set_volume(self, volume: float) -> None:
        self.configure(self.settings.model_copy(update={"volume": volume}))

    def play(self, mode: PlaybackMode = PlaybackMode.CONTINUOUS) -> AudioSourceKind:
        """
        Start the alarm sound and return the kind of source that is playing.

        Raises NoFileSelected when the file source has no file; nothing plays
        and any current playback continues.
        """
        settings = self.settings
        if settings.source_kind is AudioSourceKind.FILE and settings.file_path is None:
            raise NoFileSelected("Choose an audio file before playing it")

        self.stop()

        kind, source = self._resolve_source(settings)
        loop = mode is PlaybackMode.CONTINUOUS or kind is AudioSourceKind.DEFAULT
        if source is None:
            return kind

        try:
            self.backend.play(source, self.settings.volume, loop)
        except PlaybackBlocked as e:
            self._release_transient()
            self._report_blocked(str(e))
            return kind

        self._active_kind = kind
        if mode is PlaybackMode.TEST_PREVIEW:
            self._preview_timer.start()

        logger.debug(f"Playing {kind.value} alarm ({mode.value})")
        self.playback_started.emit(kind.value)
        return kind

    def test_sound(self) -> AudioSourceKind:
        """Play the configured sound briefly"""
        return self.play(PlaybackMode.TEST_PREVIEW)

    def stop(self) -> None:
        """Stop whatever is playing and release the transient file. Idempotent."""
        self._preview_timer.stop()
        was_playing = self._active_kind is not None
        self._active_kind = None
        self.backend.stop()
        self._release_transient()
        if was_playing:
            self.playback_stopped.emit()

    def shutdown(self) -> None:
        self.stop()

    def _resolve_source(self, settings: AudioSettings):
        """Map settings to (kind, QUrl). The QUrl is None if playback failed early."""
        if settings.source_kind is AudioSourceKind.FILE:
            try:
                self._transient = TransientAudioFile(settings.file_path)
            except PlaybackBlocked as e:
                self._report_blocked(str(e))
                return AudioSourceKind.FILE, None
            return AudioSourceKind.FILE, self._transient.url()

        if settings.source_kind is AudioSourceKind.URL and settings.url:
            try:
                return AudioSourceKind.URL, QUrl(check_audio_url(settings.url))
            except UnsupportedAudioSource as e:
                logger.info(f"{e}; falling back to the builtin alarm")
                self.source_unsupported.emit(settings.url)
                self.settings = settings.model_copy(
                    update={"source_kind": AudioSourceKind.DEFAULT, "url": ""}
                )

        return AudioSourceKind.DEFAULT, QUrl.fromUserInput(self.builtin_source)

    def _release_transient(self) -> None:
        if self._transient is not None:
            self._transient.release()
            self._transient = None

    def _report_blocked(self, reason: str) -> None:
        logger.warning(f"Alarm playback blocked: {reason}")
        self.playback_blocked.emit(reason)

    def _on_backend_error(self, reason: str) -> None:
        self.stop()
        self._report_blocked(reason)

    def _on_preview_elapsed(self) -> None:
        self.stop()
