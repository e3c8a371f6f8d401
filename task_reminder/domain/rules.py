"""
Pure reminder rules.

Every function here maps (state, event) to a new state, plus a list of
effects for the caller to carry out where there are any. The Qt services
own the side effects; these functions can be tested without an event loop.
"""

import json
import mimetypes
import re
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pydantic import ValidationError

from .errors import (
    InvalidDuration, InvalidJournalText, InvalidTask,
    MalformedSyncMessage, UnsupportedAudioSource,
)
from .models import (
    GetJournalMessage, JournalEntriesMessage, JournalEntry, JournalEntryMessage,
    TimerSession, TimerStatus, UserPreferences,
)

MAX_MINUTES = 1440

EMBED_URL_PREFIX = "https://www.youtube.com/embed/"
_VIDEO_URL_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")

AUDIO_EXTENSIONS = {".mp3", ".wav", ".ogg", ".oga", ".flac", ".m4a", ".aac", ".opus", ".wma"}


class Effect(str, Enum):
    STOP_TICKS = "stop_ticks"
    RAISE_ALARM = "raise_alarm"
    PERSIST_PREFERENCES = "persist_preferences"
    RECONFIGURE_AUDIO = "reconfigure_audio"


# Timer

def validate_task(task) -> str:
    if not isinstance(task, str) or not task.strip():
        raise InvalidTask("Please enter a task description")
    return task.strip()


def validate_minutes(minutes, max_minutes: int = MAX_MINUTES) -> int:
    """
    Accept a positive whole number of minutes up to max_minutes.

    Digit strings are accepted since they come straight from the custom
    minutes field. bool and fractional floats are rejected.
    """
    if isinstance(minutes, bool):
        raise InvalidDuration(f"Invalid duration: {minutes!r}")
    if isinstance(minutes, str):
        text = minutes.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidDuration(f"Invalid duration: {minutes!r}")
        value = int(text)
    elif isinstance(minutes, int):
        value = minutes
    elif isinstance(minutes, float) and minutes.is_integer():
        value = int(minutes)
    else:
        raise InvalidDuration(f"Invalid duration: {minutes!r}")

    if value <= 0 or value > max_minutes:
        raise InvalidDuration(f"Duration must be between 1 and {max_minutes} minutes")
    return value


def new_session(task: str, minutes: int) -> TimerSession:
    total = minutes * 60
    return TimerSession(
        task=task,
        total_seconds=total,
        remaining_seconds=total,
        status=TimerStatus.RUNNING,
    )


def tick_session(session: TimerSession) -> Tuple[TimerSession, List[Effect]]:
    """Advance a running session by one second."""
    if session.status is not TimerStatus.RUNNING:
        return session, []

    remaining = session.remaining_seconds - 1
    if remaining <= 0:
        expired = session.model_copy(
            update={"remaining_seconds": 0, "status": TimerStatus.EXPIRED}
        )
        return expired, [Effect.STOP_TICKS, Effect.RAISE_ALARM]

    return session.model_copy(update={"remaining_seconds": remaining}), []


def progress_percent(session: TimerSession) -> float:
    if session.total_seconds == 0:
        return 0.0
    elapsed = session.total_seconds - session.remaining_seconds
    return (elapsed / session.total_seconds) * 100


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS (minutes are not wrapped into hours)."""
    minutes, seconds = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


# Audio

def is_embeddable_video_url(url: str) -> bool:
    if not url:
        return False
    return url.startswith(EMBED_URL_PREFIX) or bool(_VIDEO_URL_PATTERN.search(url))


def check_audio_url(url: str) -> str:
    """Return the URL if it can be streamed directly."""
    if is_embeddable_video_url(url):
        raise UnsupportedAudioSource(f"Video URLs are not supported as alarm sounds: {url}")
    return url


def is_audio_file(path: Path) -> bool:
    mime, _ = mimetypes.guess_type(str(path))
    if mime:
        return mime.startswith("audio/")
    return path.suffix.lower() in AUDIO_EXTENSIONS


def settings_changed(old: UserPreferences, new: UserPreferences) -> List[Effect]:
    effects = []
    if old != new:
        effects.append(Effect.PERSIST_PREFERENCES)
    if old.audio != new.audio:
        effects.append(Effect.RECONFIGURE_AUDIO)
    return effects


# Journal

def validate_journal_text(text) -> str:
    if not isinstance(text, str) or not text.strip():
        raise InvalidJournalText("Journal entry must not be empty")
    return text.strip()


def merge_journal(current: Sequence[JournalEntry],
                  inbound: Sequence[JournalEntry]) -> List[JournalEntry]:
    """
    Merge an inbound payload into the newest-first journal.

    More than one entry replaces the journal; exactly one entry is prepended;
    nothing inbound changes nothing. A one-item full list is therefore
    indistinguishable from a push and is prepended.
    """
    if len(inbound) > 1:
        return list(inbound)

    if len(inbound) == 1:
        return [inbound[0], *current]

    return list(current)


def decode_sync_message(raw) -> Optional[List[JournalEntry]]:
    """
    Decode an inbound channel payload into the entries it carries.

    Returns None for well-formed messages of a type this client ignores.
    Raises MalformedSyncMessage for anything that does not parse.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedSyncMessage(f"Payload is not JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedSyncMessage("Payload is not a JSON object")

    kind = payload.get("type")
    try:
        if kind == "journal_entries":
            return JournalEntriesMessage.model_validate(payload).entries
        if kind == "journal_entry":
            return [JournalEntryMessage.model_validate(payload).entry]
    except ValidationError as e:
        raise MalformedSyncMessage(f"Invalid {kind} message: {e}") from e

    return None


def encode_get_journal() -> str:
    return GetJournalMessage().model_dump_json()


def encode_journal_entry(entry: JournalEntry) -> str:
    return JournalEntryMessage(entry=entry).model_dump_json(by_alias=True)
