"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Pydantic provides runtime data validation, ensuring data integrity when loading
persisted settings or decoding sync channel payloads. It also provides easy
serialization/deserialization to the JSON shapes the journal service expects.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_VOLUME = 0.7


def clamp_volume(value) -> float:
    """Coerce a volume into [0, 1]. Unusable values become the default."""
    try:
        volume = float(value)
    except (TypeError, ValueError):
        return DEFAULT_VOLUME
    if math.isnan(volume):
        return DEFAULT_VOLUME
    return min(1.0, max(0.0, volume))


class TimerStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class TimerSession(BaseModel):
    """
    One run of the countdown timer.

    total_seconds is captured at start and is the progress denominator for the
    whole session; extending an expired session creates a new one.
    """
    task: str = ""
    total_seconds: int = Field(default=0, ge=0)
    remaining_seconds: int = Field(default=0, ge=0)
    status: TimerStatus = TimerStatus.IDLE


class AudioSourceKind(str, Enum):
    """Alarm sound source. Values match the persisted descriptor."""
    DEFAULT = "default"
    URL = "url"
    FILE = "file"


class PlaybackMode(Enum):
    CONTINUOUS = "continuous"
    TEST_PREVIEW = "test_preview"


class AudioSettings(BaseModel):
    """
    Alarm audio configuration.

    file_path is the locally chosen audio file. It is never serialized, so a
    reloaded descriptor has no file and must go through revalidated().
    """
    model_config = ConfigDict(populate_by_name=True)

    source_kind: AudioSourceKind = Field(default=AudioSourceKind.DEFAULT, alias="type")
    url: str = ""
    file_path: Optional[Path] = Field(default=None, alias="file", exclude=True)
    volume: float = DEFAULT_VOLUME

    @field_validator("volume", mode="before")
    @classmethod
    def _clamp_volume(cls, value):
        return clamp_volume(value)

    @field_validator("url", mode="before")
    @classmethod
    def _none_url(cls, value):
        return "" if value is None else value

    def revalidated(self) -> "AudioSettings":
        """Fall back to the builtin sound when a file source has no file."""
        if self.source_kind is AudioSourceKind.FILE and self.file_path is None:
            return self.model_copy(update={"source_kind": AudioSourceKind.DEFAULT})
        return self

    def to_descriptor(self) -> dict:
        """Persistable form: kind, url and volume. Files are never stored."""
        data = self.model_dump(mode="json", by_alias=True)
        data["file"] = None
        return data


class JournalEntry(BaseModel):
    """
    A single journal note. Immutable once created.

    created_at travels as "date" on the wire and in storage.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="date"
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class UserPreferences(BaseModel):
    """Values remembered between runs."""
    last_task: str = ""
    last_minutes: int = Field(default=5, ge=1)
    dark_mode: bool = True
    audio: AudioSettings = Field(default_factory=AudioSettings)


# Sync channel messages

class GetJournalMessage(BaseModel):
    type: Literal["get_journal"] = "get_journal"


class JournalEntryMessage(BaseModel):
    type: Literal["journal_entry"] = "journal_entry"
    entry: JournalEntry


class JournalEntriesMessage(BaseModel):
    type: Literal["journal_entries"] = "journal_entries"
    entries: List[JournalEntry] = Field(default_factory=list)
