"""Domain layer - Pure business entities and logic"""

from .models import (
    AudioSettings, AudioSourceKind, JournalEntry, PlaybackMode,
    TimerSession, TimerStatus, UserPreferences,
)

__all__ = [
    "AudioSettings", "AudioSourceKind", "JournalEntry", "PlaybackMode",
    "TimerSession", "TimerStatus", "UserPreferences",
]
