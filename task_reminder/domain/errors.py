"""
Error taxonomy for the reminder core.

Validation errors also derive from ValueError so callers that only care about
"bad input" can catch them generically. Playback and sync errors are never
fatal; services log them and convert them into Qt signals.
"""


class ReminderError(Exception):
    """Base class for all task reminder errors"""


class InvalidTask(ReminderError, ValueError):
    """Task description is empty or blank"""


class InvalidDuration(ReminderError, ValueError):
    """Duration is not a positive whole number of minutes within the limit"""


class InvalidJournalText(ReminderError, ValueError):
    """Journal entry text is empty or blank"""


class NoFileSelected(ReminderError):
    """Uploaded-file playback was requested but no file has been chosen"""


class UnsupportedAudioSource(ReminderError):
    """The alarm URL points to an embeddable video page"""


class PlaybackBlocked(ReminderError):
    """The audio backend refused to start playback"""


class MalformedSyncMessage(ReminderError):
    """A sync channel payload could not be decoded"""
