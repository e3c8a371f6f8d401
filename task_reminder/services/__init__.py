"""Services layer - Business logic"""

from .timer_service import TimerService
from .alarm_audio_service import AlarmAudioService
from .escalation_service import AlarmEscalationService, Resolution
from .journal_service import JournalService
from .sync_channel import JournalSyncChannel
from .container import ReminderServices, build_services, open_services

__all__ = [
    "TimerService", "AlarmAudioService", "AlarmEscalationService", "Resolution",
    "JournalService", "JournalSyncChannel",
    "ReminderServices", "build_services", "open_services",
]
