"""Task Reminder - countdown timer, escalating alarm and synced journal."""

__version__ = "0.1.0"
