"""UI layer - PySide6 GUI components"""

from .application import ReminderApp
from .dialogs import AlarmDialog
from .main_window import MainWindow

__all__ = ["ReminderApp", "AlarmDialog", "MainWindow"]
