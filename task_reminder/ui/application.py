"""
Reminder Application - Main UI entry point.

Architecture Decision: Presentation Layer
This layer only wires widgets to services. Business logic is delegated to
the services, which are opened as one scoped unit and always closed on exit.
"""

import logging
import sys
from contextlib import ExitStack
from typing import Optional

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

from task_reminder.infra.config import get_settings
from task_reminder.infra.db import init_db
from task_reminder.i18n import set_language
from task_reminder.services import open_services
from .dialogs import AlarmDialog
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def _dark_palette() -> QPalette:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor("#0f172a"))
    palette.setColor(QPalette.WindowText, QColor("#f8fafc"))
    palette.setColor(QPalette.Base, QColor("#1e293b"))
    palette.setColor(QPalette.AlternateBase, QColor("#334155"))
    palette.setColor(QPalette.Text, QColor("#f8fafc"))
    palette.setColor(QPalette.Button, QColor("#1e293b"))
    palette.setColor(QPalette.ButtonText, QColor("#f8fafc"))
    palette.setColor(QPalette.Highlight, QColor("#f59e0b"))
    palette.setColor(QPalette.HighlightedText, QColor("#0f172a"))
    return palette


class ReminderApp:
    """
    Main application class owning the Qt application and the services.
    """

    def __init__(self):
        self.app = QApplication(sys.argv)
        self.app.setStyle("Fusion")
        self._default_palette = self.app.palette()

        # Settings
        self.settings = get_settings()
        set_language("auto")

        init_db(self.settings.get_db_url())

        self._resources = ExitStack()
        self.services = self._resources.enter_context(open_services(self.settings))

        self.main_window = MainWindow(self.services)
        self.alarm_dialog: Optional[AlarmDialog] = None

        self._connect_signals()
        self.apply_theme(self.services.preferences.dark_mode)

    def _connect_signals(self):
        """Connect service signals to UI handlers"""
        self.services.escalation.alarm_opened.connect(self._on_alarm_opened)
        self.main_window.dark_mode_changed.connect(self.apply_theme)
        self.app.aboutToQuit.connect(self.shutdown)

    def apply_theme(self, dark_mode: bool):
        self.app.setPalette(_dark_palette() if dark_mode else self._default_palette)

    def _on_alarm_opened(self, task: str):
        self.main_window.showNormal()
        self.main_window.raise_()
        self.main_window.activateWindow()

        self.alarm_dialog = AlarmDialog(
            self.services.escalation, task,
            extend_presets=self.settings.extend_presets,
            parent=self.main_window,
        )
        self.alarm_dialog.show()

    def shutdown(self):
        """Release the tick source, the sync connection and audio"""
        logger.info("Shutting down")
        self._resources.close()

    def run(self) -> int:
        self.main_window.show()
        self.services.channel.connect_to(self.settings.journal_ws_url)
        try:
            return self.app.exec()
        finally:
            self.shutdown()


def main() -> int:
    """Configure logging and run the application"""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return ReminderApp().run()
