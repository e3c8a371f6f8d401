"""
Alarm dialog shown when a countdown expires.
"""

from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QMessageBox, QPushButton, QVBoxLayout

from task_reminder.domain.errors import ReminderError
from task_reminder.i18n import tr
from task_reminder.services import AlarmEscalationService


class AlarmDialog(QDialog):
    """
    The popup asking the user how to handle an expired task.

    It cannot be closed with Escape, the title bar or a click outside; only
    the extend / start now / dismiss buttons resolve it.
    """

    def __init__(self, escalation: AlarmEscalationService, task: str,
                 extend_presets: Sequence[int] = (5, 10), parent=None):
        super().__init__(parent)
        self.escalation = escalation
        self.setWindowTitle(tr("alarm.title"))
        self.setWindowModality(Qt.ApplicationModal)
        self.setWindowFlags(
            Qt.Dialog |
            Qt.WindowStaysOnTopHint |
            Qt.CustomizeWindowHint |
            Qt.WindowTitleHint
        )

        layout = QVBoxLayout(self)

        message_label = QLabel(tr("alarm.message", task=task))
        message_label.setStyleSheet("font-size: 16px; font-weight: bold;")
        message_label.setWordWrap(True)
        layout.addWidget(message_label)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        layout.addSpacing(20)

        btn_layout = QHBoxLayout()
        for minutes in extend_presets:
            btn_extend = QPushButton(tr("alarm.extend", minutes=minutes))
            btn_extend.setMinimumHeight(48)
            btn_extend.clicked.connect(lambda _=False, m=minutes: self._extend(m))
            btn_layout.addWidget(btn_extend)

        btn_accept = QPushButton(tr("alarm.accept"))
        btn_accept.setMinimumHeight(48)
        btn_accept.setDefault(True)
        btn_accept.clicked.connect(self.escalation.accept_task_now)
        btn_layout.addWidget(btn_accept)

        btn_dismiss = QPushButton(tr("alarm.dismiss"))
        btn_dismiss.setMinimumHeight(48)
        btn_dismiss.clicked.connect(self.escalation.dismiss)
        btn_layout.addWidget(btn_dismiss)

        layout.addLayout(btn_layout)
        self.setMinimumWidth(420)

        self.escalation.alarm_closed.connect(self._on_alarm_closed)
        self.escalation.audio_failed.connect(self._on_audio_failed)

    def _extend(self, minutes: int):
        try:
            self.escalation.extend(minutes)
        except ReminderError as e:
            QMessageBox.warning(self, tr("error"), str(e))

    def _on_audio_failed(self, reason: str):
        self.status_label.setText(tr("alarm.silent", reason=reason))

    def _on_alarm_closed(self, _resolution: str):
        self.escalation.alarm_closed.disconnect(self._on_alarm_closed)
        self.escalation.audio_failed.disconnect(self._on_audio_failed)
        self.accept()

    def reject(self):
        """Escape does not close the alarm"""

    def closeEvent(self, event):
        if self.escalation.alarm_active:
            event.ignore()
        else:
            event.accept()
