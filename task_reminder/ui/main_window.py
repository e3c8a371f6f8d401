"""
Main Window - Timer, alarm sound and journal in one compact window.

Architecture Decision: Thin presentation layer
Widgets only collect input and render service state. Every decision
(validation, transitions, merge policy) lives in the services.
"""

from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QFileDialog, QGroupBox, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QMainWindow, QMessageBox, QPlainTextEdit,
    QProgressBar, QPushButton, QSlider, QVBoxLayout, QWidget,
)

from task_reminder.domain.errors import InvalidDuration, InvalidJournalText, InvalidTask, ReminderError
from task_reminder.domain.models import AudioSourceKind, TimerStatus
from task_reminder.domain.rules import is_audio_file
from task_reminder.i18n import tr
from task_reminder.services import ReminderServices


class MainWindow(QMainWindow):

    # Signals
    dark_mode_changed = Signal(bool)

    def __init__(self, services: ReminderServices, parent=None):
        super().__init__(parent)
        self.services = services
        self.setWindowTitle(tr("app.name"))

        self._setup_ui()
        self._load_preferences()
        self._connect_signals()
        self._refresh_timer()
        self._refresh_buttons()
        self._refresh_journal()

    # Layout

    def _setup_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self._build_timer_group())
        layout.addWidget(self._build_audio_group())
        layout.addWidget(self._build_journal_group())
        self.setCentralWidget(central)
        self.setMinimumWidth(460)

    def _build_timer_group(self) -> QGroupBox:
        group = QGroupBox()
        layout = QVBoxLayout(group)

        self.task_input = QLineEdit()
        self.task_input.setPlaceholderText(tr("timer.task_placeholder"))
        self.task_input.returnPressed.connect(self._on_start)
        layout.addWidget(self.task_input)

        row = QHBoxLayout()
        row.addWidget(QLabel(tr("timer.minutes")))
        self.preset_combo = QComboBox()
        for minutes in self.services.settings.time_presets:
            label = tr("timer.preset_hour") if minutes == 60 else tr("timer.preset", minutes=minutes)
            self.preset_combo.addItem(label, minutes)
        row.addWidget(self.preset_combo)
        self.custom_input = QLineEdit()
        self.custom_input.setPlaceholderText(tr("timer.custom_placeholder"))
        row.addWidget(self.custom_input)
        layout.addLayout(row)

        self.time_label = QLabel("00:00")
        self.time_label.setAlignment(Qt.AlignCenter)
        self.time_label.setStyleSheet("font-size: 42px; font-family: monospace;")
        layout.addWidget(self.time_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        buttons = QHBoxLayout()
        self.start_btn = QPushButton(tr("timer.start"))
        self.start_btn.clicked.connect(self._on_start)
        self.pause_btn = QPushButton(tr("timer.pause"))
        self.pause_btn.clicked.connect(self.services.timer.toggle_pause)
        self.reset_btn = QPushButton(tr("timer.reset"))
        self.reset_btn.clicked.connect(self.services.timer.reset)
        for btn in (self.start_btn, self.pause_btn, self.reset_btn):
            buttons.addWidget(btn)
        layout.addLayout(buttons)

        self.dark_mode_check = QCheckBox(tr("app.dark_mode"))
        layout.addWidget(self.dark_mode_check)
        return group

    def _build_audio_group(self) -> QGroupBox:
        group = QGroupBox(tr("audio.title"))
        layout = QVBoxLayout(group)

        self.source_combo = QComboBox()
        self.source_combo.addItem(tr("audio.default"), AudioSourceKind.DEFAULT)
        self.source_combo.addItem(tr("audio.url"), AudioSourceKind.URL)
        self.source_combo.addItem(tr("audio.file"), AudioSourceKind.FILE)
        layout.addWidget(self.source_combo)

        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText(tr("audio.url_placeholder"))
        layout.addWidget(self.url_input)

        file_row = QHBoxLayout()
        self.file_btn = QPushButton(tr("audio.choose_file"))
        self.file_btn.clicked.connect(self._on_choose_file)
        self.file_label = QLabel(tr("audio.no_file"))
        file_row.addWidget(self.file_btn)
        file_row.addWidget(self.file_label, stretch=1)
        layout.addLayout(file_row)

        volume_row = QHBoxLayout()
        volume_row.addWidget(QLabel(tr("audio.volume")))
        self.volume_slider = QSlider(Qt.Horizontal)
        self.volume_slider.setRange(0, 100)
        volume_row.addWidget(self.volume_slider, stretch=1)
        self.test_btn = QPushButton(tr("audio.test"))
        self.test_btn.clicked.connect(self._on_test_sound)
        volume_row.addWidget(self.test_btn)
        layout.addLayout(volume_row)
        return group

    def _build_journal_group(self) -> QGroupBox:
        group = QGroupBox(tr("journal.title"))
        layout = QVBoxLayout(group)

        self.journal_input = QPlainTextEdit()
        self.journal_input.setPlaceholderText(tr("journal.placeholder"))
        self.journal_input.setMaximumHeight(80)
        layout.addWidget(self.journal_input)

        buttons = QHBoxLayout()
        save_btn = QPushButton(tr("journal.save"))
        save_btn.clicked.connect(self._on_save_journal)
        delete_btn = QPushButton(tr("journal.delete"))
        delete_btn.clicked.connect(self._on_delete_journal)
        buttons.addWidget(save_btn)
        buttons.addWidget(delete_btn)
        layout.addLayout(buttons)

        self.journal_list = QListWidget()
        layout.addWidget(self.journal_list)
        return group

    def _load_preferences(self):
        prefs = self.services.preferences
        self.task_input.setText(prefs.last_task)
        index = self.preset_combo.findData(prefs.last_minutes)
        if index >= 0:
            self.preset_combo.setCurrentIndex(index)
        else:
            self.custom_input.setText(str(prefs.last_minutes))
        self.dark_mode_check.setChecked(prefs.dark_mode)
        self._show_audio(prefs.audio)

    def _show_audio(self, audio):
        for widget in (self.source_combo, self.url_input, self.volume_slider):
            widget.blockSignals(True)
        self.source_combo.setCurrentIndex(self.source_combo.findData(audio.source_kind))
        self.url_input.setText(audio.url)
        self.volume_slider.setValue(round(audio.volume * 100))
        self.file_label.setText(audio.file_path.name if audio.file_path else tr("audio.no_file"))
        for widget in (self.source_combo, self.url_input, self.volume_slider):
            widget.blockSignals(False)

    def _connect_signals(self):
        timer = self.services.timer
        timer.ticked.connect(lambda _remaining: self._refresh_timer())
        timer.state_changed.connect(lambda _status: self._refresh_buttons())

        self.services.journal.entries_changed.connect(self._refresh_journal)

        audio = self.services.audio
        audio.source_unsupported.connect(self._on_source_unsupported)
        audio.playback_blocked.connect(
            lambda reason: self.statusBar().showMessage(tr("audio.blocked", reason=reason), 5000)
        )

        self.task_input.editingFinished.connect(self._save_timer_preferences)
        self.preset_combo.currentIndexChanged.connect(self._save_timer_preferences)
        self.dark_mode_check.toggled.connect(self._save_timer_preferences)
        self.source_combo.currentIndexChanged.connect(self._save_audio_preferences)
        self.url_input.editingFinished.connect(self._save_audio_preferences)
        self.volume_slider.valueChanged.connect(self._save_audio_preferences)

    # Rendering

    def _refresh_timer(self):
        timer = self.services.timer
        self.time_label.setText(timer.formatted_remaining())
        self.progress_bar.setValue(round(timer.progress_percent() * 10))

    def _refresh_buttons(self):
        status = self.services.timer.status
        self.pause_btn.setEnabled(status in (TimerStatus.RUNNING, TimerStatus.PAUSED))
        self.pause_btn.setText(tr("timer.resume") if status is TimerStatus.PAUSED else tr("timer.pause"))
        self.reset_btn.setEnabled(status is not TimerStatus.IDLE)
        self._refresh_timer()

    def _refresh_journal(self):
        self.journal_list.clear()
        for entry in self.services.journal.entries:
            stamp = entry.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
            item = QListWidgetItem(f"{stamp}  {entry.text}")
            item.setData(Qt.UserRole, entry.id)
            self.journal_list.addItem(item)

    # Actions

    def _selected_minutes(self):
        custom = self.custom_input.text().strip()
        return custom if custom else self.preset_combo.currentData()

    def _on_start(self):
        try:
            self.services.timer.start(self.task_input.text(), self._selected_minutes())
        except InvalidTask:
            QMessageBox.warning(self, tr("error"), tr("timer.invalid_task"))
            return
        except InvalidDuration:
            QMessageBox.warning(self, tr("error"), tr("timer.invalid_duration"))
            return
        self._save_timer_preferences()

    def _on_test_sound(self):
        try:
            self.services.audio.test_sound()
        except ReminderError:
            QMessageBox.warning(self, tr("error"), tr("audio.no_file_selected"))

    def _on_choose_file(self):
        path, _ = QFileDialog.getOpenFileName(self, tr("audio.choose_file"), "", tr("audio.file_filter"))
        if not path:
            return
        if not is_audio_file(Path(path)):
            QMessageBox.warning(self, tr("error"), tr("audio.not_audio"))
            return

        audio = self.services.preferences.audio.model_copy(
            update={"source_kind": AudioSourceKind.FILE, "file_path": Path(path)}
        )
        self._apply_audio(audio)

    def _on_source_unsupported(self, _url: str):
        QMessageBox.information(self, tr("notice"), tr("audio.under_construction"))

    def _on_save_journal(self):
        try:
            self.services.journal.add(self.journal_input.toPlainText())
        except InvalidJournalText:
            return
        self.journal_input.clear()

    def _on_delete_journal(self):
        item = self.journal_list.currentItem()
        if item is not None:
            self.services.journal.delete(item.data(Qt.UserRole))

    # Preferences

    def _save_timer_preferences(self, *_args):
        minutes = self.preset_combo.currentData()
        custom = self.custom_input.text().strip()
        if custom.isascii() and custom.isdigit() and int(custom) > 0:
            minutes = int(custom)
        prefs = self.services.preferences.model_copy(update={
            "last_task": self.task_input.text(),
            "last_minutes": minutes,
            "dark_mode": self.dark_mode_check.isChecked(),
        })
        previous = self.services.preferences.dark_mode
        self.services.update_preferences(prefs)
        if prefs.dark_mode != previous:
            self.dark_mode_changed.emit(prefs.dark_mode)

    def _save_audio_preferences(self, *_args):
        audio = self.services.preferences.audio.model_copy(update={
            "source_kind": self.source_combo.currentData(),
            "url": self.url_input.text().strip(),
            "volume": self.volume_slider.value() / 100,
        })
        self._apply_audio(audio)

    def _apply_audio(self, audio):
        prefs = self.services.update_preferences(
            self.services.preferences.model_copy(update={"audio": audio})
        )
        self._show_audio(prefs.audio)
