# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Task Reminder application.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Task Reminder",
        "error": "Error",
        "notice": "Notice",
        "app.dark_mode": "Dark mode",

        # Timer
        "timer.task_placeholder": "What do you need to do?",
        "timer.minutes": "Minutes:",
        "timer.custom_placeholder": "Custom minutes",
        "timer.preset": "{minutes} min",
        "timer.preset_hour": "1 hr",
        "timer.start": "Start",
        "timer.pause": "Pause",
        "timer.resume": "Resume",
        "timer.reset": "Reset",
        "timer.invalid_task": "Please enter a task description!",
        "timer.invalid_duration": "Please select a valid time!",

        # Alarm dialog
        "alarm.title": "Time's up!",
        "alarm.message": "Time to start: {task}",
        "alarm.extend": "+{minutes} min",
        "alarm.accept": "Start task now",
        "alarm.dismiss": "Dismiss",
        "alarm.silent": "The alarm sound could not be played: {reason}",

        # Audio settings
        "audio.title": "Alarm Sound",
        "audio.default": "Default alarm",
        "audio.url": "Audio URL",
        "audio.file": "Upload file",
        "audio.url_placeholder": "https://example.com/alarm.mp3",
        "audio.choose_file": "Choose file...",
        "audio.no_file": "No file selected",
        "audio.file_filter": "Audio files (*.mp3 *.wav *.ogg *.flac *.m4a *.aac *.opus)",
        "audio.not_audio": "Please choose an audio file.",
        "audio.volume": "Volume:",
        "audio.test": "Test sound",
        "audio.no_file_selected": "Please choose an audio file first.",
        "audio.under_construction": "Audio URL/YouTube alarm feature is still under construction and will be added soon.",
        "audio.blocked": "Playback was blocked: {reason}",

        # Journal
        "journal.title": "Journal",
        "journal.placeholder": "Write a note...",
        "journal.save": "Save",
        "journal.delete": "Delete",
        "journal.empty": "Journal entry must not be empty.",
    },
    "de": {
        # Application
        "app.name": "Aufgaben-Erinnerung",
        "error": "Fehler",
        "notice": "Hinweis",
        "app.dark_mode": "Dunkelmodus",

        # Timer
        "timer.task_placeholder": "Was steht an?",
        "timer.minutes": "Minuten:",
        "timer.custom_placeholder": "Eigene Minuten",
        "timer.preset": "{minutes} Min.",
        "timer.preset_hour": "1 Std.",
        "timer.start": "Start",
        "timer.pause": "Pause",
        "timer.resume": "Fortsetzen",
        "timer.reset": "Zurücksetzen",
        "timer.invalid_task": "Bitte eine Aufgabe eingeben!",
        "timer.invalid_duration": "Bitte eine gültige Zeit wählen!",

        # Alarm dialog
        "alarm.title": "Die Zeit ist um!",
        "alarm.message": "Zeit für: {task}",
        "alarm.extend": "+{minutes} Min.",
        "alarm.accept": "Aufgabe jetzt starten",
        "alarm.dismiss": "Schließen",
        "alarm.silent": "Der Alarmton konnte nicht abgespielt werden: {reason}",

        # Audio settings
        "audio.title": "Alarmton",
        "audio.default": "Standardalarm",
        "audio.url": "Audio-URL",
        "audio.file": "Datei hochladen",
        "audio.url_placeholder": "https://example.com/alarm.mp3",
        "audio.choose_file": "Datei wählen...",
        "audio.no_file": "Keine Datei gewählt",
        "audio.file_filter": "Audiodateien (*.mp3 *.wav *.ogg *.flac *.m4a *.aac *.opus)",
        "audio.not_audio": "Bitte eine Audiodatei wählen.",
        "audio.volume": "Lautstärke:",
        "audio.test": "Ton testen",
        "audio.no_file_selected": "Bitte zuerst eine Audiodatei wählen.",
        "audio.under_construction": "Die Audio-URL/YouTube-Alarmfunktion ist noch in Arbeit und folgt bald.",
        "audio.blocked": "Wiedergabe wurde blockiert: {reason}",

        # Journal
        "journal.title": "Tagebuch",
        "journal.placeholder": "Notiz schreiben...",
        "journal.save": "Speichern",
        "journal.delete": "Löschen",
        "journal.empty": "Der Eintrag darf nicht leer sein.",
    },
}
