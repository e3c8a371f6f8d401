#!/usr/bin/env python

"""
Task Reminder - Main Entry Point

A countdown timer for the task you are putting off, an alarm that insists
on an answer when time is up, and a journal synced over a WebSocket.

Usage:
    python main.py

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import os
import sys
from pathlib import Path

# Suppress verbose Qt Multimedia/FFmpeg logging
os.environ["QT_LOGGING_RULES"] = "qt.multimedia.ffmpeg.debug=false;qt.multimedia.ffmpeg.info=false"

# Use native Windows Media Foundation backend on Windows to avoid FFmpeg log spam
if os.name == 'nt':
    os.environ["QT_MEDIA_BACKEND"] = "windows"

# Add project directory to path
sys.path.insert(0, str(Path(__file__).parent))

from task_reminder.ui.application import main


if __name__ == "__main__":
    sys.exit(main())
