"""Configuration management for the expense tracker.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Local key/value storage file (the app's "local storage")
STORAGE_PATH = Path(
    os.getenv("EXPENSE_TRACKER_STORAGE_PATH", DATA_DIR / "local_storage.json")
).resolve()
STORAGE_KEY = "expenseFolders"

# Logging
LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()

# Sharing
PUBLIC_URL = os.getenv("EXPENSE_TRACKER_PUBLIC_URL", "http://localhost:8501/")
SHARE_PARAM = "shared"

# Views
RECENT_LIMIT = 5
NOTICE_SECONDS = 3
CURRENCY_SYMBOL = "₹"
FOOTER_TEXT = "Made by Bugu for Bugi"

# Export
EXPORT_FILENAME = "expenses.xlsx"
EXPORT_SHEET = "Expenses"
EXPORT_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, STORAGE_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)

