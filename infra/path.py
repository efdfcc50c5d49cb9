# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "SlaDeadlineEngine"
COMPANY_NAME = "TECHASH"


def user_data_dir() -> Path:
    """
    Returns a per-user data directory, e.g.:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\TECHASH\\SlaDeadlineEngine

    macOS:
        ~/Library/Application Support/TECHASH/SlaDeadlineEngine

    Linux:
        ~/.local/share/TECHASH/SlaDeadlineEngine
    """
    try:
        if sys.platform.startswith("win"):
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

        path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    """The SQLite file holding calendars, developers and leave."""
    return user_data_dir() / "sla_engine.db"


def default_db_url() -> str:
    return f"sqlite:///{default_db_path().as_posix()}"
