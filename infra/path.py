# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "ProjectBudget"
COMPANY_NAME = "ProjectBudget"
DB_FILENAME = "project_budget.db"


def user_data_dir() -> Path:
    """
    Returns a per-user data directory (``PB_DATA_DIR`` wins when set), e.g.:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\ProjectBudget\\ProjectBudget

    macOS:
        ~/Library/Application Support/ProjectBudget/ProjectBudget

    Linux:
        ~/.local/share/ProjectBudget/ProjectBudget
    """
    override = (os.getenv("PB_DATA_DIR") or "").strip()
    if override:
        path = Path(override).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path
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
        # Last-resort fallback: use home directory
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    """
    The full path to the SQLite database file (``PB_DB_PATH`` or under the user data dir).
    """
    override = (os.getenv("PB_DB_PATH") or "").strip()
    if override:
        return Path(override).expanduser()
    return user_data_dir() / DB_FILENAME


def default_db_url() -> str:
    return f"sqlite:///{default_db_path().as_posix()}"
