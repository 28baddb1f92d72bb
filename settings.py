"""JSON-based settings persistence for the mini calendar."""

import json
import os
from datetime import date

from calendar_logic import MAX_DATE, MIN_DATE, SUNDAY

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-calendar-notes.json")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Outermost months whose grid padding is still representable as dates
_EARLIEST = date(1, 2, 1)
_LATEST = date(9999, 11, 30)

_DEFAULTS = {
    "first_weekday": SUNDAY,
    "min_date": MIN_DATE.isoformat(),
    "max_date": MAX_DATE.isoformat(),
    "require_title": False,
    "log_level": "WARNING",
    "log_file": None,
}


def _iso_date(value) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return settings
    if not isinstance(stored, dict):
        return settings

    fw = stored.get("first_weekday")
    if isinstance(fw, int) and not isinstance(fw, bool) and 0 <= fw <= 6:
        settings["first_weekday"] = fw
    if isinstance(stored.get("require_title"), bool):
        settings["require_title"] = stored["require_title"]
    if stored.get("log_level") in _LOG_LEVELS:
        settings["log_level"] = stored["log_level"]
    log_file = stored.get("log_file")
    if isinstance(log_file, str) and log_file.strip():
        settings["log_file"] = log_file.strip()

    # Bounds only apply as a pair, and only if they are ordered
    lo = _iso_date(stored.get("min_date", settings["min_date"]))
    hi = _iso_date(stored.get("max_date", settings["max_date"]))
    if lo is not None and hi is not None:
        lo, hi = max(lo, _EARLIEST), min(hi, _LATEST)
    if lo is not None and hi is not None and lo <= hi:
        settings["min_date"] = lo.isoformat()
        settings["max_date"] = hi.isoformat()
    return settings


def bounds(settings: dict) -> tuple[date, date]:
    """Return the (min_date, max_date) navigation bounds as dates."""
    return (date.fromisoformat(settings["min_date"]),
            date.fromisoformat(settings["max_date"]))


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
