# File: personal_calendar/services/calendar_storage.py
"""
Directory-based persistence: one CSV file per calendar.

The file stem is the calendar title, so restoring a directory rebuilds
each calendar under its (sanitized) title.
"""

import csv
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from personal_calendar.core.calendar import Calendar
from personal_calendar.core.config_manager import Config
from personal_calendar.models.enums import Visibility
from personal_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')
_EDGE_DOTS_AND_SPACES = re.compile(r'^[.\s]+|[.\s]+$')

PathLike = Union[str, Path]


def sanitize_filename(title: str) -> str:
    """
    Turn a calendar title into a safe file stem.

    Characters that are invalid on common filesystems become underscores,
    leading and trailing dots and whitespace are stripped, and an empty
    result falls back to "untitled".
    """
    if title is None:
        return "untitled"
    sanitized = _INVALID_CHARS.sub("_", title)
    sanitized = _EDGE_DOTS_AND_SPACES.sub("", sanitized)
    return sanitized if sanitized.strip() else "untitled"


def _require_directory(directory: Optional[PathLike]) -> Path:
    if directory is None or not str(directory).strip():
        raise ValueError("Directory path cannot be null or blank")
    return Path(directory)


def calendar_path(calendar: Calendar, directory: PathLike) -> Path:
    """Path of the file a calendar is saved to."""
    return Path(directory) / f"{sanitize_filename(calendar.title)}{Config.CSV_EXTENSION}"


def save_all_calendars(calendars: Iterable[Optional[Calendar]], directory: PathLike) -> List[Path]:
    """
    Save every calendar to <directory>/<sanitized title>.csv.

    Args:
        calendars: Calendars to save (None entries are skipped)
        directory: Target directory, created if missing

    Returns:
        Paths of the written files

    Raises:
        ValueError: if calendars is None or directory is blank
        OSError: if a file cannot be written
    """
    if calendars is None:
        raise ValueError("Calendars list cannot be null")
    target = _require_directory(directory)
    target.mkdir(parents=True, exist_ok=True)

    written = []
    for calendar in calendars:
        if calendar is None:
            continue
        file_path = calendar_path(calendar, target)
        with open(file_path, 'w', encoding='utf-8', newline='') as f:
            calendar.export_to_csv(f)
        written.append(file_path)
        logger.debug(f"Saved calendar '{calendar.title}' to {file_path}")

    logger.info(f"Saved {len(written)} calendars to {target}")
    return written


def restore_all_calendars(directory: PathLike,
                          default_visibility: Optional[Visibility] = None) -> List[Calendar]:
    """
    Load one calendar per CSV file in a directory.

    Files are read in name order. A file that cannot be read is logged
    and skipped.

    Args:
        directory: Directory holding the saved calendars
        default_visibility: Default visibility for the restored calendars

    Returns:
        Restored calendars (empty when the directory does not exist)
    """
    source = _require_directory(directory)
    if not source.is_dir():
        logger.info(f"No saved calendars at {source}")
        return []

    calendars = []
    files = sorted(p for p in source.iterdir()
                   if p.is_file() and p.suffix.lower() == Config.CSV_EXTENSION)

    for file_path in files:
        try:
            calendar = Calendar(file_path.stem, default_visibility)
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                calendar.import_from_csv(f)
            calendars.append(calendar)
        except (OSError, UnicodeDecodeError, ValueError, csv.Error) as e:
            logger.error(f"Failed to restore calendar from {file_path.name}: {e}")

    logger.info(f"Restored {len(calendars)} calendars from {source}")
    return calendars
