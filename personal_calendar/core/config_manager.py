# File: personal_calendar/core/config_manager.py
"""
Centralized configuration management for the personal calendar.
Loads settings from environment variables and an optional .env file.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from personal_calendar.models.enums import Visibility

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ['yes', 'true', '1', 'on', 'y', 't']


def _env_visibility(name: str, default: Visibility) -> Visibility:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return Visibility[raw.strip().upper()]
    except KeyError:
        return default


class Config:
    """Application configuration singleton."""
    
    # Base directories (per-user, outside the installed package)
    BASE_DIR = Path(os.getenv("CALENDAR_HOME", str(Path.home() / ".personal_calendar")))
    
    DATA_DIR = Path(os.getenv("CALENDAR_DATA_DIR", str(BASE_DIR / "calendars")))
    LOGS_DIR = Path(os.getenv("CALENDAR_LOG_DIR", str(BASE_DIR / "logs")))
    
    # Calendar defaults
    DEFAULT_CALENDAR_TITLE = os.getenv("CALENDAR_DEFAULT_TITLE", "My Calendar")
    DEFAULT_VISIBILITY = _env_visibility("CALENDAR_DEFAULT_VISIBILITY", Visibility.PUBLIC)
    
    # Logging
    LOG_LEVEL = os.getenv("CALENDAR_LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE = _env_flag("CALENDAR_LOG_TO_FILE", True)
    
    # CSV format
    CSV_DATE_FORMAT = "%m/%d/%Y"
    CSV_HEADERS: List[str] = [
        "Subject", "Start Date", "Start Time", "End Date", "End Time",
        "All Day Event", "Description", "Location", "Private",
    ]
    CSV_EXTENSION = ".csv"
    
    # Accepted date formats for user input (CLI)
    INPUT_DATE_FORMATS: List[str] = ["%Y-%m-%d", CSV_DATE_FORMAT]
    
    @classmethod
    def ensure_directories(cls) -> Path:
        """Create the data directory if needed and return it."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        return cls.DATA_DIR
    
    @classmethod
    def validate(cls) -> bool:
        """Validate that the configuration is usable."""
        errors = []
        
        if not cls.DEFAULT_CALENDAR_TITLE or not cls.DEFAULT_CALENDAR_TITLE.strip():
            errors.append("CALENDAR_DEFAULT_TITLE must not be blank")
        
        if cls.LOG_LEVEL not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            errors.append(f"Unknown CALENDAR_LOG_LEVEL: {cls.LOG_LEVEL}")
        
        if cls.DATA_DIR.exists() and not cls.DATA_DIR.is_dir():
            errors.append(f"Data path is not a directory: {cls.DATA_DIR}")
        
        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False
        
        return True
