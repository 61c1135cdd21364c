# File: personal_calendar/core/calendar_app.py
"""
Application bootstrap.

Restores saved calendars from the data directory, picks the calendar to
work on and keeps the directory in sync as events are added or modified.
"""

from pathlib import Path
from typing import List, Optional, Union

from personal_calendar.core.calendar import Calendar
from personal_calendar.core.config_manager import Config
from personal_calendar.core.listeners import CalendarListener
from personal_calendar.models.event import Event
from personal_calendar.services.calendar_storage import restore_all_calendars, save_all_calendars
from personal_calendar.utils.logger import LoggerMixin


class AutoSaveListener(CalendarListener, LoggerMixin):
    """Saves every calendar of an app after each add or modify notification."""

    def __init__(self, app: 'CalendarApp'):
        self.app = app

    def on_event_added(self, event: Event) -> None:
        self._save(event)

    def on_event_modified(self, event: Event) -> None:
        self._save(event)

    def _save(self, event: Event) -> None:
        try:
            self.app.save()
        except OSError as e:
            self.logger.error(f"Auto-save after '{event.subject}' failed: {e}")


class CalendarApp(LoggerMixin):
    """
    Holds the restored calendars and the currently selected one.

    Removals don't produce a notification, so callers that remove events
    should call save() themselves.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None, auto_save: bool = True):
        """
        Restore calendars and select the first one.

        Args:
            data_dir: Directory holding saved calendars (default: Config.DATA_DIR)
            auto_save: Register an AutoSaveListener on the selected calendar
        """
        self.data_dir = Path(data_dir) if data_dir is not None else Config.ensure_directories()
        self.logger.info(f"Loading calendars from {self.data_dir}")

        self.calendars: List[Calendar] = restore_all_calendars(
            self.data_dir, Config.DEFAULT_VISIBILITY
        )

        if self.calendars:
            self.selected = self.calendars[0]
        else:
            self.selected = Calendar(Config.DEFAULT_CALENDAR_TITLE, Config.DEFAULT_VISIBILITY)
            self.calendars.append(self.selected)
            self.logger.info(f"Created calendar '{self.selected.title}'")

        self.auto_save_listener: Optional[AutoSaveListener] = None
        if auto_save:
            self.auto_save_listener = AutoSaveListener(self)
            self.selected.add_calendar_listener(self.auto_save_listener)

        self.logger.debug(
            f"Selected '{self.selected.title}' with {len(self.selected)} events"
        )

    def select(self, title: str) -> Calendar:
        """
        Switch to the calendar with the given title, creating it if missing.

        The auto-save listener follows the selection.
        """
        match = next((c for c in self.calendars if c.title == title), None)
        if match is None:
            match = Calendar(title, Config.DEFAULT_VISIBILITY)
            self.calendars.append(match)
            self.logger.info(f"Created calendar '{title}'")

        if self.auto_save_listener is not None:
            self.selected.remove_calendar_listener(self.auto_save_listener)
            match.add_calendar_listener(self.auto_save_listener)

        self.selected = match
        return match

    def save(self) -> List[Path]:
        """Write every calendar to the data directory."""
        return save_all_calendars(self.calendars, self.data_dir)
