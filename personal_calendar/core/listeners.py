# File: personal_calendar/core/listeners.py
"""
Observer support for calendar mutations.

Listeners are told about added and modified events. There is no removal
callback.
"""

import threading
from typing import List

from personal_calendar.models.event import Event
from personal_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


class CalendarListener:
    """
    Receives notifications about calendar changes.

    Both callbacks default to doing nothing, so subclasses only override
    the ones they care about.
    """
    
    def on_event_added(self, event: Event) -> None:
        """Called after an event (or one occurrence of a series) was added."""
    
    def on_event_modified(self, event: Event) -> None:
        """Called after an event was modified; receives the resulting event."""


class ListenerRegistry:
    """Ordered, duplicate-free collection of listeners."""
    
    def __init__(self):
        self._listeners: List[CalendarListener] = []
        self._lock = threading.Lock()
    
    def add(self, listener: CalendarListener) -> None:
        if listener is None:
            raise ValueError("Listener cannot be null")
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)
    
    def remove(self, listener: CalendarListener) -> None:
        if listener is None:
            return
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
    
    def snapshot(self) -> List[CalendarListener]:
        with self._lock:
            return list(self._listeners)
    
    def __len__(self) -> int:
        return len(self.snapshot())
    
    def announce_added(self, event: Event) -> None:
        for listener in self.snapshot():
            try:
                listener.on_event_added(event)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on event added: {e}", exc_info=True)
    
    def announce_modified(self, event: Event) -> None:
        for listener in self.snapshot():
            try:
                listener.on_event_modified(event)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on event modified: {e}", exc_info=True)
