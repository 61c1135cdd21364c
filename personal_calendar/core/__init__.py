from .config_manager import Config
from .listeners import CalendarListener, ListenerRegistry
from .calendar import Calendar

__all__ = ["Config", "CalendarListener", "ListenerRegistry", "Calendar"]
