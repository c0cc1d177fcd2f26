"""
Todocal Core Library

Personal todo lists stored as iCalendar VTODO files.
"""

__version__ = "0.1.0"

from todocal.config import TodocalConfig, load_config
from todocal.ical import count_todos, parse_calendar, serialize_calendar
from todocal.models import CalendarFile, Todo
from todocal.services import CalendarService, CalendarStorageError

__all__ = [
    "load_config",
    "TodocalConfig",
    "parse_calendar",
    "serialize_calendar",
    "count_todos",
    "Todo",
    "CalendarFile",
    "CalendarService",
    "CalendarStorageError",
]
