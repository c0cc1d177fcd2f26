"""
Services for Todocal.
"""

from todocal.services.calendars import (
    CalendarService,
    CalendarStorageError,
    locate_calendars_dir,
)

__all__ = [
    "CalendarService",
    "CalendarStorageError",
    "locate_calendars_dir",
]
