"""
Core data models for Todocal.
"""

from todocal.models.calendar import CalendarFile
from todocal.models.todo import TODO_PRIORITIES, UNTITLED_TITLE, Todo

__all__ = [
    "Todo",
    "CalendarFile",
    "TODO_PRIORITIES",
    "UNTITLED_TITLE",
]
