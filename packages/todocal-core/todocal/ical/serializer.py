"""
Calendar serializer.

Writes todos back out as a VCALENDAR of VTODO records.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from todocal.ical.dates import encode_date, encode_datetime, format_utc_stamp
from todocal.ical.escape import escape_text
from todocal.ical.events import (
    CALENDAR_SERIALIZED,
    DATE_UNENCODABLE,
    CodecObserver,
    notify,
)
from todocal.models.todo import Todo

CRLF = "\r\n"

PRODUCT_ID = "-//Todo Calendar//Todo Calendar//EN"

CALENDAR_HEADER = (
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    f"PRODID:{PRODUCT_ID}",
    "CALSCALE:GREGORIAN",
)
CALENDAR_FOOTER = ("END:VCALENDAR",)

# Reverse of the parser's priority levels
PRIORITY_NUMBERS = {"high": "1", "medium": "5", "low": "9"}


def priority_number(priority: str) -> str:
    """Map high/medium/low to an iCalendar PRIORITY value (default 5)."""
    return PRIORITY_NUMBERS.get(priority, "5")


def _vtodo_lines(todo: Todo, stamp: str, observer: Optional[CodecObserver]) -> List[str]:
    lines = [
        "BEGIN:VTODO",
        f"UID:{todo.id}",
        f"SUMMARY:{escape_text(todo.title)}",
    ]

    if todo.description:
        lines.append(f"DESCRIPTION:{escape_text(todo.description)}")

    lines.append("STATUS:COMPLETED" if todo.completed else "STATUS:NEEDS-ACTION")
    lines.append(f"PRIORITY:{priority_number(todo.priority)}")

    if todo.category is not None:
        lines.append(f"CATEGORIES:{escape_text(todo.category)}")

    if todo.due_date:
        due = encode_date(todo.due_date)
        if due:
            lines.append(f"DUE:{due}")
        else:
            notify(
                observer,
                DATE_UNENCODABLE,
                f"dropping due date {todo.due_date!r} of todo {todo.id}",
                field="due_date",
                value=todo.due_date,
                todo_id=todo.id,
            )

    if todo.created_at:
        created = encode_datetime(todo.created_at)
        if created:
            lines.append(f"CREATED:{created}")
        else:
            notify(
                observer,
                DATE_UNENCODABLE,
                f"dropping creation date {todo.created_at!r} of todo {todo.id}",
                field="created_at",
                value=todo.created_at,
                todo_id=todo.id,
            )

    lines.append(f"DTSTAMP:{stamp}")
    lines.append("END:VTODO")
    return lines


def serialize_calendar(
    todos: Iterable[Todo],
    observer: Optional[CodecObserver] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Serialize todos as a complete calendar.

    calendar_name is not written. DTSTAMP is always the time of this call,
    not a value carried on the todo.

    Args:
        todos: Todos in the order they should be written
        observer: Optional event observer
        now: Timestamp for DTSTAMP (defaults to the current UTC time)

    Returns:
        Calendar text with CRLF line endings
    """
    stamp = format_utc_stamp(now or datetime.now(timezone.utc))

    lines = list(CALENDAR_HEADER)
    count = 0
    for todo in todos:
        lines.extend(_vtodo_lines(todo, stamp, observer))
        count += 1
    lines.extend(CALENDAR_FOOTER)

    notify(observer, CALENDAR_SERIALIZED, f"Serialized {count} todos", count=count)
    return "".join(line + CRLF for line in lines)
