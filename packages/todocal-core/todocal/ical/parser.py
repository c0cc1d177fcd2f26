"""
VTODO parser.

Turns calendar text into Todo records. Parsing never fails: malformed
lines are skipped, bad dates are dropped and missing fields get defaults,
so a partly corrupt file still yields every todo that can be recovered.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from todocal.ical.dates import decode_due, decode_timestamp
from todocal.ical.escape import unescape_text
from todocal.ical.events import (
    CALENDAR_PARSED,
    DATE_REJECTED,
    PROPERTY_MALFORMED,
    PROPERTY_UNKNOWN,
    TODO_DEFAULTED,
    CodecObserver,
    notify,
)
from todocal.ical.properties import PropertyKind, split_property
from todocal.ical.scanner import iter_blocks
from todocal.models.todo import DEFAULT_PRIORITY, UNTITLED_TITLE, Todo

COMPLETED_STATUS = "COMPLETED"

# iCalendar priorities 1-9 folded into three levels
PRIORITY_LEVELS = {
    "1": "high", "2": "high", "3": "high",
    "4": "medium", "5": "medium", "6": "medium",
    "7": "low", "8": "low", "9": "low",
}

# A handler stores a value into the draft fields and returns a note when
# the value had to be dropped.
Handler = Callable[[Dict[str, Any], str], Optional[str]]


@dataclass
class ParseOutcome:
    """
    Result of parsing one VTODO block.

    There is no failure case: todo is always set. notes lists what was
    skipped or defaulted along the way.
    """

    todo: Todo
    notes: List[str] = field(default_factory=list)


def priority_level(value: str) -> str:
    """Map an iCalendar PRIORITY value to high/medium/low."""
    return PRIORITY_LEVELS.get(value, DEFAULT_PRIORITY)


def _set_uid(fields: Dict[str, Any], value: str) -> Optional[str]:
    fields["id"] = value
    return None


def _set_summary(fields: Dict[str, Any], value: str) -> Optional[str]:
    fields["title"] = unescape_text(value)
    return None


def _set_description(fields: Dict[str, Any], value: str) -> Optional[str]:
    fields["description"] = unescape_text(value)
    return None


def _set_status(fields: Dict[str, Any], value: str) -> Optional[str]:
    fields["completed"] = value == COMPLETED_STATUS
    return None


def _set_priority(fields: Dict[str, Any], value: str) -> Optional[str]:
    fields["priority"] = priority_level(value)
    return None


def _set_categories(fields: Dict[str, Any], value: str) -> Optional[str]:
    fields["category"] = unescape_text(value)
    return None


def _set_due(fields: Dict[str, Any], value: str) -> Optional[str]:
    decoded = decode_due(value)
    if decoded is None:
        return f"DUE value {value!r} is not a date"
    fields["due_date"] = decoded
    return None


def _set_created(fields: Dict[str, Any], value: str) -> Optional[str]:
    # CREATED and DTSTAMP share this field; the later line wins.
    decoded = decode_timestamp(value)
    if decoded is None:
        return f"timestamp {value!r} is not a date or date-time"
    fields["created_at"] = decoded
    return None


PROPERTY_HANDLERS: Dict[PropertyKind, Handler] = {
    PropertyKind.UID: _set_uid,
    PropertyKind.SUMMARY: _set_summary,
    PropertyKind.DESCRIPTION: _set_description,
    PropertyKind.STATUS: _set_status,
    PropertyKind.PRIORITY: _set_priority,
    PropertyKind.CATEGORIES: _set_categories,
    PropertyKind.DUE: _set_due,
    PropertyKind.CREATED: _set_created,
    PropertyKind.DTSTAMP: _set_created,
}

_DATE_KINDS = (PropertyKind.DUE, PropertyKind.CREATED, PropertyKind.DTSTAMP)


def parse_vtodo(
    lines: List[str],
    calendar_name: str,
    observer: Optional[CodecObserver] = None,
) -> ParseOutcome:
    """
    Parse the property lines of one VTODO block.

    Args:
        lines: Raw lines between BEGIN:VTODO and END:VTODO
        calendar_name: Name of the calendar the block came from
        observer: Optional event observer

    Returns:
        ParseOutcome holding the todo and any notes
    """
    fields: Dict[str, Any] = {
        "id": "",
        "title": "",
        "description": "",
        "completed": False,
        "priority": DEFAULT_PRIORITY,
        "category": None,
        "due_date": None,
        "created_at": None,
    }
    notes: List[str] = []

    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        parts = split_property(line)
        if parts is None:
            notes.append(f"skipped line without a colon: {line!r}")
            notify(observer, PROPERTY_MALFORMED, notes[-1], line=line)
            continue

        name, value = parts
        kind = PropertyKind.from_name(name)
        if kind is PropertyKind.UNKNOWN:
            notes.append(f"ignored property {name}")
            notify(observer, PROPERTY_UNKNOWN, notes[-1], property=name)
            continue

        note = PROPERTY_HANDLERS[kind](fields, value)
        if note:
            notes.append(note)
            if kind in _DATE_KINDS:
                notify(observer, DATE_REJECTED, note, property=name, value=value)

    if not fields["id"]:
        fields["id"] = str(uuid4())
        notes.append(f"missing UID, generated {fields['id']}")
        notify(observer, TODO_DEFAULTED, notes[-1], field="id", value=fields["id"])

    if not fields["title"]:
        fields["title"] = UNTITLED_TITLE
        notes.append("missing SUMMARY, using placeholder title")
        notify(observer, TODO_DEFAULTED, notes[-1], field="title", todo_id=fields["id"])

    return ParseOutcome(todo=Todo(calendar_name=calendar_name, **fields), notes=notes)


def parse_calendar(
    raw_text: str,
    source_name: str,
    observer: Optional[CodecObserver] = None,
) -> List[Todo]:
    """
    Parse every complete VTODO block in calendar text.

    Args:
        raw_text: Calendar text
        source_name: Calendar name attached to each todo as calendar_name
        observer: Optional event observer

    Returns:
        Todos in the order their blocks appear
    """
    todos = [
        parse_vtodo(block, source_name, observer).todo
        for block in iter_blocks(raw_text, observer)
    ]

    notify(
        observer,
        CALENDAR_PARSED,
        f"Parsed {len(todos)} VTODOs from calendar '{source_name}'",
        calendar=source_name,
        count=len(todos),
    )
    return todos
