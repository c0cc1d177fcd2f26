"""
iCalendar VTODO codec.

Converts calendar text to Todo records and back.
"""

from todocal.ical.escape import escape_text, unescape_text
from todocal.ical.events import CodecEvent, CodecObserver, CollectingObserver, LoggingObserver
from todocal.ical.parser import ParseOutcome, parse_calendar, parse_vtodo
from todocal.ical.scanner import count_blocks, iter_blocks
from todocal.ical.serializer import serialize_calendar


def count_todos(raw_text: str) -> int:
    """Count VTODO begin markers, including a trailing unclosed one."""
    return count_blocks(raw_text)


__all__ = [
    "parse_calendar",
    "parse_vtodo",
    "serialize_calendar",
    "count_todos",
    "escape_text",
    "unescape_text",
    "iter_blocks",
    "ParseOutcome",
    "CodecEvent",
    "CodecObserver",
    "CollectingObserver",
    "LoggingObserver",
]
