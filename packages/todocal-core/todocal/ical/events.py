"""
Codec events.

The parser and serializer never print diagnostics. They report what they
skipped or defaulted to an optional observer passed in by the caller.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# Event names
BLOCK_UNTERMINATED = "block.unterminated"
PROPERTY_UNKNOWN = "property.unknown"
PROPERTY_MALFORMED = "property.malformed"
DATE_REJECTED = "date.rejected"
DATE_UNENCODABLE = "date.unencodable"
TODO_DEFAULTED = "todo.defaulted"
CALENDAR_PARSED = "calendar.parsed"
CALENDAR_SERIALIZED = "calendar.serialized"


@dataclass
class CodecEvent:
    """
    A single diagnostic emitted by the codec.

    Attributes:
        name: Event name (e.g. "date.rejected")
        message: Human-readable description
        data: Structured details (property name, raw value, counts, ...)
    """

    name: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


class CodecObserver(ABC):
    """Receives codec events."""

    @abstractmethod
    def emit(self, event: CodecEvent) -> None:
        """Handle one event."""
        pass


class LoggingObserver(CodecObserver):
    """
    Forwards events to the standard logging module.

    Summary events are logged at INFO, everything else at DEBUG.
    """

    SUMMARY_EVENTS = (CALENDAR_PARSED, CALENDAR_SERIALIZED, BLOCK_UNTERMINATED)

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def emit(self, event: CodecEvent) -> None:
        level = logging.INFO if event.name in self.SUMMARY_EVENTS else logging.DEBUG
        self.log.log(level, f"[{event.name}] {event.message}")


class CollectingObserver(CodecObserver):
    """Keeps every event in memory. Handy for tests and for batch reports."""

    def __init__(self):
        self.events: List[CodecEvent] = []

    def emit(self, event: CodecEvent) -> None:
        self.events.append(event)

    def names(self) -> List[str]:
        return [e.name for e in self.events]


def notify(observer: Optional[CodecObserver], name: str, message: str, **data: Any) -> None:
    """Emit an event if an observer was supplied."""
    if observer is not None:
        observer.emit(CodecEvent(name=name, message=message, data=data))
