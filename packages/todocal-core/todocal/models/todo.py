"""
Todo model for Todocal.

A Todo is one VTODO record from a calendar file, in the shape the
application works with.
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4


# Valid priority values, highest first
TODO_PRIORITIES = ("high", "medium", "low")

DEFAULT_PRIORITY = "medium"

# Title given to records that have no SUMMARY
UNTITLED_TITLE = "Untitled Task"


@dataclass
class Todo:
    """
    A todo item.

    Attributes:
        id: Unique identifier (the VTODO UID)
        title: Short summary
        description: Longer free text, may be empty
        completed: Whether STATUS is COMPLETED
        priority: Priority level (high, medium, low)
        category: Optional category
        due_date: Optional due date, ISO "YYYY-MM-DD"
        created_at: Optional creation date or date-time, ISO format
        calendar_name: Name of the calendar file this todo was loaded from
    """

    title: str
    id: str = field(default_factory=lambda: str(uuid4()))
    description: str = ""
    completed: bool = False
    priority: str = DEFAULT_PRIORITY
    category: Optional[str] = None
    due_date: Optional[str] = None
    created_at: Optional[str] = None
    calendar_name: str = ""

    @property
    def is_open(self) -> bool:
        """Check if the todo still needs action."""
        return not self.completed

    def to_dict(self) -> dict:
        """Convert to the dictionary shape used by clients."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "category": self.category,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
            "calendar_name": self.calendar_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Todo":
        """
        Create a Todo from a client dictionary.

        Accepts the camelCase keys written by to_dict() as well as the
        attribute names.
        """
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = str(data["id"])

        return cls(
            title=data.get("title") or "",
            description=data.get("description") or "",
            completed=bool(data.get("completed", False)),
            priority=data.get("priority") or DEFAULT_PRIORITY,
            category=data.get("category"),
            due_date=data.get("dueDate", data.get("due_date")),
            created_at=data.get("createdAt", data.get("created_at")),
            calendar_name=data.get("calendar_name", data.get("calendarName")) or "",
            **kwargs,
        )
