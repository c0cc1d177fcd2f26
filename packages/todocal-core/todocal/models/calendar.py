"""
Calendar file metadata.
"""

from dataclasses import dataclass


@dataclass
class CalendarFile:
    """
    A calendar file found in the calendars directory.

    Attributes:
        name: File name without the .ics extension
        path: Full path to the file
        last_modified: Modification time in seconds since the epoch
        todo_count: Number of BEGIN:VTODO markers in the file
    """

    name: str
    path: str
    last_modified: str
    todo_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "path": self.path,
            "last_modified": self.last_modified,
            "todo_count": self.todo_count,
        }
