"""
VTODO property names understood by the parser.
"""

from enum import Enum
from typing import Optional, Tuple


class PropertyKind(Enum):
    """Property names that map onto Todo fields."""

    UID = "UID"
    SUMMARY = "SUMMARY"
    DESCRIPTION = "DESCRIPTION"
    STATUS = "STATUS"
    PRIORITY = "PRIORITY"
    CATEGORIES = "CATEGORIES"
    DUE = "DUE"
    CREATED = "CREATED"
    DTSTAMP = "DTSTAMP"
    UNKNOWN = ""

    @classmethod
    def from_name(cls, name: str) -> "PropertyKind":
        """Look up a property name; unrecognized names map to UNKNOWN."""
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


def split_property(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a NAME[;PARAMS]:VALUE line.

    Parameters are discarded: "DUE;VALUE=DATE:20250615" gives
    ("DUE", "20250615").

    Returns:
        (name, value), or None when the line has no colon
    """
    name, sep, value = line.partition(":")
    if not sep:
        return None
    return name.split(";", 1)[0], value
