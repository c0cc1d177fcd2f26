"""
Pytest configuration and fixtures for todocal tests.
"""

import pytest
import sys
from pathlib import Path

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "todocal-core"))
sys.path.insert(0, str(packages_dir / "todocal-mcp"))


SAMPLE_CALENDAR = (
    "BEGIN:VCALENDAR\r\n"
    "VERSION:2.0\r\n"
    "PRODID:-//Some Other App//EN\r\n"
    "BEGIN:VTODO\r\n"
    "UID:abc-1\r\n"
    "SUMMARY:Buy milk\r\n"
    "STATUS:NEEDS-ACTION\r\n"
    "PRIORITY:2\r\n"
    "DUE:20250615\r\n"
    "END:VTODO\r\n"
    "BEGIN:VTODO\r\n"
    "UID:abc-2\r\n"
    "SUMMARY:File taxes\\, finally\r\n"
    "DESCRIPTION:Forms are in the drawer\\nCall the accountant first\r\n"
    "STATUS:COMPLETED\r\n"
    "PRIORITY:9\r\n"
    "CATEGORIES:Admin\r\n"
    "CREATED:20250101T120000Z\r\n"
    "END:VTODO\r\n"
    "END:VCALENDAR\r\n"
)


@pytest.fixture
def sample_calendar_text():
    """A small calendar with two todos."""
    return SAMPLE_CALENDAR


@pytest.fixture
def calendars_dir(tmp_path):
    """Create a temporary calendars directory."""
    directory = tmp_path / "calendars"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_todo_data():
    """Sample todo data as a client would send it."""
    return {
        "id": "todo-1",
        "title": "Test Todo",
        "description": "A test todo description",
        "completed": False,
        "priority": "high",
        "category": "Work",
        "dueDate": "2025-06-15",
        "createdAt": "2025-01-02T13:00:00",
    }
