"""
Todocal MCP Server

Exposes iCalendar todo lists stored on disk as MCP tools.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from todocal.config import get_config, reload_config
from todocal.models import Todo
from todocal.services import CalendarService, CalendarStorageError

# Initialize FastMCP server
mcp = FastMCP("todocal")

logger = logging.getLogger(__name__)

# Global state
_service: Optional[CalendarService] = None


def get_service() -> CalendarService:
    """Get the shared calendar service, creating it on first use."""
    global _service
    if _service is None:
        _service = CalendarService(config=get_config())
        logger.info(f"Todocal using calendars directory: {_service.calendars_dir}")
    return _service


def reset_service() -> None:
    """Re-read configuration and drop the shared service."""
    global _service
    reload_config()
    _service = None


# =============================================================================
# CALENDAR TOOLS
# =============================================================================

@mcp.tool()
async def calendars_path() -> dict:
    """
    Get the directory calendar files are read from.

    Returns:
        Absolute path of the calendars directory
    """
    try:
        path = get_service().calendars_dir
    except CalendarStorageError as e:
        return {"error": str(e)}

    return {"path": str(path)}


@mcp.tool()
async def calendars_list() -> dict:
    """
    List available calendar files, most recently modified first.

    Returns:
        Calendars with name, path, last_modified and todo_count
    """
    try:
        calendars = get_service().list_calendars()
    except CalendarStorageError as e:
        return {"error": str(e)}

    return {
        "calendars": [c.to_dict() for c in calendars],
        "count": len(calendars),
    }


@mcp.tool()
async def calendar_create(name: str) -> dict:
    """
    Create a new, empty calendar file.

    Args:
        name: Calendar name (file name without .ics)

    Returns:
        Created calendar details
    """
    try:
        calendar = get_service().create_calendar(name)
    except (CalendarStorageError, ValueError) as e:
        return {"error": str(e)}

    return calendar.to_dict()


# =============================================================================
# TODO TOOLS
# =============================================================================

@mcp.tool()
async def todos_load(calendar_path: str) -> dict:
    """
    Load all todos from a calendar file.

    Args:
        calendar_path: Path to the .ics file (as returned by calendars_list)

    Returns:
        List of todos
    """
    try:
        todos = get_service().load_todos(calendar_path)
    except CalendarStorageError as e:
        return {"error": str(e)}

    return {
        "todos": [t.to_dict() for t in todos],
        "count": len(todos),
        "calendar": Path(calendar_path).stem,
    }


@mcp.tool()
async def todos_save(calendar_path: str, todos: List[Dict[str, Any]]) -> dict:
    """
    Replace the todos of a calendar file.

    Todos missing from the list are removed from the file.

    Args:
        calendar_path: Path to the .ics file
        todos: Todos with id, title, description, completed, priority,
               category, dueDate and createdAt

    Returns:
        Number of todos written
    """
    records = [Todo.from_dict(data) for data in todos]

    try:
        get_service().save_todos(calendar_path, records)
    except CalendarStorageError as e:
        return {"error": str(e)}

    return {
        "saved": len(records),
        "calendar_path": calendar_path,
    }


# =============================================================================
# UTILITY TOOLS
# =============================================================================

@mcp.tool()
async def todocal_health() -> dict:
    """
    Check that the calendars directory is usable.

    Returns:
        Health status with the calendars directory and calendar count
    """
    try:
        service = get_service()
        calendars = service.list_calendars()
    except CalendarStorageError as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "calendars_dir": str(service.calendars_dir),
        "calendar_count": len(calendars),
    }


# =============================================================================
# CLI ENTRY POINT
# =============================================================================

def main():
    """Main entry point for todocal-mcp command."""
    import argparse

    parser = argparse.ArgumentParser(description="Todocal MCP Server")
    parser.add_argument("command", nargs="?", default="serve", help="Command to run (serve, list)")
    args = parser.parse_args()

    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        level=get_config().log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "list":
        try:
            calendars = get_service().list_calendars()
        except CalendarStorageError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        for calendar in calendars:
            print(f"{calendar.name}\t{calendar.todo_count} todos\t{calendar.path}")
    else:
        # Start MCP server
        mcp.run()


if __name__ == "__main__":
    main()
