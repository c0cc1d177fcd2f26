"""
Integration tests for the todocal MCP server.

These tests verify the full stack works together:
- MCP server registers the calendar and todo tools
- A calendar can be created, filled, listed and read back through the tools
- Files written by the server are valid VTODO calendars
"""

import pytest

# Check if MCP is available
try:
    from mcp.server.fastmcp import FastMCP
    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False


@pytest.mark.skipif(not MCP_AVAILABLE, reason="MCP module not installed")
class TestMCPServerStartup:
    """Test that the MCP server starts correctly."""

    def test_server_creates(self):
        """Test server creation."""
        from todocal_mcp.server import mcp

        assert mcp is not None
        assert mcp.name == "todocal"

    @pytest.mark.asyncio
    async def test_server_has_tools(self):
        """Test server registers expected tools."""
        from todocal_mcp.server import mcp

        tool_names = {tool.name for tool in await mcp.list_tools()}

        assert {
            "calendars_path",
            "calendars_list",
            "calendar_create",
            "todos_load",
            "todos_save",
            "todocal_health",
        } <= tool_names


@pytest.mark.skipif(not MCP_AVAILABLE, reason="MCP module not installed")
class TestCalendarWorkflow:
    """Walk through a typical session against a temporary directory."""

    @pytest.mark.asyncio
    async def test_create_fill_list_load(self, calendars_dir, monkeypatch):
        """Test the full create, save, list, load cycle."""
        from todocal.config import TodocalConfig
        from todocal.ical import count_todos
        from todocal.services import CalendarService
        from todocal_mcp import server

        monkeypatch.setattr(
            server, "_service", CalendarService(calendars_dir=calendars_dir, config=TodocalConfig())
        )

        created = await server.calendar_create("home")
        await server.todos_save(created["path"], [
            {"id": "h-1", "title": "Fix the tap", "priority": "high", "dueDate": "2025-06-20"},
            {"id": "h-2", "title": "Paint fence; buy brushes", "completed": True},
            {"id": "h-3", "title": "Call plumber", "priority": "low", "category": "Calls"},
        ])

        listing = await server.calendars_list()
        loaded = await server.todos_load(created["path"])

        assert listing["calendars"][0]["todo_count"] == 3
        assert [t["id"] for t in loaded["todos"]] == ["h-1", "h-2", "h-3"]
        assert loaded["todos"][1]["title"] == "Paint fence; buy brushes"
        assert loaded["todos"][1]["completed"] is True
        assert loaded["todos"][2]["priority"] == "low"

        raw = (calendars_dir / "home.ics").read_bytes().decode("utf-8")
        assert count_todos(raw) == 3
        assert "SUMMARY:Paint fence\\; buy brushes\r\n" in raw
