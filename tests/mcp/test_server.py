"""
Tests for the todocal MCP server tools.

Tools are called directly against a temporary calendars directory.
"""

import pytest

# Check if MCP is available
try:
    from mcp.server.fastmcp import FastMCP
    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False

pytestmark = pytest.mark.skipif(not MCP_AVAILABLE, reason="MCP module not installed")


@pytest.fixture
def server(calendars_dir, monkeypatch):
    """Point the server at a temporary calendars directory."""
    from todocal.config import TodocalConfig
    from todocal.services import CalendarService
    from todocal_mcp import server as server_module

    service = CalendarService(calendars_dir=calendars_dir, config=TodocalConfig())
    monkeypatch.setattr(server_module, "_service", service)
    yield server_module
    server_module.reset_service()


class TestCalendarTools:
    """Tests for calendar tools."""

    @pytest.mark.asyncio
    async def test_calendars_path(self, server, calendars_dir):
        """Test reporting the calendars directory."""
        result = await server.calendars_path()

        assert result == {"path": str(calendars_dir)}

    @pytest.mark.asyncio
    async def test_calendars_list(self, server, calendars_dir, sample_calendar_text):
        """Test listing calendars with todo counts."""
        (calendars_dir / "personal.ics").write_text(sample_calendar_text)

        result = await server.calendars_list()

        assert result["count"] == 1
        assert result["calendars"][0]["name"] == "personal"
        assert result["calendars"][0]["todo_count"] == 2

    @pytest.mark.asyncio
    async def test_calendar_create(self, server, calendars_dir):
        """Test creating a calendar and refusing a duplicate."""
        created = await server.calendar_create("errands")
        duplicate = await server.calendar_create("errands")

        assert created["name"] == "errands"
        assert (calendars_dir / "errands.ics").exists()
        assert "error" in duplicate

    @pytest.mark.asyncio
    async def test_calendar_create_invalid_name(self, server):
        """Test that a bad name is reported, not raised."""
        result = await server.calendar_create("../outside")

        assert "Invalid calendar name" in result["error"]


class TestTodoTools:
    """Tests for todo tools."""

    @pytest.mark.asyncio
    async def test_todos_load(self, server, calendars_dir, sample_calendar_text):
        """Test loading todos in the client shape."""
        path = calendars_dir / "personal.ics"
        path.write_text(sample_calendar_text)

        result = await server.todos_load(str(path))

        assert result["count"] == 2
        assert result["calendar"] == "personal"
        assert result["todos"][0]["id"] == "abc-1"
        assert result["todos"][0]["dueDate"] == "2025-06-15"
        assert result["todos"][0]["priority"] == "high"

    @pytest.mark.asyncio
    async def test_todos_load_missing_file(self, server, calendars_dir):
        """Test that a missing file is reported as an error."""
        result = await server.todos_load(str(calendars_dir / "missing.ics"))

        assert "Failed to read calendar file" in result["error"]

    @pytest.mark.asyncio
    async def test_todos_save_then_load(self, server, calendars_dir, sample_todo_data):
        """Test saving client todos and reading them back."""
        path = str(calendars_dir / "work.ics")

        saved = await server.todos_save(path, [sample_todo_data, {"title": "Second"}])
        loaded = await server.todos_load(path)

        assert saved == {"saved": 2, "calendar_path": path}
        assert loaded["count"] == 2
        first = loaded["todos"][0]
        assert first["id"] == "todo-1"
        assert first["title"] == "Test Todo"
        assert first["category"] == "Work"
        assert first["dueDate"] == "2025-06-15"
        assert first["calendar_name"] == "work"
        assert loaded["todos"][1]["title"] == "Second"


class TestUtilityTools:
    """Tests for utility tools."""

    @pytest.mark.asyncio
    async def test_health(self, server, calendars_dir):
        """Test health check on a usable directory."""
        (calendars_dir / "a.ics").write_text("")

        result = await server.todocal_health()

        assert result["status"] == "healthy"
        assert result["calendar_count"] == 1
        assert result["calendars_dir"] == str(calendars_dir)

    @pytest.mark.asyncio
    async def test_health_unusable_directory(self, tmp_path, monkeypatch):
        """Test health check when the directory is gone."""
        from todocal.config import TodocalConfig
        from todocal.services import CalendarService
        from todocal_mcp import server as server_module

        service = CalendarService(calendars_dir=tmp_path / "gone", config=TodocalConfig())
        monkeypatch.setattr(server_module, "_service", service)

        result = await server_module.todocal_health()

        assert result["status"] == "unhealthy"
        assert "error" in result

    def test_get_service_uses_config(self, tmp_path, monkeypatch):
        """Test that the shared service reads the calendars directory from config."""
        from todocal import config as config_module
        from todocal_mcp import server as server_module

        monkeypatch.setenv("TODOCAL_CALENDARS_DIR", str(tmp_path / "cals"))
        monkeypatch.setattr(config_module, "_config", None)
        monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "none.yaml")
        server_module.reset_service()

        try:
            service = server_module.get_service()
            assert service.calendars_dir == tmp_path / "cals"
        finally:
            server_module.reset_service()

    def test_reset_service_rereads_config_file(self, tmp_path, monkeypatch):
        """Test that resetting the service picks up an edited config file."""
        from todocal import config as config_module
        from todocal_mcp import server as server_module

        monkeypatch.delenv("TODOCAL_CALENDARS_DIR", raising=False)
        monkeypatch.delenv("TODOCAL_LOG_LEVEL", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"storage:\n  calendars_dir: {tmp_path / 'first'}\n")
        monkeypatch.setattr(config_module, "_config", None)
        monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
        server_module.reset_service()

        try:
            assert server_module.get_service().calendars_dir == tmp_path / "first"

            config_file.write_text(f"storage:\n  calendars_dir: {tmp_path / 'second'}\n")
            server_module.reset_service()

            assert server_module.get_service().calendars_dir == tmp_path / "second"
        finally:
            server_module.reset_service()


class TestServiceErrors:
    """Tests for tools when the calendars directory cannot be resolved."""

    @pytest.fixture
    def broken_server(self, monkeypatch):
        """Make every get_service() call fail."""
        from todocal.services import CalendarStorageError
        from todocal_mcp import server as server_module

        def fail():
            raise CalendarStorageError("Calendars directory not found: /missing")

        monkeypatch.setattr(server_module, "get_service", fail)
        return server_module

    @pytest.mark.asyncio
    async def test_todos_load_reports_error(self, broken_server):
        """Test that load returns an error result instead of raising."""
        result = await broken_server.todos_load("/missing/work.ics")

        assert result == {"error": "Calendars directory not found: /missing"}

    @pytest.mark.asyncio
    async def test_todos_save_reports_error(self, broken_server, sample_todo_data):
        """Test that save returns an error result instead of raising."""
        result = await broken_server.todos_save("/missing/work.ics", [sample_todo_data])

        assert result == {"error": "Calendars directory not found: /missing"}
