"""
Calendar Service for Todocal.

Finds the calendars directory, lists the .ics files in it and loads or
saves the todos of one calendar file.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from todocal.config import TodocalConfig, load_config
from todocal.ical import LoggingObserver, count_todos, parse_calendar, serialize_calendar
from todocal.models import CalendarFile, Todo

logger = logging.getLogger(__name__)

CALENDARS_DIRNAME = "calendars"
CALENDAR_SUFFIX = ".ics"

PathLike = Union[str, Path]


class CalendarStorageError(RuntimeError):
    """A calendar file or directory could not be read or written."""


def has_calendar_files(directory: Path) -> bool:
    """Check whether a directory holds at least one .ics file."""
    try:
        return any(
            entry.is_file() and entry.suffix == CALENDAR_SUFFIX
            for entry in directory.iterdir()
        )
    except OSError:
        return False


def locate_calendars_dir(start: Optional[PathLike] = None, create_missing: bool = True) -> Path:
    """
    Find the calendars directory.

    Walks from start up to the filesystem root and returns the first
    "calendars" directory that contains .ics files. When none is found,
    falls back to start/calendars.

    Args:
        start: Directory to search from (default: current working directory)
        create_missing: Create the fallback directory if it does not exist

    Returns:
        Path to the calendars directory

    Raises:
        CalendarStorageError: If the fallback directory cannot be created
    """
    origin = Path(start).expanduser().resolve() if start else Path.cwd()

    for directory in (origin, *origin.parents):
        candidate = directory / CALENDARS_DIRNAME
        logger.debug(f"Checking for calendars at: {candidate}")
        if candidate.is_dir() and has_calendar_files(candidate):
            logger.debug(f"Found calendars directory with ICS files at: {candidate}")
            return candidate

    fallback = origin / CALENDARS_DIRNAME
    if create_missing and not fallback.exists():
        logger.info(f"Creating calendars directory at: {fallback}")
        try:
            fallback.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CalendarStorageError(f"Failed to create calendars directory: {e}") from e

    return fallback


class CalendarService:
    """
    Service for calendar files.

    Reading and writing go through the iCalendar codec; this class only
    adds the file handling around it.
    """

    def __init__(
        self,
        calendars_dir: Optional[PathLike] = None,
        config: Optional[TodocalConfig] = None,
    ):
        """
        Initialize calendar service.

        Args:
            calendars_dir: Optional calendars directory. If not provided, taken
                           from config or found by searching upwards.
            config: Optional TodocalConfig. If not provided, loads from default location.
        """
        self._calendars_dir = Path(calendars_dir).expanduser() if calendars_dir else None
        self._config = config
        self._observer = LoggingObserver(logger)

    @property
    def config(self) -> TodocalConfig:
        """Get the configuration."""
        if self._config is None:
            self._config = load_config()
        return self._config

    @property
    def calendars_dir(self) -> Path:
        """Get the calendars directory, resolving it on first use."""
        if self._calendars_dir is None:
            configured = self.config.calendars_dir
            if configured is not None:
                if self.config.storage.create_missing:
                    try:
                        configured.mkdir(parents=True, exist_ok=True)
                    except OSError as e:
                        raise CalendarStorageError(
                            f"Failed to create calendars directory: {e}"
                        ) from e
                self._calendars_dir = configured
            else:
                self._calendars_dir = locate_calendars_dir(
                    self.config.storage.search_from,
                    create_missing=self.config.storage.create_missing,
                )
        return self._calendars_dir

    def list_calendars(self) -> List[CalendarFile]:
        """
        List calendar files, most recently modified first.

        Returns:
            List of CalendarFile objects

        Raises:
            CalendarStorageError: If the directory cannot be read
        """
        try:
            entries = [
                entry for entry in self.calendars_dir.iterdir()
                if entry.is_file() and entry.suffix == CALENDAR_SUFFIX
            ]
        except OSError as e:
            raise CalendarStorageError(f"Failed to read calendars directory: {e}") from e

        calendars = []
        for path in entries:
            try:
                modified = int(path.stat().st_mtime)
            except OSError as e:
                raise CalendarStorageError(f"Failed to read file metadata: {e}") from e

            try:
                todo_count = self.count_todos_in_file(path)
            except CalendarStorageError as e:
                logger.warning(f"Could not count todos in {path}: {e}")
                todo_count = 0

            calendars.append(CalendarFile(
                name=path.stem,
                path=str(path),
                last_modified=str(modified),
                todo_count=todo_count,
            ))

        calendars.sort(key=lambda c: int(c.last_modified), reverse=True)
        return calendars

    def count_todos_in_file(self, path: PathLike) -> int:
        """Count the VTODO records in a calendar file."""
        return count_todos(self._read(Path(path)))

    def load_todos(self, calendar_path: PathLike) -> List[Todo]:
        """
        Load todos from a calendar file.

        Args:
            calendar_path: Path to the .ics file

        Returns:
            Todos tagged with the file name (without extension) as calendar_name

        Raises:
            CalendarStorageError: If the file cannot be read
        """
        path = Path(calendar_path)
        content = self._read(path)
        return parse_calendar(content, path.stem, self._observer)

    def save_todos(self, calendar_path: PathLike, todos: Iterable[Todo]) -> None:
        """
        Save todos to a calendar file, replacing its contents.

        Args:
            calendar_path: Path to the .ics file
            todos: Todos to write, in order

        Raises:
            CalendarStorageError: If the file cannot be written
        """
        path = Path(calendar_path)
        todos = list(todos)
        logger.info(f"Saving {len(todos)} todos to calendar file: {path}")

        content = serialize_calendar(todos, self._observer)
        try:
            # newline="" keeps the CRLF line endings as written
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise CalendarStorageError(f"Failed to write calendar file: {e}") from e

        logger.info(f"Wrote {len(content)} characters to {path}")

    def create_calendar(self, name: str) -> CalendarFile:
        """
        Create an empty calendar file in the calendars directory.

        Args:
            name: Calendar name (file name without extension)

        Returns:
            CalendarFile for the new file

        Raises:
            ValueError: If the name is empty or contains a path separator
            CalendarStorageError: If the file exists or cannot be written
        """
        name = name.strip()
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"Invalid calendar name: {name!r}")

        path = self.calendars_dir / f"{name}{CALENDAR_SUFFIX}"
        if path.exists():
            raise CalendarStorageError(f"Calendar already exists: {path}")

        self.save_todos(path, [])
        return CalendarFile(
            name=name,
            path=str(path),
            last_modified=str(int(path.stat().st_mtime)),
            todo_count=0,
        )

    def _read(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise CalendarStorageError(f"Failed to read calendar file: {e}") from e
