"""Core data models for YaST2 logs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .query import Query


def format_datetime(dt: datetime) -> str:
    """Render a timestamp as fixed-width 'YYYY-MM-DD HH:MM:SS' (years zero-padded)."""
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )


class FieldDecodeError(ValueError):
    """A standalone field value (level name, pid, datetime) could not be decoded."""


class Level(Enum):
    """Entry severity, backed by the numeric code used in y2log files (``<0>``..``<5>``)."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    UNKNOWN = 5

    @classmethod
    def from_ordinal(cls, value: int) -> Level:
        """Map a numeric severity code to a level; codes outside 0..5 are UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def parse(cls, name: str) -> Level:
        """Decode a level name (debug, info, warn, error, fatal or unknown)."""
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError as e:
            valid = ", ".join(lvl.name.lower() for lvl in cls)
            raise FieldDecodeError(f"Unknown log level '{name}'. Valid values: {valid}.") from e

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True, order=True)
class Pid:
    """Process ID of the process that wrote an entry."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise FieldDecodeError(f"pid must be an integer, got {self.value!r}")
        if self.value < 0:
            raise FieldDecodeError(f"pid must be >= 0, got {self.value}")

    @classmethod
    def parse(cls, text: str) -> Pid:
        """Decode a pid from decimal text."""
        s = text.strip()
        if not s.isascii() or not s.isdigit():
            raise FieldDecodeError(f"Could not parse pid '{text}'")
        return cls(int(s))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Location:
    """Origin of a log message: a file plus optional method and line number."""

    file: str
    method: str | None = None
    line: int | None = None

    def __post_init__(self) -> None:
        if not self.file:
            raise FieldDecodeError("location file must not be empty")
        if self.line is not None and self.line < 0:
            raise FieldDecodeError("location line must be >= 0")

    def __str__(self) -> str:
        out = self.file
        if self.method is not None:
            out += f"({self.method})"
        if self.line is not None:
            out += f":{self.line}"
        return out


@dataclass(frozen=True, slots=True)
class Entry:
    """One parsed y2log record."""

    datetime: datetime
    level: Level
    hostname: str
    pid: Pid
    component: str
    location: Location
    message: str  # may span several physical lines

    def __str__(self) -> str:
        return (
            f"{format_datetime(self.datetime)} <{self.level}> "
            f"{self.hostname}({self.pid}) [{self.component}] "
            f"{self.location} {self.message}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the entry into a JSON-serializable dict."""
        return {
            "datetime": format_datetime(self.datetime),
            "level": self.level.name.lower(),
            "hostname": self.hostname,
            "pid": self.pid.value,
            "component": self.component,
            "file": self.location.file,
            "method": self.location.method,
            "line": self.location.line,
            "message": self.message,
        }


class Log:
    """Ordered, read-only collection of entries from one source."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)

    @classmethod
    def parse(cls, text: str) -> Log:
        """Build a Log from the full text of a y2log file."""
        from .parser import parse

        return cls(parse(text))

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def query(self) -> Query:
        """Return a query bound to this log."""
        from .query import Query

        return Query(self)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Log):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Log({len(self._entries)} entries)"
