"""Parser and query engine for YaST2 logs.

Nothing in this package touches the filesystem except :mod:`.log_service`.
"""

from __future__ import annotations

from .models import Entry, FieldDecodeError, Level, Location, Log, Pid, format_datetime
from .parser import ParseError, parse, parse_location
from .query import Predicates, Query
from .time_window import parse_datetime, resolve_time_window

__all__ = [
    "Entry",
    "FieldDecodeError",
    "Level",
    "Location",
    "Log",
    "ParseError",
    "Pid",
    "Predicates",
    "Query",
    "format_datetime",
    "parse",
    "parse_datetime",
    "parse_location",
    "resolve_time_window",
]
