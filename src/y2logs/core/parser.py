"""YaST2 log grammar parser.

A y2log record looks like::

    2022-08-25 14:28:44 <1> localhost.localdomain(12375) [libstorage] SystemCmd.cc(addLine):569 Adding Line 14...

The message is the rest of the physical line plus every following line that
does not look like the start of a new record (a line starting with digits
followed by ``-``). Command output embedded in the log is therefore kept as
part of the message.

The parser walks the text with an offset; every step consumes one field and
returns ``(value, new_offset)`` or raises :class:`ParseError`.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime

from .models import Entry, Level, Location, Pid

_DATETIME_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2}) ([0-9]{2}):([0-9]{2}):([0-9]{2})")
# Look-ahead for the next record. A continuation line starting with "<digits>-"
# is mistaken for a new record; kept for compatibility with existing logs.
_RECORD_START_RE = re.compile(r"[0-9]+-")


class ParseError(Exception):
    """The text does not follow the y2log grammar."""

    def __init__(self, reason: str, *, offset: int, line_no: int) -> None:
        super().__init__(reason, offset, line_no)
        self.reason = reason
        self.offset = offset
        self.line_no = line_no

    def __str__(self) -> str:
        return f"unable to parse the log: {self.reason} (line {self.line_no}, offset {self.offset})"


def _fail(text: str, pos: int, reason: str) -> ParseError:
    return ParseError(reason, offset=pos, line_no=text.count("\n", 0, pos) + 1)


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_hostname_char(c: str) -> bool:
    return c.isalnum() or c in ".-"


def _is_component_char(c: str) -> bool:
    return c.isalnum() or c in ".-_+:"


def _is_file_char(c: str) -> bool:
    return c.isalnum() or c in "./_"


def _take_while(text: str, pos: int, pred: Callable[[str], bool]) -> tuple[str, int]:
    end = pos
    while end < len(text) and pred(text[end]):
        end += 1
    return text[pos:end], end


def _char(text: str, pos: int, expected: str, what: str) -> int:
    if not text.startswith(expected, pos):
        raise _fail(text, pos, f"expected {expected!r} {what}")
    return pos + 1


def _number(text: str, pos: int, what: str) -> tuple[int, int]:
    digits, end = _take_while(text, pos, _is_digit)
    if not digits:
        raise _fail(text, pos, f"expected digits for {what}")
    return int(digits), end


def _datetime(text: str, pos: int) -> tuple[datetime, int]:
    m = _DATETIME_RE.match(text, pos)
    if not m:
        raise _fail(text, pos, "expected a 'YYYY-MM-DD HH:MM:SS' timestamp")
    try:
        value = datetime(*(int(g) for g in m.groups()))
    except ValueError as e:
        raise _fail(text, pos, f"invalid timestamp: {e}") from e
    return value, m.end()


def _level(text: str, pos: int) -> tuple[Level, int]:
    pos = _char(text, pos, "<", "before the severity")
    code, pos = _number(text, pos, "the severity")
    pos = _char(text, pos, ">", "after the severity")
    return Level.from_ordinal(code), pos


def _hostname(text: str, pos: int) -> tuple[str, int]:
    return _take_while(text, pos, _is_hostname_char)


def _pid(text: str, pos: int) -> tuple[Pid, int]:
    pos = _char(text, pos, "(", "before the pid")
    value, pos = _number(text, pos, "the pid")
    pos = _char(text, pos, ")", "after the pid")
    return Pid(value), pos


def _component(text: str, pos: int) -> tuple[str, int]:
    pos = _char(text, pos, "[", "before the component")
    name, pos = _take_while(text, pos, _is_component_char)
    pos = _char(text, pos, "]", "after the component")
    return name, pos


def _method(text: str, pos: int) -> tuple[str | None, int]:
    if not text.startswith("(", pos):
        return None, pos
    close = text.find(")", pos + 1)
    newline = text.find("\n", pos + 1)
    if close == -1 or (newline != -1 and newline < close):
        return None, pos
    return text[pos + 1 : close], close + 1


def _line_number(text: str, pos: int) -> tuple[int | None, int]:
    if not text.startswith(":", pos):
        return None, pos
    digits, end = _take_while(text, pos + 1, _is_digit)
    if not digits:
        return None, pos
    return int(digits), end


def _location(text: str, pos: int) -> tuple[Location, int]:
    file, end = _take_while(text, pos, _is_file_char)
    if not file:
        raise _fail(text, pos, "expected a file name for the location")
    method, end = _method(text, end)
    line, end = _line_number(text, end)
    return Location(file=file, method=method, line=line), end


def _line_end(text: str, pos: int) -> int:
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def _message(text: str, pos: int) -> tuple[str, int]:
    end = _line_end(text, pos)
    while end < len(text):
        nxt = end + 1
        # A trailing newline closes the last message.
        if nxt == len(text) or _RECORD_START_RE.match(text, nxt):
            return text[pos:end], nxt
        end = _line_end(text, nxt)
    return text[pos:end], end


def _entry(text: str, pos: int) -> tuple[Entry, int]:
    dt, pos = _datetime(text, pos)
    pos = _char(text, pos, " ", "after the timestamp")
    level, pos = _level(text, pos)
    pos = _char(text, pos, " ", "after the severity")
    hostname, pos = _hostname(text, pos)
    pid, pos = _pid(text, pos)
    pos = _char(text, pos, " ", "after the pid")
    component, pos = _component(text, pos)
    pos = _char(text, pos, " ", "after the component")
    location, pos = _location(text, pos)
    pos = _char(text, pos, " ", "after the location")
    message, pos = _message(text, pos)
    entry = Entry(
        datetime=dt,
        level=level,
        hostname=hostname,
        pid=pid,
        component=component,
        location=location,
        message=message,
    )
    return entry, pos


def parse(text: str) -> list[Entry]:
    """Parse the full contents of a y2log file.

    Raises ParseError if any record does not follow the grammar; no partial
    result is returned in that case.
    """
    text = text.replace("\r\n", "\n")
    entries: list[Entry] = []
    pos = 0
    while pos < len(text):
        entry, pos = _entry(text, pos)
        entries.append(entry)
    return entries


def parse_location(text: str) -> Location:
    """Parse a standalone location such as ``modules/Stage.rb(Set):79``."""
    location, end = _location(text, 0)
    if end != len(text):
        raise _fail(text, end, "unexpected trailing characters after the location")
    return location
