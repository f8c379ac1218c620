"""Time-window parsing helpers.

y2log timestamps are naive local times with second precision, so every window
here is naive and both bounds are inclusive.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from .models import FieldDecodeError

_DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")
_HOUR_RE = re.compile(r"^(?P<d>\d{4}-\d{2}-\d{2})T(?P<h>\d{2})$")
_MONTH_RE = re.compile(r"^(?P<y>\d{4})-(?P<m>\d{2})$")

_ONE_SECOND = timedelta(seconds=1)


def parse_datetime(s: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM:SS' (or with a 'T' separator) into a naive datetime."""
    value = s.strip()
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise FieldDecodeError(f"datetime must look like YYYY-MM-DD HH:MM:SS, got '{s}'")


def range_for_date(s: str) -> tuple[datetime, datetime]:
    """Return the inclusive window covering one day (YYYY-MM-DD)."""
    try:
        d = date.fromisoformat(s)
    except ValueError as e:
        raise FieldDecodeError("date must look like YYYY-MM-DD (e.g., 2022-08-25)") from e
    start = datetime(d.year, d.month, d.day)
    return start, start + timedelta(days=1) - _ONE_SECOND


def range_for_hour(s: str) -> tuple[datetime, datetime]:
    """Return the inclusive window covering one hour (YYYY-MM-DDTHH)."""
    m = _HOUR_RE.match(s)
    if not m:
        raise FieldDecodeError("hour must look like YYYY-MM-DDTHH (e.g., 2022-08-25T14)")
    try:
        d = date.fromisoformat(m.group("d"))
        start = datetime(d.year, d.month, d.day, int(m.group("h")))
    except ValueError as e:
        raise FieldDecodeError(f"invalid hour '{s}'") from e
    return start, start + timedelta(hours=1) - _ONE_SECOND


def range_for_month(s: str) -> tuple[datetime, datetime]:
    """Return the inclusive window covering one month (YYYY-MM)."""
    m = _MONTH_RE.match(s)
    if not m:
        raise FieldDecodeError("month must look like YYYY-MM (e.g., 2022-08)")
    y = int(m.group("y"))
    mo = int(m.group("m"))
    if not 1 <= mo <= 12:
        raise FieldDecodeError(f"invalid month '{s}'")
    start = datetime(y, mo, 1)
    end = datetime(y + 1, 1, 1) if mo == 12 else datetime(y, mo + 1, 1)
    return start, end - _ONE_SECOND


def resolve_time_window(
    *,
    since: str | None = None,
    until: str | None = None,
    date_: str | None = None,
    hour: str | None = None,
    month: str | None = None,
) -> tuple[datetime | None, datetime | None]:
    """Resolve an inclusive window; a date/hour/month selector wins over since/until."""
    if date_:
        return range_for_date(date_)
    if hour:
        return range_for_hour(hour)
    if month:
        return range_for_month(month)

    s = parse_datetime(since) if since else None
    u = parse_datetime(until) if until else None
    if s is not None and u is not None and s > u:
        raise FieldDecodeError("since must be <= until")
    return s, u
