"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return pydantic models that FastMCP serializes as structured output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from y2logs.core.log_service import filter_log
from y2logs.core.models import Entry, Level, Pid
from y2logs.core.parser import ParseError
from y2logs.core.time_window import resolve_time_window

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


class EntryModel(BaseModel):
    datetime: str = Field(description="Entry timestamp, 'YYYY-MM-DD HH:MM:SS' (local time).")
    level: str = Field(description="debug, info, warn, error, fatal or unknown.")
    hostname: str
    pid: int
    component: str = Field(description="YaST2 component name, e.g. 'libstorage'.")
    file: str
    method: str | None = None
    line: int | None = None
    message: str = Field(description="Message body; may contain newlines.")
    display: str | None = Field(
        default=None, description="Entry rendered as a single y2log display line."
    )

    @classmethod
    def from_entry(cls, entry: Entry, *, include_line: bool) -> EntryModel:
        return cls(**entry.to_dict(), display=str(entry) if include_line else None)


class FilterResponse(BaseModel):
    count: int = Field(description="Number of entries returned.")
    truncated: bool = Field(description="True when more entries matched than 'limit'.")
    entries: list[EntryModel] = Field(default_factory=list)


async def filter_y2log_impl(
    *,
    log_path: str,
    level: str | None = None,
    pid: int | None = None,
    component: str | None = None,
    hostname: str | None = None,
    since: str | None = None,
    until: str | None = None,
    date: str | None = None,
    hour: str | None = None,
    month: str | None = None,
    limit: int | None = None,
    include_lines: bool = False,
) -> FilterResponse:
    """Implementation for the `filter_y2log` MCP tool.

    Notes
    -----
    - date/hour/month selectors take precedence over since/until.
    - Both window bounds are inclusive.
    - Invalid values and unparseable logs surface as ValueError.
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    lvl = Level.parse(level) if level else None
    pid_ = Pid(pid) if pid is not None else None
    window_since, window_until = resolve_time_window(
        since=since,
        until=until,
        date_=date,
        hour=hour,
        month=month,
    )

    try:
        log = await filter_log(
            log_path,
            level=lvl,
            pid=pid_,
            component=component,
            hostname=hostname,
            since=window_since,
            until=window_until,
        )
    except FileNotFoundError:
        raise
    except (ParseError, OSError, EOFError) as e:
        raise ValueError(f"{log_path}: {e}") from e

    entries = [EntryModel.from_entry(e, include_line=include_lines) for e in log.entries[:limit]]
    return FilterResponse(count=len(entries), truncated=len(log) > limit, entries=entries)
