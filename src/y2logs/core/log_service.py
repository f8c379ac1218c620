"""Log file loading and filtering.

This module is the integration point between files on disk and the pure
parser/query core. YaST rotates its logs into gzip files (``y2log-1.gz``),
so both plain and compressed files are accepted.
"""

from __future__ import annotations

import gzip
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .models import Level, Log, Pid
from .parser import parse

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors, newline="")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors, newline="") as f:
            yield f


async def read_text(
    log_path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> str:
    """Return the full text of a log file."""
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
        return await f.read()


async def load_log(
    log_path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> Log:
    """Read and parse a y2log file. Raises ParseError for malformed content."""
    text = await read_text(log_path, encoding=encoding, decode_errors=decode_errors)
    log = Log(parse(text))
    LOGGER.debug("Parsed %d entries from %s", len(log), log_path)
    return log


async def filter_log(
    log_path: str | Path,
    *,
    level: Level | None = None,
    pid: Pid | None = None,
    component: str | None = None,
    hostname: str | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> Log:
    """Load a log file and keep the entries matching every given condition."""
    log = await load_log(log_path, encoding=encoding, decode_errors=decode_errors)

    query = log.query()
    if level is not None:
        query.with_level(level)
    if pid is not None:
        query.with_pid(pid)
    if component is not None:
        query.with_component(component)
    if hostname is not None:
        query.with_hostname(hostname)
    if since is not None:
        query.from_datetime(since)
    if until is not None:
        query.to_datetime(until)

    filtered = query.to_log()
    LOGGER.debug("Query %s kept %d of %d entries", query.predicates, len(filtered), len(log))
    return filtered
