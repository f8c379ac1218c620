"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (filter a y2log file)
- Resources: addressable data blobs (raw logs, schemas, samples)

Run locally (stdio):
    python -m y2logs.server.log_server
"""

from __future__ import annotations

import logging
import os

from mcp.server.fastmcp import FastMCP

from y2logs.resources.registry import register_resources
from y2logs.tools.filter import FilterResponse, filter_y2log_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("Y2LOGS_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("y2logs")

register_resources(mcp)


@mcp.tool()
async def filter_y2log(
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
    """Return the entries of a YaST2 log that match every given filter.

    Parameters
    ----------
    log_path:
        Path to a y2log file (e.g. /var/log/YaST2/y2log). Rotated .gz files are supported.
    level:
        One of debug, info, warn, error, fatal, unknown. Case-insensitive.
    pid:
        Keep only entries written by this process ID.
    component / hostname:
        Exact match on the component name (e.g. libstorage) or hostname.
    since/until:
        Inclusive bounds, 'YYYY-MM-DD HH:MM:SS' in the log's local time.
    date/hour/month:
        Convenience selectors that override since/until.
        Examples:
          - date: 2022-08-25
          - hour: 2022-08-25T14
          - month: 2022-08
    limit:
        Maximum number of entries returned (hard-capped in the implementation).
    include_lines:
        Whether to include each entry rendered as its original display line.
    """
    LOGGER.debug("filter_y2log called for %s", log_path)
    return await filter_y2log_impl(
        log_path=log_path,
        level=level,
        pid=pid,
        component=component,
        hostname=hostname,
        since=since,
        until=until,
        date=date,
        hour=hour,
        month=month,
        limit=limit,
        include_lines=include_lines,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
