"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from y2logs.core.log_service import read_text
from y2logs.tools.filter import FilterResponse

BASE_DIR_ENV = "Y2LOGS_BASE_DIR"

SAMPLE_LOG = (
    "2022-08-25 14:28:44 <1> localhost.localdomain(12375) [libstorage] "
    "SystemCmd.cc(addLine):569 Adding Line 14...\n"
    "Done\n"
    "2022-08-25 14:28:44 <0> localhost.localdomain(12375) [libstorage] "
    "CmdParted.cc(parse):139 device:/dev/nvme0n1\n"
    "2022-08-25 14:28:45 <3> localhost.localdomain(12375) [Ruby] "
    "y2storage/storage_manager.rb(probe_performed):471 probing failed\n"
)


def _base_dir() -> Path:
    """Return the resolved base directory for log resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _resolve_resource_path(path: str) -> Path:
    """Resolve and validate a log resource path."""
    resolved = _safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    return resolved


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://y2logs/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://y2logs/help\n"
            "- app://y2logs/examples/sample-log\n"
            "- app://y2logs/schemas/filter-response\n"
            f"- y2log://{{path}} (restricted to {BASE_DIR_ENV}; plain or .gz)\n"
            f"\nBase directory: {_base_dir()}\n"
        )

    @mcp.resource("app://y2logs/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny y2log sample for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://y2logs/schemas/filter-response")
    def filter_response_schema() -> dict[str, Any]:
        """Return the JSON schema of the filter_y2log tool output."""
        return FilterResponse.model_json_schema()

    @mcp.resource("y2log://{path}")
    async def read_log(path: str) -> str:
        """Return the full contents of a y2log file."""
        p = _resolve_resource_path(path)
        return await read_text(p)
