"""Parse and filter YaST2 (y2log) log files."""

from __future__ import annotations

__version__ = "0.1.0"
