"""Module entrypoint.

Allows:
    python -m y2logs filter /var/log/YaST2/y2log --level error
"""

from __future__ import annotations

from y2logs.cli import main

if __name__ == "__main__":
    main()
