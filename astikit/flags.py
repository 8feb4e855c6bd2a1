"""Command-line helpers."""

from __future__ import annotations

import sys
from typing import List, Optional


def flag_cmd(argv: Optional[List[str]] = None) -> str:
    """Pop a leading subcommand from ``argv`` (default ``sys.argv``).

    Returns "" when the first argument is missing or starts with "-".
    """
    if argv is None:
        argv = sys.argv
    if len(argv) >= 2 and not argv[1].startswith("-"):
        return argv.pop(1)
    return ""


class FlagStrings:
    """Collects unique string values from a repeatable flag, in order."""

    def __init__(self) -> None:
        self.seen: set = set()
        self.values: List[str] = []

    def set(self, value: str) -> None:
        """Add ``value`` unless it was already given."""
        if value in self.seen:
            return
        self.seen.add(value)
        self.values.append(value)

    def __str__(self) -> str:
        return ",".join(self.values)