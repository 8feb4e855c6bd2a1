"""Comparisons and deep copies through JSON."""

from __future__ import annotations

import json
from typing import Any


def _dump(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def json_equal(a: Any, b: Any) -> bool:
    """Return True if both values have the same JSON encoding."""
    try:
        return _dump(a) == _dump(b)
    except (TypeError, ValueError):
        return False


def json_clone(src: Any) -> Any:
    """Return a deep copy of ``src`` made by a JSON round trip."""
    try:
        encoded = json.dumps(src)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"marshaling failed: {exc}") from exc
    return json.loads(encoded)