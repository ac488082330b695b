"""Small helpers."""

from __future__ import annotations

from typing import Any


def coalesce(*args: Any) -> Any:
    """Return the first truthy argument, else the last one (None when empty)."""
    for arg in args:
        if arg:
            return arg
    return args[-1] if args else None