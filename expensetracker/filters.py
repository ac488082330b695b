"""Filter for listing and summarising expenses."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)


def parse_int(text: str) -> int:
    """Parse a base-10 integer strictly; malformed input gives 0, overflow clamps."""
    if not _INT_PATTERN.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


@dataclass(frozen=True)
class ExpenseFilter:
    """Paging, category and date-range options for expense queries."""

    is_summary: bool = False
    page: int | None = None
    page_size: int | None = None
    category: str | None = None
    dt_ini: str | None = None
    dt_end: str | None = None

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> ExpenseFilter:
        """Build a filter from query parameters; empty values are ignored."""
        page = query.get("page") or None
        page_size = query.get("pageSize") or None
        return cls(
            page=parse_int(page) if page is not None else None,
            page_size=parse_int(page_size) if page_size is not None else None,
            category=query.get("category") or None,
            dt_ini=query.get("dtIni") or None,
            dt_end=query.get("dtEnd") or None,
        )

    def as_summary(self) -> ExpenseFilter:
        """Return a copy of this filter that asks for totals instead of rows."""
        return dataclasses.replace(self, is_summary=True)