"""Expense record and its kinds."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class ExpenseType(str, Enum):
    """Whether a record brings money in or takes it out."""

    INCOME = "income"
    EXPENSE = "expense"


def _format_timestamp(moment: datetime) -> str:
    """Format as RFC 3339 with trimmed fraction; naive times are taken as UTC."""
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += f".{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if offset is None or not offset:
        return text + "Z"
    total_minutes = int(offset.total_seconds()) // 60
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass
class Expense:
    """One income or expense entry."""

    id: int = 0
    date: datetime = datetime.min
    amount: float = 0.0
    expense_type: ExpenseType | str = ""
    category: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.amount, Decimal):
            self.amount = float(self.amount)
        if not isinstance(self.expense_type, ExpenseType):
            try:
                self.expense_type = ExpenseType(self.expense_type)
            except ValueError:
                pass

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; zero-valued fields other than the date are left out."""
        result: dict[str, Any] = {}
        if self.id:
            result["ID"] = self.id
        result["date"] = _format_timestamp(self.date)
        if self.amount:
            result["amount"] = float(self.amount)
        kind = getattr(self.expense_type, "value", self.expense_type)
        if kind:
            result["type"] = kind
        if self.category:
            result["category"] = self.category
        return result