"""Expense persistence on top of a SQLite connection."""

from __future__ import annotations

import dataclasses
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .db import DatabaseError
from .filters import ExpenseFilter
from .model import Expense, ExpenseType
from .sql_builder import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, build_get_sql

_AMOUNT_LIMIT = 10**8

_SELECT_ONE = "SELECT id, date, amount, type, category FROM expenses WHERE id = ?"
_INSERT = "INSERT INTO expenses (date, amount, type, category) VALUES (?, ?, ?, ?)"
_UPDATE = "UPDATE expenses SET date = ?, amount = ?, type = ?, category = ? WHERE id = ?"
_DELETE = "DELETE FROM expenses WHERE id = ?"


class ExpenseNotFound(DatabaseError):
    """No expense has the requested id."""

    def __init__(self, expense_id: int) -> None:
        super().__init__("no rows in result set")
        self.expense_id = expense_id


def _timestamp(text: str) -> str:
    """Normalise a timestamp to the stored form; any zone offset is dropped."""
    candidate = text.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise DatabaseError(f'invalid input syntax for type timestamp: "{text}"') from exc
    return moment.replace(tzinfo=None).isoformat(sep=" ", timespec="microseconds")


def _amount(amount: float) -> float:
    value = round(float(amount), 2)
    if abs(value) >= _AMOUNT_LIMIT:
        raise DatabaseError("numeric field overflow")
    return value


def _kind(expense_type: Any) -> str:
    try:
        return ExpenseType(expense_type).value
    except ValueError as exc:
        raise DatabaseError(
            f'invalid input value for enum expense_type: "{expense_type}"'
        ) from exc


def _row_to_expense(row: tuple[Any, ...]) -> Expense:
    return Expense(
        id=row[0],
        date=datetime.fromisoformat(row[1]),
        amount=float(row[2]),
        expense_type=row[3],
        category=row[4],
    )


def _prepare(expense_filter: ExpenseFilter) -> ExpenseFilter:
    """Reject impossible paging and normalise date bounds."""
    page = DEFAULT_PAGE if expense_filter.page is None else expense_filter.page
    page_size = (
        DEFAULT_PAGE_SIZE if expense_filter.page_size is None else expense_filter.page_size
    )
    if page_size < 0:
        raise DatabaseError("LIMIT must not be negative")
    if (page - 1) * page_size < 0:
        raise DatabaseError("OFFSET must not be negative")
    return dataclasses.replace(
        expense_filter,
        dt_ini=None if expense_filter.dt_ini is None else _timestamp(expense_filter.dt_ini),
        dt_end=None if expense_filter.dt_end is None else _timestamp(expense_filter.dt_end),
    )


@dataclass
class ExpenseRepository:
    """Create, read, update, delete and summarise expenses."""

    conn: sqlite3.Connection

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def find(self, expense_id: int) -> Expense:
        """Return the expense with ``expense_id`` or raise ExpenseNotFound."""
        with self._guard():
            row = self.conn.execute(_SELECT_ONE, (expense_id,)).fetchone()
        if row is None:
            raise ExpenseNotFound(expense_id)
        return _row_to_expense(row)

    def create(
        self, date: str, amount: float, expense_type: ExpenseType | str, category: str
    ) -> Expense:
        """Insert a new expense and return it as stored."""
        values = (_timestamp(date), _amount(amount), _kind(expense_type), category)
        with self._guard(), self.conn:
            cursor = self.conn.execute(_INSERT, values)
        return self.find(cursor.lastrowid)

    def update(
        self,
        expense_id: int,
        date: str,
        amount: float,
        expense_type: ExpenseType | str,
        category: str,
    ) -> None:
        """Overwrite every field of the expense with ``expense_id``."""
        values = (_timestamp(date), _amount(amount), _kind(expense_type), category, expense_id)
        with self._guard(), self.conn:
            self.conn.execute(_UPDATE, values)

    def delete(self, expense_id: int) -> int:
        """Delete the expense with ``expense_id``; return the number of rows removed."""
        with self._guard(), self.conn:
            cursor = self.conn.execute(_DELETE, (expense_id,))
        return cursor.rowcount

    def summary(self, expense_filter: ExpenseFilter | None = None) -> tuple[float, float]:
        """Return (total income, total expense) over the filtered page."""
        prepared = _prepare(expense_filter or ExpenseFilter()).as_summary()
        sql, params = build_get_sql(prepared)
        with self._guard():
            row = self.conn.execute(sql, params).fetchone()
        if row is None:
            return 0.0, 0.0
        return float(row[0]), float(row[1])

    def list(self, expense_filter: ExpenseFilter | None = None) -> list[Expense]:
        """Return one page of expenses, newest first."""
        prepared = dataclasses.replace(
            _prepare(expense_filter or ExpenseFilter()), is_summary=False
        )
        sql, params = build_get_sql(prepared)
        with self._guard():
            rows = self.conn.execute(sql, params).fetchall()
        return [_row_to_expense(row) for row in rows]