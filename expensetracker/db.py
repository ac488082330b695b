"""SQLite storage: connection, schema migration and seed data."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta

from .model import ExpenseType


class DatabaseError(Exception):
    """A storage operation failed."""


_SCHEMA = """
CREATE TABLE expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    amount REAL NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
    category TEXT NOT NULL
);

CREATE INDEX idx_expenses_date ON expenses (date);
CREATE INDEX idx_expenses_type ON expenses (type);
CREATE INDEX idx_expenses_category ON expenses (category);
"""

_INSERT = "INSERT INTO expenses (date, amount, type, category) VALUES (?, ?, ?, ?)"

# (days before now, amount, kind, category)
_SEED_RECORDS = [
    (9, 1200.75, ExpenseType.INCOME, "Freelance Project"),
    (8, 75.20, ExpenseType.EXPENSE, "Dinner out"),
    (7, 30.00, ExpenseType.EXPENSE, "Coffee"),
    (6, 500.00, ExpenseType.INCOME, "Investment Dividend"),
    (5, 120.00, ExpenseType.EXPENSE, "Books"),
    (4, 40.50, ExpenseType.EXPENSE, "Public Transport"),
    (3, 400.5, ExpenseType.INCOME, "Salary"),
    (2, 101.0, ExpenseType.EXPENSE, "Groceries"),
    (1, 15.0, ExpenseType.EXPENSE, "Movies"),
    (0, 25.50, ExpenseType.EXPENSE, "Snacks"),
]


def connect(url: str) -> sqlite3.Connection:
    """Open the database named by ``url`` (a path or a ``sqlite://`` URL)."""
    if not url:
        raise DatabaseError("database url is empty")
    target = url
    for prefix in ("sqlite:///", "sqlite://"):
        if url.startswith(prefix):
            target = url[len(prefix):] or ":memory:"
            break
    try:
        conn = sqlite3.connect(target, timeout=6, check_same_thread=False)
        conn.execute("PRAGMA case_sensitive_like = ON")
    except sqlite3.Error as exc:
        raise DatabaseError(str(exc)) from exc
    return conn


def table_exists(conn: sqlite3.Connection, name: str) -> bool:
    """Tell whether a table called ``name`` exists."""
    try:
        row = conn.execute(
            "SELECT EXISTS (SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?)",
            (name,),
        ).fetchone()
    except sqlite3.Error as exc:
        raise DatabaseError(f"tableExists: {exc}") from exc
    return bool(row[0])


def migrate(conn: sqlite3.Connection) -> None:
    """Create the expenses table and its indexes unless the table already exists."""
    if table_exists(conn, "expenses"):
        return
    try:
        conn.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        raise DatabaseError(f"migrate: {exc}") from exc


def is_table_populated(conn: sqlite3.Connection) -> bool:
    """Tell whether the expenses table holds at least one row."""
    try:
        row = conn.execute("SELECT EXISTS (SELECT 1 FROM expenses LIMIT 1)").fetchone()
    except sqlite3.Error as exc:
        raise DatabaseError(f"migrate: {exc}") from exc
    return bool(row[0])


def seed(conn: sqlite3.Connection, now: datetime | None = None) -> None:
    """Fill an empty expenses table with ten sample records ending at ``now``."""
    if is_table_populated(conn):
        return
    moment = datetime.now() if now is None else now
    rows = [
        (
            (moment - timedelta(days=days)).isoformat(sep=" ", timespec="microseconds"),
            amount,
            kind.value,
            category,
        )
        for days, amount, kind, category in _SEED_RECORDS
    ]
    try:
        with conn:
            conn.executemany(_INSERT, rows)
    except sqlite3.Error as exc:
        raise DatabaseError(f"seed: {exc}") from exc


def init_db(url: str) -> sqlite3.Connection:
    """Connect, migrate and seed; return the ready connection."""
    conn = connect(url)
    try:
        migrate(conn)
    except DatabaseError as exc:
        conn.close()
        raise DatabaseError(f"db migration: {exc}") from exc
    try:
        seed(conn)
    except DatabaseError as exc:
        conn.close()
        raise DatabaseError(f"db seed: {exc}") from exc
    return conn