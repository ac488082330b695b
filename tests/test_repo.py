from datetime import datetime

import pytest

from expensetracker.db import DatabaseError, connect, migrate
from expensetracker.filters import ExpenseFilter
from expensetracker.model import Expense, ExpenseType
from expensetracker.repo import ExpenseNotFound, ExpenseRepository


@pytest.fixture
def repo():
    conn = connect(":memory:")
    migrate(conn)
    yield ExpenseRepository(conn)
    conn.close()


def test_create_returns_stored_expense(repo):
    created = repo.create("2024-03-01T10:30:00", 12.5, "expense", "Coffee")
    assert created.id > 0
    assert created.date == datetime(2024, 3, 1, 10, 30)
    assert created.amount == 12.5
    assert created.expense_type is ExpenseType.EXPENSE
    assert created.category == "Coffee"
    assert repo.find(created.id) == created


def test_create_drops_zone(repo):
    created = repo.create("2024-03-01T10:30:00Z", 1.0, ExpenseType.INCOME, "Salary")
    assert created.date == datetime(2024, 3, 1, 10, 30)


def test_find_missing(repo):
    with pytest.raises(ExpenseNotFound) as info:
        repo.find(42)
    assert isinstance(info.value, DatabaseError)
    assert info.value.expense_id == 42


def test_create_rejects_unknown_type(repo):
    with pytest.raises(DatabaseError):
        repo.create("2024-03-01", 1.0, "gift", "Other")
    assert repo.list() == []


def test_create_rejects_bad_date(repo):
    with pytest.raises(DatabaseError):
        repo.create("yesterday", 1.0, "income", "Other")


def test_create_rejects_overflowing_amount(repo):
    with pytest.raises(DatabaseError):
        repo.create("2024-03-01", 1e9, "income", "Other")


def test_update_overwrites_fields(repo):
    created = repo.create("2024-03-01", 12.5, "expense", "Coffee")
    repo.update(created.id, "2024-04-02", 99.0, ExpenseType.INCOME, "Salary")
    assert repo.find(created.id) == Expense(
        id=created.id,
        date=datetime(2024, 4, 2),
        amount=99.0,
        expense_type=ExpenseType.INCOME,
        category="Salary",
    )


def test_delete_counts_rows(repo):
    created = repo.create("2024-03-01", 12.5, "expense", "Coffee")
    assert repo.delete(created.id) == 1
    assert repo.delete(created.id) == 0
    with pytest.raises(ExpenseNotFound):
        repo.find(created.id)


def test_list_newest_first(repo):
    for day in (3, 1, 2):
        repo.create(f"2024-01-0{day}", 1.0, "expense", f"day{day}")
    dates = [expense.date for expense in repo.list()]
    assert dates == sorted(dates, reverse=True)
    assert len(dates) == 3


def test_list_paging(repo):
    for day in range(1, 13):
        repo.create(f"2024-01-{day:02d}", 1.0, "expense", f"day{day}")
    assert len(repo.list()) == 10
    assert len(repo.list(ExpenseFilter(page=2))) == 2
    assert len(repo.list(ExpenseFilter(page=3, page_size=5))) == 2
    first_page = repo.list(ExpenseFilter(page_size=5))
    second_page = repo.list(ExpenseFilter(page=2, page_size=5))
    assert {e.id for e in first_page}.isdisjoint({e.id for e in second_page})


def test_list_category_filter(repo):
    repo.create("2024-01-01", 1.0, "expense", "Coffee")
    repo.create("2024-01-02", 1.0, "expense", "Books")
    assert [e.category for e in repo.list(ExpenseFilter(category="Coffee"))] == ["Coffee"]
    assert repo.list(ExpenseFilter(category="coffee")) == []
    assert [e.category for e in repo.list(ExpenseFilter(category="Cof%"))] == ["Coffee"]


def test_list_date_range(repo):
    for day in range(1, 5):
        repo.create(f"2024-01-0{day}", 1.0, "expense", f"day{day}")
    found = repo.list(ExpenseFilter(dt_ini="2024-01-02", dt_end="2024-01-03"))
    assert [e.category for e in found] == ["day3", "day2"]


def test_list_ignores_summary_flag(repo):
    created = repo.create("2024-01-01", 1.0, "expense", "Coffee")
    assert repo.list(ExpenseFilter(is_summary=True)) == [created]


def test_summary_totals(repo):
    assert repo.summary() == (0.0, 0.0)
    repo.create("2024-01-01", 100.0, "income", "Salary")
    repo.create("2024-01-02", 40.0, "expense", "Books")
    assert repo.summary() == (100.0, 40.0)


def test_summary_covers_current_page_only(repo):
    repo.create("2024-01-01", 100.0, "income", "Salary")
    repo.create("2024-01-02", 40.0, "expense", "Books")
    assert repo.summary(ExpenseFilter(page_size=1)) == (0.0, 40.0)


def test_negative_paging_rejected(repo):
    with pytest.raises(DatabaseError):
        repo.list(ExpenseFilter(page=0))
    with pytest.raises(DatabaseError):
        repo.summary(ExpenseFilter(page_size=-1))