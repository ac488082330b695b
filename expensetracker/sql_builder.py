"""SQL for listing expenses and for their totals."""

from __future__ import annotations

from typing import Any

from .filters import ExpenseFilter

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_SUMMARY_TEMPLATE = """
    SELECT
        COALESCE(SUM(CASE WHEN type = 'income' THEN amount ELSE 0 END), 0.0) AS total_income,
        COALESCE(SUM(CASE WHEN type = 'expense' THEN amount ELSE 0 END), 0.0) AS total_expense
    FROM
        ({inner})
"""


def build_get_sql(expense_filter: ExpenseFilter) -> tuple[str, list[Any]]:
    """Return the query and its positional parameters (``?N`` placeholders).

    The totals query wraps the paged listing, so totals cover the current page.
    """
    page = DEFAULT_PAGE if expense_filter.page is None else expense_filter.page
    page_size = (
        DEFAULT_PAGE_SIZE if expense_filter.page_size is None else expense_filter.page_size
    )

    conditions = [
        ("category LIKE", expense_filter.category),
        ("date >=", expense_filter.dt_ini),
        ("date <=", expense_filter.dt_end),
    ]
    where = "WHERE (1=1)"
    params: list[Any] = []
    for clause, value in conditions:
        if value is None:
            continue
        params.append(value)
        where += f" AND ({clause} ?{len(params)})"

    sql = (
        f"SELECT * FROM expenses {where} order by date desc "
        f"LIMIT {page_size} OFFSET {(page - 1) * page_size}"
    )
    if expense_filter.is_summary:
        sql = _SUMMARY_TEMPLATE.format(inner=sql)
    return sql, params