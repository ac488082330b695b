import pytest

from expensetracker.filters import ExpenseFilter, parse_int


def test_empty_query_gives_default_filter():
    assert ExpenseFilter.from_query({}) == ExpenseFilter()


def test_all_parameters_are_read():
    query = {
        "page": "2",
        "pageSize": "5",
        "category": "Coffee",
        "dtIni": "2024-01-01",
        "dtEnd": "2024-02-01",
    }
    result = ExpenseFilter.from_query(query)
    assert result == ExpenseFilter(
        page=2,
        page_size=5,
        category="Coffee",
        dt_ini="2024-01-01",
        dt_end="2024-02-01",
    )
    assert result.is_summary is False


def test_empty_values_are_skipped():
    result = ExpenseFilter.from_query({"page": "", "category": ""})
    assert result.page is None
    assert result.category is None


def test_bad_page_becomes_zero():
    assert ExpenseFilter.from_query({"page": "abc"}).page == 0


def test_as_summary_leaves_original_untouched():
    original = ExpenseFilter(category="Books")
    summary = original.as_summary()
    assert summary.is_summary is True
    assert original.is_summary is False
    assert summary.category == "Books"


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("+7", 7), ("-3", -3), ("abc", 0), (" 5", 0), ("1_000", 0), ("", 0), ("4.5", 0)],
)
def test_parse_int(text, expected):
    assert parse_int(text) == expected


def test_parse_int_clamps_overflow():
    assert parse_int("99999999999999999999") == 2**63 - 1
    assert parse_int("-99999999999999999999") == -(2**63)