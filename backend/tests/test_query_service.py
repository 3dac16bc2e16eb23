"""Tests for expense filtering, ordering and pagination."""

import pytest
from datetime import date

from spendwise.errors import ValidationError
from spendwise.models.expense import ExpenseCategory
from spendwise.services.query_service import ExpenseFilter, Page, list_expenses
from spendwise.storage.memory import InMemoryExpenseStore


@pytest.fixture
def march_store(record):
    """25 March expenses with distinct dates, amounts 10..34."""
    return InMemoryExpenseStore([
        record(f"exp-{i:02d}", 10 + i, date(2024, 3, 1 + i)) for i in range(25)
    ])


class TestFilterValidation:
    """Invalid filters are rejected, never coerced."""

    @pytest.mark.parametrize("kwargs,field", [
        ({"sort_by": "price"}, "sort_by"),
        ({"sort_order": "up"}, "sort_order"),
        ({"page": 0}, "page"),
        ({"page": "2"}, "page"),
        ({"page": True}, "page"),
        ({"limit": 0}, "limit"),
        ({"limit": 101}, "limit"),
        ({"category": "food"}, "category"),
        ({"category": "Groceries"}, "category"),
    ])
    def test_invalid_field_is_named(self, kwargs, field):
        """ValidationError should carry the offending field."""
        with pytest.raises(ValidationError) as exc_info:
            ExpenseFilter(**kwargs).validate()
        assert exc_info.value.field == field

    def test_defaults_are_valid(self):
        """Default filter should validate."""
        f = ExpenseFilter().validate()
        assert f.sort_by == "date"
        assert f.sort_order == "desc"
        assert f.page == 1
        assert f.limit == 10

    def test_limit_bounds_inclusive(self):
        """1 and 100 are both allowed limits."""
        ExpenseFilter(limit=1).validate()
        ExpenseFilter(limit=100).validate()

    def test_category_accepts_enum_and_value(self):
        """Both the enum member and its display value are accepted."""
        ExpenseFilter(category=ExpenseCategory.personal_care).validate()
        ExpenseFilter(category="Personal Care").validate()

    def test_list_validates_before_reading(self, memory_store):
        """list_expenses should refuse an invalid filter."""
        with pytest.raises(ValidationError):
            list_expenses(memory_store, "user-1", ExpenseFilter(limit=500))


class TestMatching:
    """Test the filter predicate."""

    def test_category(self, record):
        """Only the requested category is returned."""
        store = InMemoryExpenseStore([
            record("a", 10, date(2024, 3, 1), category=ExpenseCategory.food),
            record("b", 10, date(2024, 3, 1), category=ExpenseCategory.travel),
        ])
        page = list_expenses(store, "user-1", ExpenseFilter(category="Travel"))
        assert [e.id for e in page.items] == ["b"]

    def test_search_title_case_insensitive(self, record):
        """Search should match the title regardless of case."""
        store = InMemoryExpenseStore([
            record("a", 10, date(2024, 3, 1), title="Whole Foods"),
            record("b", 10, date(2024, 3, 1), title="Shell Gas"),
        ])
        page = list_expenses(store, "user-1", ExpenseFilter(search="whole"))
        assert [e.id for e in page.items] == ["a"]

    def test_search_note(self, record):
        """Search should also match the note."""
        store = InMemoryExpenseStore([
            record("a", 10, date(2024, 3, 1), title="Market", note="Weekly groceries"),
            record("b", 10, date(2024, 3, 1), title="Market"),
        ])
        page = list_expenses(store, "user-1", ExpenseFilter(search="GROCER"))
        assert [e.id for e in page.items] == ["a"]

    def test_date_bounds_inclusive(self, march_store):
        """start_date and end_date are both included."""
        f = ExpenseFilter(start_date=date(2024, 3, 5), end_date=date(2024, 3, 7), sort_order="asc")
        page = list_expenses(march_store, "user-1", f)
        assert [e.date.day for e in page.items] == [5, 6, 7]
        assert page.total == 3

    def test_inverted_date_range_is_empty(self, march_store):
        """start_date after end_date matches nothing instead of failing."""
        f = ExpenseFilter(start_date=date(2024, 3, 10), end_date=date(2024, 3, 1))
        page = list_expenses(march_store, "user-1", f)
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0

    def test_clauses_combine(self, record):
        """All clauses must hold at once."""
        store = InMemoryExpenseStore([
            record("a", 10, date(2024, 3, 1), title="Coffee", category=ExpenseCategory.food),
            record("b", 10, date(2024, 3, 9), title="Coffee", category=ExpenseCategory.food),
            record("c", 10, date(2024, 3, 1), title="Coffee", category=ExpenseCategory.other),
        ])
        f = ExpenseFilter(category="Food", search="coffee", end_date=date(2024, 3, 5))
        assert [e.id for e in list_expenses(store, "user-1", f).items] == ["a"]

    def test_other_owners_excluded(self, record):
        """Expenses of other users never show up."""
        store = InMemoryExpenseStore([
            record("mine", 10, date(2024, 3, 1)),
            record("theirs", 10, date(2024, 3, 1), owner_id="user-2"),
        ])
        page = list_expenses(store, "user-1", ExpenseFilter())
        assert [e.id for e in page.items] == ["mine"]


class TestOrdering:
    """Test sorting and tie-breaking."""

    def test_date_desc_default(self, march_store):
        """Newest first by default."""
        page = list_expenses(march_store, "user-1", ExpenseFilter(limit=3))
        assert [e.date.day for e in page.items] == [25, 24, 23]

    def test_amount_asc(self, march_store):
        """Cheapest first when sorting by amount ascending."""
        page = list_expenses(march_store, "user-1", ExpenseFilter(sort_by="amount", sort_order="asc", limit=3))
        assert [e.amount for e in page.items] == [10, 11, 12]

    def test_title_case_insensitive(self, record):
        """Titles sort without regard to case."""
        store = InMemoryExpenseStore([
            record("1", 10, date(2024, 3, 1), title="cherry"),
            record("2", 10, date(2024, 3, 1), title="Banana"),
            record("3", 10, date(2024, 3, 1), title="apple"),
        ])
        page = list_expenses(store, "user-1", ExpenseFilter(sort_by="title", sort_order="asc"))
        assert [e.title for e in page.items] == ["apple", "Banana", "cherry"]

    @pytest.mark.parametrize("sort_order", ["asc", "desc"])
    def test_ties_broken_by_id_ascending(self, record, sort_order):
        """Equal sort values fall back to id ascending in both directions."""
        store = InMemoryExpenseStore([
            record("c", 10, date(2024, 3, 1)),
            record("a", 10, date(2024, 3, 1)),
            record("b", 10, date(2024, 3, 1)),
        ])
        for sort_by in ("date", "amount"):
            f = ExpenseFilter(sort_by=sort_by, sort_order=sort_order)
            assert [e.id for e in list_expenses(store, "user-1", f).items] == ["a", "b", "c"]

    def test_ties_within_mixed_values(self, record):
        """Ties only reorder within equal values."""
        store = InMemoryExpenseStore([
            record("b", 20, date(2024, 3, 1)),
            record("a", 20, date(2024, 3, 1)),
            record("z", 30, date(2024, 3, 1)),
        ])
        f = ExpenseFilter(sort_by="amount", sort_order="desc")
        assert [e.id for e in list_expenses(store, "user-1", f).items] == ["z", "a", "b"]


class TestPagination:
    """Test paging math."""

    def test_last_partial_page(self, march_store):
        """limit=10, page=3 over 25 matches returns the last 5."""
        page = list_expenses(march_store, "user-1", ExpenseFilter(limit=10, page=3))
        assert len(page.items) == 5
        assert page.total == 25
        assert page.total_pages == 3

    def test_beyond_last_page_is_empty(self, march_store):
        """Pages past the end are empty but keep the total."""
        page = list_expenses(march_store, "user-1", ExpenseFilter(limit=10, page=9))
        assert page.items == []
        assert page.total == 25
        assert page.total_pages == 3

    def test_pages_do_not_overlap(self, march_store):
        """Consecutive pages cover every match exactly once."""
        seen = []
        for n in (1, 2, 3):
            seen += [e.id for e in list_expenses(march_store, "user-1", ExpenseFilter(limit=10, page=n)).items]
        assert len(seen) == 25
        assert len(set(seen)) == 25

    @pytest.mark.parametrize("limit,page", [(1, 1), (7, 4), (10, 3), (25, 1), (100, 1), (3, 20)])
    def test_page_length(self, march_store, limit, page):
        """items length is min(limit, max(0, total - offset))."""
        result = list_expenses(march_store, "user-1", ExpenseFilter(limit=limit, page=page))
        offset = (page - 1) * limit
        assert len(result.items) == min(limit, max(0, result.total - offset))
        assert len(result.items) <= limit

    def test_empty_result(self, memory_store):
        """No matches means zero pages."""
        page = list_expenses(memory_store, "user-1", ExpenseFilter())
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0

    def test_total_pages_rounds_up(self):
        """total_pages is ceil(total / limit)."""
        assert Page(items=[], page=1, limit=10, total=21).total_pages == 3
        assert Page(items=[], page=1, limit=10, total=20).total_pages == 2
