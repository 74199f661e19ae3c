"""Tests for the ExpenseService facade."""

import pytest

from database.expense_dao import ExpenseDAO
from services.errors import PersistenceError, ValidationError
from services.expense_service import ExpenseService
from utils.constants import STORAGE_KEY


class FailingDAO:
    """DAO whose writes always fail."""

    def load_all(self):
        return []

    def save_all(self, expenses):
        raise PersistenceError("disk full")


class TestAddExpense:
    """Tests for validation and creation."""

    def test_add_persists(self, service, dao, clock, rng):
        expense = service.add_expense("Lunch at cafe", "12.50", "2026-10-17", "food")
        assert expense.amount == 12.5
        assert expense.timestamp == "2026-10-18T12:00:00"
        assert service.get_all() == (expense,)

        reloaded = ExpenseService(dao, clock, rng)
        reloaded.load()
        assert reloaded.get_all() == (expense,)

    def test_blank_category_is_auto_detected(self, service):
        expense = service.add_expense("uber to airport", 30, "2026-10-18")
        assert expense.category == "transport"

    def test_explicit_category_wins(self, service):
        expense = service.add_expense("restaurant lunch", 30, "2026-10-18", "entertainment")
        assert expense.category == "entertainment"

    def test_description_stripped(self, service):
        assert service.add_expense("  pizza  ", 5, "2026-10-18").description == "pizza"

    def test_date_normalized(self, service):
        assert service.add_expense("pizza", 5, "2026/10/08").date == "2026-10-08"

    def test_receipt_marker(self, service):
        expense = service.add_expense("pizza", 5, "2026-10-18", receipt="receipt.jpg")
        assert expense.receipt == "receipt.jpg"

    @pytest.mark.parametrize("description,amount,date,category", [
        ("", 10, "2026-10-18", None),
        ("   ", 10, "2026-10-18", None),
        ("lunch", 0, "2026-10-18", None),
        ("lunch", -5, "2026-10-18", None),
        ("lunch", "abc", "2026-10-18", None),
        ("lunch", "nan", "2026-10-18", None),
        ("lunch", "inf", "2026-10-18", None),
        ("lunch", 10 ** 400, "2026-10-18", None),
        ("lunch", 10, "", None),
        ("lunch", 10, "18th October", None),
        ("lunch", 10, "2026-10-18", "groceries"),
    ])
    def test_invalid_input_rejected(self, service, description, amount, date, category):
        """Nothing is stored when validation fails."""
        with pytest.raises(ValidationError):
            service.add_expense(description, amount, date, category)
        assert service.get_all() == ()

    def test_validation_error_is_value_error(self, service):
        with pytest.raises(ValueError):
            service.add_expense("", 10, "2026-10-18")


class TestDeleteExpense:
    """Tests for deletion."""

    def test_delete(self, service):
        expense = service.add_expense("pizza", 5, "2026-10-18")
        assert service.delete_expense(expense.id) is True
        assert service.get_all() == ()

    def test_delete_missing(self, service):
        service.add_expense("pizza", 5, "2026-10-18")
        before = service.get_all()
        assert service.delete_expense("missing") is False
        assert service.get_all() == before


class TestPersistenceFailures:
    """Tests for warnings raised by the storage layer."""

    def test_save_failure_keeps_memory_and_warns_once(self, clock, rng):
        svc = ExpenseService(FailingDAO(), clock, rng)
        svc.load()
        expense = svc.add_expense("pizza", 5, "2026-10-18")
        assert svc.get_all() == (expense,)
        warnings = svc.pop_warnings()
        assert len(warnings) == 1
        assert svc.pop_warnings() == []

    def test_corrupt_data_starts_empty(self, db, clock, rng):
        db.save(STORAGE_KEY, "{not json")
        svc = ExpenseService(ExpenseDAO(db), clock, rng)
        svc.load()
        assert svc.get_all() == ()
        assert len(svc.pop_warnings()) == 1

    def test_duplicate_ids_start_empty(self, dao, clock, rng, make_expense):
        expense = make_expense(id="a")
        dao.save_all([expense, expense])
        svc = ExpenseService(dao, clock, rng)
        svc.load()
        assert svc.get_all() == ()
        assert len(svc.pop_warnings()) == 1

    def test_clean_load_has_no_warnings(self, service):
        assert service.pop_warnings() == []


class TestQueries:
    """Tests for read-only queries."""

    def test_dashboard_summary(self, service):
        service.add_expense("pizza", 20, "2026-10-01")
        service.add_expense("hotel", 50, "2026-10-10")
        service.add_expense("taxi", 500, "2026-09-30")
        summary = service.dashboard_summary()
        assert summary.total_this_month == 70
        assert summary.transaction_count_this_month == 2
        assert summary.top_category_this_month == "travel"

    def test_dashboard_summary_empty(self, service):
        summary = service.dashboard_summary()
        assert summary.total_this_month == 0
        assert summary.transaction_count_this_month == 0
        assert summary.top_category_this_month is None

    def test_search(self, service):
        service.add_expense("Pizza night", 20, "2026-10-01")
        service.add_expense("pizza delivery", 15, "2026-10-02", "shopping")
        service.add_expense("Taxi", 9, "2026-10-03")
        assert len(service.search("PIZZA")) == 2
        assert [e.description for e in service.search("pizza", "shopping")] == ["pizza delivery"]
        assert len(service.search("")) == 3

    def test_trend_series_always_seven(self, service):
        assert len(service.trend_chart_series()) == 7

    def test_empty_insights_are_onboarding(self, service):
        assert [i.title for i in service.insights()] == [
            "Getting Started", "Smart Analytics", "Pro Tip",
        ]

    def test_suggestions(self, service):
        assert service.suggest_category("restaurant lunch") == "food"
        assert "Food & Dining" in service.suggestion_message("restaurant lunch")

    def test_today(self, service):
        assert service.today() == "2026-10-18"

    def test_currency_uses_configured_symbol(self, dao, clock, rng):
        assert ExpenseService(dao, clock, rng).currency(1234.5) == "$1,234.50"
        assert ExpenseService(dao, clock, rng, currency_symbol="€").currency(3) == "€3.00"
