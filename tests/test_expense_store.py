"""Tests for the in-memory expense store."""

import pytest

from services.expense_store import ExpenseStore


class TestExpenseStore:
    """Tests for ordering and mutation."""

    def test_add_prepends(self, make_expense):
        store = ExpenseStore()
        first, second = make_expense(), make_expense()
        store.add(first)
        store.add(second)
        assert store.snapshot() == (second, first)
        assert len(store) == 2

    def test_duplicate_id_rejected(self, make_expense):
        store = ExpenseStore([make_expense(id="x")])
        with pytest.raises(ValueError):
            store.add(make_expense(id="x"))
        assert len(store) == 1

    def test_remove(self, make_expense):
        store = ExpenseStore([make_expense(id="a"), make_expense(id="b")])
        assert store.remove("a") is True
        assert "a" not in store
        assert [e.id for e in store] == ["b"]

    def test_remove_missing_leaves_store_unchanged(self, make_expense):
        store = ExpenseStore([make_expense(id="a")])
        before = (store.snapshot(), store.revision)
        assert store.remove("nope") is False
        assert (store.snapshot(), store.revision) == before

    def test_replace_all_rejects_duplicate_ids(self, make_expense):
        store = ExpenseStore()
        with pytest.raises(ValueError):
            store.replace_all([make_expense(id="a"), make_expense(id="a")])

    def test_revision_advances_on_mutation(self, make_expense):
        store = ExpenseStore()
        start = store.revision
        store.add(make_expense(id="a"))
        store.remove("a")
        store.replace_all([])
        assert store.revision == start + 3

    def test_get(self, make_expense):
        expense = make_expense(id="a")
        store = ExpenseStore([expense])
        assert store.get("a") is expense
        assert store.get("b") is None
