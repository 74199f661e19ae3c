"""Tests for the sqlite key-value store, settings and the expense DAO."""

import json
import os

import pytest

from database.db_manager import DatabaseManager
from database.expense_dao import ExpenseDAO
from services.errors import PersistenceError
from utils.constants import DB_FILE, STORAGE_KEY


class TestKeyValueStore:
    """Tests for load() and save()."""

    def test_missing_key(self, db):
        assert db.load("absent") is None

    def test_save_and_overwrite(self, db):
        db.save("k", "one")
        db.save("k", "two")
        assert db.load("k") == "two"

    def test_survives_reopen(self, tmp_path):
        path = str(tmp_path / "store.db")
        first = DatabaseManager(path)
        first.initialize()
        first.save("k", "kept")
        first.close()

        second = DatabaseManager(path)
        second.initialize()
        assert second.load("k") == "kept"
        second.close()

    def test_unopenable_path(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "missing" / "dir" / "x.db"))
        with pytest.raises(PersistenceError):
            db.initialize()


class TestSettings:
    """Tests for app_settings."""

    def test_defaults_seeded(self, db):
        assert db.get_setting("appearance_mode") == "system"
        assert db.get_setting("currency_symbol") == "$"
        assert db.get_setting("date_format") == "MM/DD/YYYY"

    def test_set_setting(self, db):
        db.set_setting("currency_symbol", "€")
        assert db.get_setting("currency_symbol") == "€"

    def test_unknown_setting_default(self, db):
        assert db.get_setting("nope", "fallback") == "fallback"

    def test_initialize_keeps_user_values(self, db):
        db.set_setting("appearance_mode", "dark")
        db.initialize()
        assert db.get_setting("appearance_mode") == "dark"


class TestOpenDefault:
    """Tests for the startup factory."""

    def test_creates_file_in_folder(self, tmp_path):
        db = DatabaseManager.open_default(str(tmp_path))
        db.save("k", "v")
        db.close()
        assert os.path.exists(tmp_path / DB_FILE)


class TestExpenseDAO:
    """Tests for the JSON-array persistence of expenses."""

    def test_empty(self, dao):
        assert dao.load_all() == []

    def test_round_trip(self, dao, make_expense):
        expenses = [make_expense(id="b", receipt="r.png"), make_expense(id="a")]
        dao.save_all(expenses)
        assert dao.load_all() == expenses

    def test_stored_under_storage_key(self, db, dao, make_expense):
        dao.save_all([make_expense(id="a")])
        assert json.loads(db.load(STORAGE_KEY))[0]["id"] == "a"

    @pytest.mark.parametrize("raw", [
        "{not json",
        '{"id": "a"}',
        '[{"id": "a"}]',
    ])
    def test_corrupt_data(self, db, raw):
        db.save(STORAGE_KEY, raw)
        with pytest.raises(PersistenceError):
            ExpenseDAO(db).load_all()

    def test_duplicate_ids_rejected(self, db, dao, make_expense):
        record = make_expense(id="a").to_dict()
        db.save(STORAGE_KEY, json.dumps([record, record]))
        with pytest.raises(PersistenceError, match="duplicate ids"):
            dao.load_all()

    def test_oversized_amount_rejected(self, db, dao, make_expense):
        record = make_expense(id="a").to_dict()
        record["amount"] = 10 ** 400
        db.save(STORAGE_KEY, json.dumps([record]))
        with pytest.raises(PersistenceError):
            dao.load_all()
