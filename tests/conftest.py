"""Shared fixtures: a pinned clock, deterministic randomness and a scratch DB."""

from datetime import datetime
from itertools import count

import pytest

from database.db_manager import DatabaseManager
from database.expense_dao import ExpenseDAO
from models.expense import Expense
from services.expense_service import ExpenseService
from utils.providers import FixedClock

# Sunday, day 18 of a 31-day month
NOW = datetime(2026, 10, 18, 12, 0)


class IdentityRandom:
    """Keeps pool order and always picks the first item."""

    def shuffle(self, items):
        return list(items)

    def choice(self, items):
        return items[0]


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def rng():
    return IdentityRandom()


@pytest.fixture
def make_expense():
    ids = count(1)

    def _make(amount=10.0, date="2026-10-18", category="food",
              description="lunch", receipt=None, id=None):
        return Expense(
            id=id or f"e{next(ids)}",
            description=description,
            amount=amount,
            date=date,
            category=category,
            receipt=receipt,
            timestamp="2026-10-18T12:00:00",
        )

    return _make


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "test.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def dao(db):
    return ExpenseDAO(db)


@pytest.fixture
def service(dao, clock, rng):
    svc = ExpenseService(dao, clock, rng)
    svc.load()
    return svc
