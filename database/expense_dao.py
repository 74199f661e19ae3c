import json
from typing import Iterable

from database.db_manager import DatabaseManager
from models.expense import Expense
from services.errors import PersistenceError
from utils.constants import STORAGE_KEY


class ExpenseDAO:
    """Persists the whole expense list as one JSON array under STORAGE_KEY."""

    def __init__(self, db: DatabaseManager, key: str = STORAGE_KEY):
        self._db = db
        self._key = key

    def load_all(self) -> list[Expense]:
        raw = self._db.load(self._key)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            raise PersistenceError(f"Saved expenses are not valid JSON: {e}") from e
        if not isinstance(records, list):
            raise PersistenceError("Saved expenses are not a list.")
        try:
            expenses = [Expense.from_dict(r) for r in records]
        except ValueError as e:
            raise PersistenceError(f"Saved expenses are corrupt: {e}") from e
        if len({e.id for e in expenses}) != len(expenses):
            raise PersistenceError("Saved expenses contain duplicate ids.")
        return expenses

    def save_all(self, expenses: Iterable[Expense]):
        text = json.dumps([e.to_dict() for e in expenses], ensure_ascii=False)
        self._db.save(self._key, text)
