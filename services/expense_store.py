from typing import Iterable, Iterator, Optional

from models.expense import Expense


class ExpenseStore:
    """Ordered in-memory expense collection, most recently added first.

    The only mutators are add(), remove() and replace_all(); everything else
    reads a snapshot.
    """

    def __init__(self, expenses: Iterable[Expense] = ()):
        self._expenses: list[Expense] = []
        self.revision = 0
        self.replace_all(expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(self.snapshot())

    def __contains__(self, expense_id) -> bool:
        return self.get(expense_id) is not None

    def snapshot(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        return next((e for e in self._expenses if e.id == expense_id), None)

    def add(self, expense: Expense):
        if expense.id in self:
            raise ValueError(f"Duplicate expense id: {expense.id}")
        self._expenses.insert(0, expense)
        self.revision += 1

    def remove(self, expense_id: str) -> bool:
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                del self._expenses[idx]
                self.revision += 1
                return True
        return False

    def replace_all(self, expenses: Iterable[Expense]):
        new_list = list(expenses)
        ids = [e.id for e in new_list]
        if len(ids) != len(set(ids)):
            raise ValueError("Expense ids must be unique.")
        self._expenses = new_list
        self.revision += 1
