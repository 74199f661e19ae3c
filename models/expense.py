import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.category import is_valid_category
from utils.date_helpers import parse_date

_REQUIRED_FIELDS = ("id", "description", "amount", "date", "category", "timestamp")


@dataclass(frozen=True)
class Expense:
    id: str
    description: str
    amount: float
    date: str               # 'YYYY-MM-DD'
    category: str           # one of CATEGORY_ORDER
    receipt: Optional[str] = None
    timestamp: str = ""     # ISO-8601 creation instant

    @property
    def parsed_date(self) -> date:
        return parse_date(self.date)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
            "category": self.category,
            "receipt": self.receipt,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        """Build an Expense from a persisted/imported record.

        Raises ValueError naming the first problem found.
        """
        if not isinstance(data, dict):
            raise ValueError("Expense record must be an object.")
        missing = [f for f in _REQUIRED_FIELDS if data.get(f) in (None, "")]
        if missing:
            raise ValueError(f"Expense record is missing: {', '.join(missing)}")

        description = str(data["description"]).strip()
        if not description:
            raise ValueError("Expense description cannot be empty.")
        try:
            amount = float(data["amount"])
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"Invalid amount: {data['amount']!r}") from None
        if not math.isfinite(amount) or amount <= 0:
            raise ValueError(f"Amount must be positive: {data['amount']!r}")
        if parse_date(data["date"]) is None:
            raise ValueError(f"Invalid date: {data['date']!r}")
        if not is_valid_category(data["category"]):
            raise ValueError(f"Unknown category: {data['category']!r}")

        receipt = data.get("receipt")
        return cls(
            id=str(data["id"]),
            description=description,
            amount=amount,
            date=parse_date(data["date"]).isoformat(),
            category=data["category"],
            receipt=str(receipt) if receipt else None,
            timestamp=str(data["timestamp"]),
        )
