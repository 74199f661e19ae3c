import math
import uuid
from typing import Sequence

import structlog

from database.expense_dao import ExpenseDAO
from models.category import is_valid_category
from models.expense import Expense
from models.insight import CategoryPoint, DashboardSummary, Insight, TrendPoint
from services import aggregator, chart_service
from services.categorizer import categorize, suggestion_message
from services.errors import PersistenceError, ValidationError
from services.expense_store import ExpenseStore
from services.insight_service import InsightService
from utils.currency import format_currency
from utils.date_helpers import parse_date

logger = structlog.get_logger()


class ExpenseService:
    """Entry point for the UI: owns the store and persists every mutation.

    Persistence failures never undo an in-memory change. They are queued as
    user-facing warnings and handed out once by pop_warnings().
    """

    def __init__(
        self,
        expense_dao: ExpenseDAO,
        clock,
        rng,
        currency_symbol: str = "$",
    ):
        self._dao = expense_dao
        self._clock = clock
        self._rng = rng
        self._store = ExpenseStore()
        self._insights = InsightService(clock, rng, currency_symbol)
        self._symbol = currency_symbol
        self._warnings: list[str] = []

    # ── Persistence ──────────────────────────────────────────────────────────

    def load(self):
        """Read saved expenses; unreadable data starts an empty store."""
        try:
            expenses = self._dao.load_all()
        except PersistenceError as e:
            logger.warning("expenses_unreadable", error=str(e))
            self._warnings.append("Saved expenses could not be read. Starting with an empty list.")
            expenses = []
        self._store.replace_all(expenses)
        logger.debug("expenses_loaded", count=len(expenses))

    def persist(self) -> bool:
        try:
            self._dao.save_all(self._store.snapshot())
        except PersistenceError as e:
            logger.warning("expenses_save_failed", error=str(e))
            self._warnings.append("Failed to save data. Your changes are kept until you close the app.")
            return False
        return True

    def pop_warnings(self) -> list[str]:
        warnings, self._warnings = self._warnings, []
        return warnings

    # ── Mutations ────────────────────────────────────────────────────────────

    def add_expense(
        self,
        description: str,
        amount,
        date: str,
        category: str | None = None,
        receipt: str | None = None,
    ) -> Expense:
        expense = self._build_expense(description, amount, date, category, receipt)
        self._store.add(expense)
        logger.debug("expense_added", id=expense.id, category=expense.category, amount=expense.amount)
        self.persist()
        return expense

    def delete_expense(self, expense_id: str) -> bool:
        """False when no expense has that id; the store is left unchanged."""
        if not self._store.remove(expense_id):
            return False
        logger.debug("expense_deleted", id=expense_id)
        self.persist()
        return True

    def replace_all(self, expenses: Sequence[Expense]):
        self._store.replace_all(expenses)
        self.persist()

    # ── Queries ──────────────────────────────────────────────────────────────

    def get_all(self) -> tuple[Expense, ...]:
        return self._store.snapshot()

    def currency(self, amount: float) -> str:
        return format_currency(amount, self._symbol)

    def today(self) -> str:
        return self._clock.today().isoformat()

    def search(self, term: str = "", category: str | None = None) -> list[Expense]:
        needle = (term or "").strip().lower()
        return [
            e for e in self._store.snapshot()
            if needle in e.description.lower()
            and (not category or e.category == category)
        ]

    def suggest_category(self, description: str) -> str:
        return categorize(description)

    def suggestion_message(self, description: str) -> str:
        return suggestion_message(categorize(description), self._rng)

    def dashboard_summary(self) -> DashboardSummary:
        this_month = aggregator.filter_expenses(
            self._store.snapshot(), aggregator.this_month(self._clock.today())
        )
        return DashboardSummary(
            total_this_month=aggregator.total_amount(this_month),
            transaction_count_this_month=len(this_month),
            top_category_this_month=aggregator.top_category(aggregator.category_totals(this_month)),
        )

    def category_chart_series(self) -> list[CategoryPoint]:
        return chart_service.category_series(self._store.snapshot())

    def trend_chart_series(self) -> list[TrendPoint]:
        return chart_service.trend_series(self._store.snapshot(), self._clock.today())

    def insights(self) -> list[Insight]:
        return self._insights.generate(self._store.snapshot())

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _build_expense(self, description, amount, date, category, receipt) -> Expense:
        description = (description or "").strip()
        if not description:
            raise ValidationError("Description is required.")
        try:
            amount = float(amount)
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("Invalid amount.") from None
        if not math.isfinite(amount) or amount <= 0:
            raise ValidationError("Amount must be positive.")
        parsed = parse_date(date)
        if parsed is None:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
        if not category:
            category = categorize(description)
        elif not is_valid_category(category):
            raise ValidationError(f"Invalid category: {category}")

        return Expense(
            id=uuid.uuid4().hex,
            description=description,
            amount=amount,
            date=parsed.isoformat(),
            category=category,
            receipt=receipt or None,
            timestamp=self._clock.now().isoformat(),
        )
