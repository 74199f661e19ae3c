from typing import Sequence

from models.category import get_category_info
from models.expense import Expense
from models.insight import CategoryPoint, TrendPoint
from services import aggregator
from utils.constants import TREND_DAYS
from utils.date_helpers import short_label, trailing_days


def category_series(expenses: Sequence[Expense]) -> list[CategoryPoint]:
    """One point per category with spending, in order of first occurrence."""
    points = []
    for category, total in aggregator.category_totals(expenses).items():
        info = get_category_info(category)
        points.append(CategoryPoint(label=info.name, value=total, color=info.color_hex))
    return points


def trend_series(expenses: Sequence[Expense], today) -> list[TrendPoint]:
    """Daily totals for the trailing week ending today; always TREND_DAYS points."""
    return [
        TrendPoint(
            label=short_label(day),
            value=aggregator.total_amount(aggregator.expenses_on(expenses, day)),
        )
        for day in trailing_days(today, TREND_DAYS)
    ]
