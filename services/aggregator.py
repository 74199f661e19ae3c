"""Pure aggregate queries over a sequence of expenses.

Nothing here caches or mutates; callers pass the current store snapshot on
every call. Divisions with a zero denominator return 0.
"""
from collections import defaultdict
from datetime import date, timedelta
from typing import Callable, Iterable, Optional, Sequence

from models.expense import Expense
from models.insight import MonthComparison
from utils.constants import CATEGORY_ORDER, DEFAULT_CATEGORY, PROJECTION_MIN_DAY, WEEKDAY_NAMES
from utils.currency import round_half_up
from utils.date_helpers import previous_month

DatePredicate = Callable[[date], bool]


# ── Date predicates ───────────────────────────────────────────────────────────

def in_month(year: int, month: int) -> DatePredicate:
    return lambda d: d.year == year and d.month == month


def this_month(today: date) -> DatePredicate:
    return in_month(today.year, today.month)


def last_month(today: date) -> DatePredicate:
    return in_month(*previous_month(today.year, today.month))


def within_last_days(days: int, today: date) -> DatePredicate:
    """The `days` calendar days ending today, inclusive."""
    cutoff = today - timedelta(days=days - 1)
    return lambda d: cutoff <= d <= today


# ── Totals ────────────────────────────────────────────────────────────────────

def total_amount(expenses: Iterable[Expense]) -> float:
    return sum((e.amount for e in expenses), 0.0)


def filter_expenses(expenses: Iterable[Expense], predicate: DatePredicate) -> list[Expense]:
    return [e for e in expenses if predicate(e.parsed_date)]


def total_for_period(expenses: Iterable[Expense], predicate: DatePredicate) -> float:
    return total_amount(filter_expenses(expenses, predicate))


def recent_expenses(expenses: Iterable[Expense], days: int, today: date) -> list[Expense]:
    return filter_expenses(expenses, within_last_days(days, today))


def expenses_on(expenses: Iterable[Expense], day: date) -> list[Expense]:
    return [e for e in expenses if e.parsed_date == day]


# ── Categories ────────────────────────────────────────────────────────────────

def category_totals(expenses: Iterable[Expense]) -> dict[str, float]:
    """{category: total} in order of first occurrence; empty categories omitted."""
    totals: dict[str, float] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
    return {cat: amount for cat, amount in totals.items() if amount > 0}


def top_category(totals: dict[str, float]) -> Optional[str]:
    """Category with the largest total; ties go to the earlier category."""
    best = None
    max_amount = 0.0
    for category in CATEGORY_ORDER:
        amount = totals.get(category, 0.0)
        if amount > max_amount:
            max_amount = amount
            best = category
    return best


def unused_categories(totals: dict[str, float]) -> list[str]:
    return [c for c in CATEGORY_ORDER if c != DEFAULT_CATEGORY and not totals.get(c)]


def share_percent(part: float, whole: float) -> int:
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


# ── Daily / weekday statistics ────────────────────────────────────────────────

def average_daily(expenses: Sequence[Expense]) -> float:
    """Total divided by the number of distinct dates with spending."""
    days = {e.date for e in expenses}
    if not days:
        return 0.0
    return total_amount(expenses) / len(days)


def weekday_name(d: date) -> str:
    # date.weekday() is Monday=0; WEEKDAY_NAMES starts on Sunday
    return WEEKDAY_NAMES[(d.weekday() + 1) % 7]


def weekday_averages(expenses: Iterable[Expense]) -> dict[str, float]:
    """{weekday name: average amount}, Sunday first, days without data omitted."""
    grouped: dict[str, list[float]] = defaultdict(list)
    for e in expenses:
        grouped[weekday_name(e.parsed_date)].append(e.amount)
    return {
        day: sum(grouped[day]) / len(grouped[day])
        for day in WEEKDAY_NAMES
        if grouped.get(day)
    }


def highest_weekday(averages: dict[str, float]) -> Optional[tuple[str, float]]:
    best = None
    max_average = 0.0
    for day in WEEKDAY_NAMES:
        average = averages.get(day)
        if average is not None and average > max_average:
            max_average = average
            best = (day, average)
    return best


# ── Month comparisons ─────────────────────────────────────────────────────────

def month_over_month(this_total: float, last_total: float) -> MonthComparison:
    if last_total == 0:
        return MonthComparison(direction="up", percent_change=100)
    percent = round_half_up(abs(this_total - last_total) / last_total * 100)
    direction = "up" if this_total > last_total else "down"
    return MonthComparison(direction=direction, percent_change=percent)


def should_project(day_of_month: int) -> bool:
    """Projections are too noisy during the first week of a month."""
    return day_of_month > PROJECTION_MIN_DAY


def projected_month_total(total_so_far: float, day_of_month: int, days_in_month: int) -> float:
    if day_of_month <= 0:
        return 0.0
    return total_so_far / day_of_month * days_in_month
