"""Narrative insights derived from the expense history.

generate() assembles a pool of candidate insights from the aggregate queries,
shuffles it through the injected randomness provider and keeps at most
MAX_INSIGHTS. Shuffling only decides order and which entries are cut; the text
of each insight depends on the data alone.
"""
from typing import Sequence

from models.category import get_category_info
from models.expense import Expense
from models.insight import Insight
from services import aggregator
from utils.constants import (
    HIGH_SPENDING_THRESHOLD,
    MAX_INSIGHTS,
    MAX_SAVING_TIPS,
    RECENT_DAYS,
    SAVING_OPPORTUNITY_THRESHOLD,
)
from utils.currency import format_currency
from utils.date_helpers import days_in_month

ONBOARDING_INSIGHTS = (
    Insight(
        icon="🚀",
        title="Getting Started",
        content="Add some expenses to unlock powerful AI insights about your spending patterns!",
    ),
    Insight(
        icon="📊",
        title="Smart Analytics",
        content="Our AI will analyze your spending habits and provide personalized recommendations.",
    ),
    Insight(
        icon="💡",
        title="Pro Tip",
        content="The more expenses you track, the smarter our insights become. Start with your daily purchases!",
    ),
)

CATEGORY_ADVICE = {
    "food": Insight(
        icon="🍽️",
        title="Food Spending Insight",
        content="Consider meal planning and cooking at home more often to reduce dining expenses.",
    ),
    "transport": Insight(
        icon="🚗",
        title="Transport Optimization",
        content="Look into carpooling or public transport options to reduce transportation costs.",
    ),
    "shopping": Insight(
        icon="🛒",
        title="Shopping Smart",
        content="Try creating shopping lists and comparing prices before making purchases.",
    ),
    "entertainment": Insight(
        icon="🎭",
        title="Entertainment Balance",
        content="Look for free or low-cost entertainment options like parks or community events.",
    ),
}

SAVING_ADVICE = {
    "food": "🍳 Cook more meals at home to reduce food expenses",
    "shopping": "🏷️ Use coupon apps and compare prices before buying",
    "entertainment": "📺 Consider sharing streaming subscriptions with family",
    "transport": "⛽ Track fuel efficiency and consider carpooling",
}

STATIC_TIPS = (
    Insight(
        icon="💡",
        title="Smart Tip",
        content="Track recurring expenses like subscriptions to better understand your fixed costs.",
    ),
    Insight(
        icon="📱",
        title="Mobile Tip",
        content="Take photos of receipts right after purchases to never forget an expense!",
    ),
    Insight(
        icon="🔍",
        title="Analysis Ready",
        content="With more data, our AI can provide even more personalized insights about your spending habits.",
    ),
)


class InsightService:
    def __init__(self, clock, rng, currency_symbol: str = "$"):
        self._clock = clock
        self._rng = rng
        self._symbol = currency_symbol

    def generate(self, expenses: Sequence[Expense]) -> list[Insight]:
        if not expenses:
            return list(ONBOARDING_INSIGHTS)
        pool = self.build_pool(expenses)
        return self._rng.shuffle(pool)[:MAX_INSIGHTS]

    def build_pool(self, expenses: Sequence[Expense]) -> list[Insight]:
        """All candidate insights, in section order, before shuffling."""
        return [
            *self.spending_pattern_insights(expenses),
            *self.category_insights(expenses),
            *self.trend_insights(expenses),
            *self.budget_insights(expenses),
            *self.personalized_tips(expenses),
        ]

    # ── Sections ──────────────────────────────────────────────────────────────

    def spending_pattern_insights(self, expenses: Sequence[Expense]) -> list[Insight]:
        today = self._clock.today()
        this_month = aggregator.filter_expenses(expenses, aggregator.this_month(today))
        last_month = aggregator.filter_expenses(expenses, aggregator.last_month(today))
        if not this_month:
            return []

        total_this_month = aggregator.total_amount(this_month)
        insights = [
            Insight(
                icon="📈",
                title="Daily Spending Average",
                content=(
                    f"You're spending an average of "
                    f"{self._money(aggregator.average_daily(this_month))} per day this month."
                ),
            )
        ]
        if total_this_month > HIGH_SPENDING_THRESHOLD:
            insights.append(Insight(
                icon="💰",
                title="High Spending Alert",
                content=(
                    f"You've spent {self._money(total_this_month)} this month. "
                    f"Consider reviewing your largest expenses."
                ),
            ))
        if last_month:
            comparison = aggregator.month_over_month(
                total_this_month, aggregator.total_amount(last_month)
            )
            insights.append(Insight(
                icon="📈" if comparison.direction == "up" else "📉",
                title="Monthly Trend",
                content=(
                    f"Your spending is {comparison.percent_change}% {comparison.direction} "
                    f"compared to last month."
                ),
            ))
        return insights

    def category_insights(self, expenses: Sequence[Expense]) -> list[Insight]:
        insights = []
        totals = aggregator.category_totals(expenses)
        top = aggregator.top_category(totals)
        if top:
            info = get_category_info(top)
            share = aggregator.share_percent(totals[top], aggregator.total_amount(expenses))
            insights.append(Insight(
                icon=info.icon,
                title="Top Spending Category",
                content=f"{info.name} accounts for {share}% of your total spending.",
            ))
            advice = CATEGORY_ADVICE.get(top)
            if advice:
                insights.append(advice)

        unused = aggregator.unused_categories(totals)
        if unused:
            insights.append(Insight(
                icon="🎯",
                title="Expense Tracking Tip",
                content=(
                    f"You haven't tracked any {get_category_info(unused[0]).name} expenses yet. "
                    f"Don't forget to log all spending!"
                ),
            ))
        return insights

    def trend_insights(self, expenses: Sequence[Expense]) -> list[Insight]:
        insights = []
        highest = aggregator.highest_weekday(aggregator.weekday_averages(expenses))
        if highest:
            day, average = highest
            insights.append(Insight(
                icon="📅",
                title="Spending Pattern",
                content=f"You tend to spend the most on {day}s. Average: {self._money(average)}",
            ))

        recent = aggregator.recent_expenses(expenses, RECENT_DAYS, self._clock.today())
        if recent:
            insights.append(Insight(
                icon="⏰",
                title="Recent Activity",
                content=(
                    f"You've logged {len(recent)} expenses in the last {RECENT_DAYS} days "
                    f"totaling {self._money(aggregator.total_amount(recent))}."
                ),
            ))
        return insights

    def budget_insights(self, expenses: Sequence[Expense]) -> list[Insight]:
        insights = []
        today = self._clock.today()
        if aggregator.should_project(today.day):
            total_this_month = aggregator.total_for_period(expenses, aggregator.this_month(today))
            projected = aggregator.projected_month_total(
                total_this_month, today.day, days_in_month(today.year, today.month)
            )
            insights.append(Insight(
                icon="🎯",
                title="Monthly Projection",
                content=(
                    f"Based on current spending, you're projected to spend "
                    f"{self._money(projected)} this month."
                ),
            ))
        insights.extend(self.saving_opportunities(expenses))
        return insights

    def saving_opportunities(self, expenses: Sequence[Expense]) -> list[Insight]:
        tips = [
            Insight(icon="💰", title="Saving Opportunity", content=SAVING_ADVICE[category])
            for category, amount in aggregator.category_totals(expenses).items()
            if amount > SAVING_OPPORTUNITY_THRESHOLD and category in SAVING_ADVICE
        ]
        return tips[:MAX_SAVING_TIPS]

    def personalized_tips(self, expenses: Sequence[Expense]) -> list[Insight]:
        achievement = Insight(
            icon="🏆",
            title="Achievement Unlocked",
            content=(
                f"You've tracked {len(expenses)} expenses! "
                f"Keep building this healthy financial habit."
            ),
        )
        return [STATIC_TIPS[0], achievement, *STATIC_TIPS[1:]]

    def _money(self, amount: float) -> str:
        return format_currency(amount, self._symbol)
