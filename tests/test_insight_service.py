"""Tests for insight generation."""

from datetime import datetime

import pytest

from services.insight_service import ONBOARDING_INSIGHTS, InsightService
from utils.providers import FixedClock, RandomProvider


@pytest.fixture
def insights(clock, rng):
    return InsightService(clock, rng)


@pytest.fixture
def history(make_expense):
    return [
        make_expense(amount=100, date="2026-10-18", category="food"),
        make_expense(amount=50, date="2026-10-15", category="food"),
        make_expense(amount=200, date="2026-09-10", category="transport"),
    ]


def _by_title(pool):
    return {i.title: i.content for i in pool}


class TestGenerate:
    """Tests for the shuffled, truncated output."""

    @pytest.mark.parametrize("seed", [None, 0, 1, 12345])
    def test_empty_store_gives_onboarding(self, clock, seed):
        """The onboarding set does not depend on randomness."""
        result = InsightService(clock, RandomProvider(seed)).generate([])
        assert result == list(ONBOARDING_INSIGHTS)
        assert len(result) == 3

    def test_at_most_five_from_pool(self, clock, history):
        svc = InsightService(clock, RandomProvider(7))
        result = svc.generate(history)
        assert len(result) == 5
        assert set(result) <= set(svc.build_pool(history))

    def test_same_seed_same_order(self, clock, history):
        first = InsightService(clock, RandomProvider(3)).generate(history)
        second = InsightService(clock, RandomProvider(3)).generate(history)
        assert first == second

    def test_identity_shuffle_keeps_section_order(self, insights, history):
        result = insights.generate(history)
        assert result == insights.build_pool(history)[:5]


class TestPool:
    """Tests for the candidate insights built from the data."""

    def test_spending_patterns(self, insights, history):
        pool = _by_title(insights.build_pool(history))
        assert pool["Daily Spending Average"] == \
            "You're spending an average of $75.00 per day this month."
        assert pool["Monthly Trend"] == "Your spending is 25% down compared to last month."
        assert "High Spending Alert" not in pool

    def test_category_insights(self, insights, history):
        pool = _by_title(insights.build_pool(history))
        assert pool["Top Spending Category"] == \
            "Transportation accounts for 57% of your total spending."
        assert "Transport Optimization" in pool
        assert pool["Expense Tracking Tip"] == (
            "You haven't tracked any Shopping expenses yet. "
            "Don't forget to log all spending!"
        )

    def test_trend_insights(self, insights, history):
        pool = _by_title(insights.build_pool(history))
        assert pool["Spending Pattern"] == \
            "You tend to spend the most on Thursdays. Average: $125.00"
        assert pool["Recent Activity"] == \
            "You've logged 2 expenses in the last 7 days totaling $150.00."

    def test_projection_after_first_week(self, insights, history):
        pool = _by_title(insights.build_pool(history))
        assert pool["Monthly Projection"] == \
            "Based on current spending, you're projected to spend $258.33 this month."

    def test_no_projection_in_first_week(self, rng, history):
        early = InsightService(FixedClock(datetime(2026, 10, 5, 9, 0)), rng)
        assert "Monthly Projection" not in _by_title(early.build_pool(history))

    def test_no_trend_without_last_month(self, insights, make_expense):
        pool = _by_title(insights.build_pool([make_expense(amount=20)]))
        assert "Monthly Trend" not in pool

    def test_high_spending_and_saving_tip(self, insights, make_expense):
        pool = insights.build_pool([make_expense(amount=1200, category="food")])
        titles = [i.title for i in pool]
        assert "High Spending Alert" in titles
        assert "Saving Opportunity" in titles

    def test_saving_tips_capped_at_two(self, insights, make_expense):
        expenses = [
            make_expense(amount=600, category="food"),
            make_expense(amount=600, category="shopping"),
            make_expense(amount=600, category="entertainment"),
        ]
        tips = insights.saving_opportunities(expenses)
        assert len(tips) == 2

    def test_achievement_counts_expenses(self, insights, history):
        pool = _by_title(insights.build_pool(history))
        assert pool["Achievement Unlocked"].startswith("You've tracked 3 expenses!")

    def test_currency_symbol(self, clock, rng, make_expense):
        svc = InsightService(clock, rng, currency_symbol="€")
        pool = _by_title(svc.build_pool([make_expense(amount=20)]))
        assert pool["Daily Spending Average"] == \
            "You're spending an average of €20.00 per day this month."
