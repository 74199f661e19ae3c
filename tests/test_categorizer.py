"""Tests for the keyword-scoring categorizer."""

import pytest

from models.category import LEXICON
from services.categorizer import category_score, categorize, suggestion_message
from utils.providers import RandomProvider


class TestCategorize:
    """Tests for categorize()."""

    @pytest.mark.parametrize("description", ["", None])
    def test_empty_description_is_other(self, description):
        """Nothing to score falls back to 'other'."""
        assert categorize(description) == "other"

    def test_no_keyword_is_other(self):
        assert categorize("xyz qwerty") == "other"

    def test_restaurant_lunch_is_food(self):
        """Both food keywords contribute to the winning score."""
        assert categorize("restaurant lunch") == "food"

    @pytest.mark.parametrize("description,expected", [
        ("uber ride to airport", "transport"),
        ("electricity bill", "bills"),
        ("doctor visit", "health"),
        ("netflix", "entertainment"),
        ("hotel", "travel"),
        ("tuition", "education"),
    ])
    def test_single_category_keywords(self, description, expected):
        assert categorize(description) == expected

    def test_case_insensitive(self):
        assert categorize("STARBUCKS Coffee") == "food"

    def test_tie_goes_to_earlier_category(self):
        """'gas' scores the same for transport and bills; transport comes first."""
        assert categorize("gas") == "transport"

    def test_shared_keyword_subway(self):
        assert categorize("subway") == "food"


class TestCategoryScore:
    """Tests for the per-category score."""

    def test_exact_match_bonus(self):
        # len 7 + exact 10 + word 5
        assert category_score("netflix", LEXICON["entertainment"].keywords) == 22

    def test_substring_without_word_boundary(self):
        """'electric' inside 'electricity' scores its length only."""
        assert category_score("electricity", ("electric",)) == 8

    def test_whole_word_bonus(self):
        assert category_score("the lunch", ("lunch",)) == 10

    def test_no_match_scores_zero(self):
        assert category_score("nothing here", LEXICON["travel"].keywords) == 0


class TestSuggestionMessage:
    """Tests for the suggestion phrasing."""

    def test_mentions_display_name(self, rng):
        message = suggestion_message("food", rng)
        assert "Food & Dining" in message

    def test_seeded_choice_is_reproducible(self):
        first = suggestion_message("travel", RandomProvider(42))
        second = suggestion_message("travel", RandomProvider(42))
        assert first == second
        assert "Travel" in first
