"""Keyword-scoring categorizer.

Maps a free-text description to one of the fixed categories. Each keyword
found as a substring scores its own length; an exact match of the whole
description adds 10 and a whole-word match adds 5. The highest strictly
greater score wins, scanning categories in enumeration order.
"""
import re
from functools import lru_cache

from models.category import LEXICON, get_category_info
from utils.constants import CATEGORY_ORDER, DEFAULT_CATEGORY

EXACT_MATCH_BONUS = 10
WORD_BOUNDARY_BONUS = 5

_SUGGESTION_TEMPLATES = [
    '🤖 AI suggests "{name}" category',
    "💡 Smart categorization: {icon} {name}",
    "🎯 AI detected: {name} expense",
    "⚡ Auto-categorized as {name}",
    "🔍 AI analysis: Best fit is {name}",
]


@lru_cache(maxsize=None)
def _word_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def category_score(description: str, keywords) -> int:
    """Score a lower-cased description against one category's keywords."""
    score = 0
    for keyword in keywords:
        if keyword not in description:
            continue
        score += len(keyword)
        if description == keyword:
            score += EXACT_MATCH_BONUS
        if _word_pattern(keyword).search(description):
            score += WORD_BOUNDARY_BONUS
    return score


def categorize(description) -> str:
    if not description:
        return DEFAULT_CATEGORY

    desc = str(description).lower()
    best_match = DEFAULT_CATEGORY
    highest_score = 0
    for category in CATEGORY_ORDER:
        score = category_score(desc, LEXICON[category].keywords)
        if score > highest_score:
            highest_score = score
            best_match = category
    return best_match


def suggestion_message(category: str, rng) -> str:
    """One of several phrasings announcing the suggested category."""
    info = get_category_info(category)
    template = rng.choice(_SUGGESTION_TEMPLATES)
    return template.format(name=info.name, icon=info.icon)
