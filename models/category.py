from dataclasses import dataclass, field

from utils.constants import (
    CATEGORY_COLORS,
    CATEGORY_ICONS,
    CATEGORY_KEYWORDS,
    CATEGORY_NAMES,
    CATEGORY_ORDER,
    DEFAULT_CATEGORY,
)


@dataclass(frozen=True)
class CategoryInfo:
    key: str
    name: str
    icon: str
    color_hex: str = "#888888"
    keywords: tuple[str, ...] = field(default_factory=tuple)


LEXICON: dict[str, CategoryInfo] = {
    key: CategoryInfo(
        key=key,
        name=CATEGORY_NAMES[key],
        icon=CATEGORY_ICONS[key],
        color_hex=CATEGORY_COLORS[key],
        keywords=tuple(CATEGORY_KEYWORDS[key]),
    )
    for key in CATEGORY_ORDER
}


def is_valid_category(key) -> bool:
    return key in LEXICON


def get_category_info(key: str) -> CategoryInfo:
    """Return lexicon metadata for key, falling back to 'other'."""
    return LEXICON.get(key, LEXICON[DEFAULT_CATEGORY])


def category_choices() -> list[tuple[str, str]]:
    """(key, display name) pairs in enumeration order, for combo boxes."""
    return [(key, LEXICON[key].name) for key in CATEGORY_ORDER]
