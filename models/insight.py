from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Insight:
    icon: str
    title: str
    content: str

    def to_dict(self) -> dict:
        return {"icon": self.icon, "title": self.title, "text": self.content}


@dataclass(frozen=True)
class CategoryPoint:
    label: str
    value: float
    color: str


@dataclass(frozen=True)
class TrendPoint:
    label: str
    value: float


@dataclass(frozen=True)
class MonthComparison:
    direction: str          # 'up' | 'down'
    percent_change: int


@dataclass(frozen=True)
class DashboardSummary:
    total_this_month: float
    transaction_count_this_month: int
    top_category_this_month: Optional[str]
