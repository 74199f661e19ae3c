"""Date/time and randomness sources injected into the core services."""
import random
from datetime import date, datetime
from typing import Sequence, TypeVar

T = TypeVar("T")


class Clock:
    def today(self) -> date:
        return date.today()

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock pinned to a single instant."""

    def __init__(self, moment: datetime):
        self._moment = moment

    def today(self) -> date:
        return self._moment.date()

    def now(self) -> datetime:
        return self._moment


class RandomProvider:
    """Uniform shuffle and selection. Pass a seed for reproducible output."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy; the input is left untouched."""
        shuffled = list(items)
        self._random.shuffle(shuffled)
        return shuffled

    def choice(self, items: Sequence[T]) -> T:
        return self._random.choice(items)
