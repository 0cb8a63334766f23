"""Frequency counters and rounding helpers shared by the aggregators."""

from collections import Counter
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half away from zero (2.345 -> 2.35).

    Args:
        value: Number to round.
        digits: Decimal places.

    Returns:
        Rounded value.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean(values: Iterable[float]) -> float:
    """Rounded arithmetic mean, 0.0 for no values."""
    items = list(values)
    if not items:
        return 0.0
    return round_half_up(sum(items) / len(items))


def rating_key(rating: float) -> str:
    """Shortest text form of a rating ('4', '3.5')."""
    return str(int(rating)) if rating.is_integer() else repr(rating)


class CounterRanking:
    """Name to count mapping with deterministic ranking.

    Ranking order: count descending, then name ascending.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._counts: Counter[str] = Counter()
        for name in names:
            self.add(name)

    def __len__(self) -> int:
        return len(self._counts)

    def __getitem__(self, name: str) -> int:
        return self._counts[name]

    def add(self, name: str, amount: int = 1) -> None:
        """Increment a name, ignoring blank names."""
        cleaned = name.strip()
        if cleaned:
            self._counts[cleaned] += amount

    def ranked(self, limit: int | None = None) -> list[tuple[str, int]]:
        """Return (name, count) pairs in ranking order.

        Args:
            limit: Maximum entries (None for all).

        Returns:
            Ranked pairs.
        """
        items = sorted(self._counts.items(), key=lambda item: (-item[1], item[0]))
        return items if limit is None else items[:limit]


class PersonRanking(CounterRanking):
    """Counter that also remembers the first known profile image per name."""

    def __init__(self) -> None:
        super().__init__()
        self._profiles: dict[str, str | None] = {}

    def add_person(self, name: str, profile_path: str | None) -> None:
        """Increment a person, keeping the first non-null profile path."""
        cleaned = name.strip()
        if not cleaned:
            return
        self.add(cleaned)
        if not self._profiles.get(cleaned):
            self._profiles[cleaned] = profile_path or None

    def profile_path(self, name: str) -> str | None:
        return self._profiles.get(name)
