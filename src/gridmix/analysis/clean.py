"""Classification of fuel types as clean (low-carbon) generation."""

from collections.abc import Iterable
from decimal import Decimal

from ..config import DEFAULT_CLEAN_SOURCES
from ..models import GenerationInterval


class CleanEnergyClassifier:
    """Decides whether a fuel counts towards the clean-energy share.

    Matching is case-insensitive: "Wind", "WIND" and "wind" are the same fuel.
    The same instance is used for daily aggregation and window scoring so both
    pipelines agree on what counts as clean.
    """

    def __init__(self, sources: Iterable[str] = DEFAULT_CLEAN_SOURCES):
        self.sources = frozenset(s.casefold() for s in sources)

    def __repr__(self) -> str:
        return f"CleanEnergyClassifier({sorted(self.sources)!r})"

    def is_clean(self, fuel: str) -> bool:
        return fuel.casefold() in self.sources

    def clean_score(self, interval: GenerationInterval) -> Decimal:
        """Sum of clean fuel percentages in a single interval (0 if no mix).

        Percentages are converted through their decimal representation, so
        sums of one-decimal values are exact.
        """
        return sum(
            (
                Decimal(str(mix.percentage))
                for mix in interval.generation_mix
                if self.is_clean(mix.fuel)
            ),
            Decimal(0),
        )
