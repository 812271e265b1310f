"""Builders for generation interval test data."""

from datetime import datetime, timedelta

from gridmix.models import GenerationInterval, GenerationMix


def make_interval(start: datetime, minutes: int = 30, **mix: float) -> GenerationInterval:
    """Build an interval from keyword fuel percentages, e.g. make_interval(t, wind=40)."""
    return GenerationInterval(
        start=start,
        end=start + timedelta(minutes=minutes),
        generation_mix=tuple(GenerationMix(fuel, pct) for fuel, pct in mix.items()),
    )


def make_series(start: datetime, count: int, **mix: float) -> list[GenerationInterval]:
    """Consecutive half-hour intervals sharing the same mix."""
    return [make_interval(start + timedelta(minutes=30 * i), **mix) for i in range(count)]


def make_scored(start: datetime, scores: list[float], fuel: str = "wind") -> list[GenerationInterval]:
    """Consecutive half-hour intervals whose clean share is given by `scores`."""
    return [
        make_interval(start + timedelta(minutes=30 * i), **{fuel: score, "gas": 100.0 - score})
        for i, score in enumerate(scores)
    ]
