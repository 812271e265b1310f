"""Per-day averaging of generation mix intervals."""

from collections import defaultdict
from datetime import date, timezone

from ..models import DailyEnergyMix, GenerationInterval
from .clean import CleanEnergyClassifier


def utc_date(interval: GenerationInterval) -> date:
    """The UTC calendar date an interval belongs to, taken from its start."""
    start = interval.start
    if start.tzinfo is not None:
        start = start.astimezone(timezone.utc)
    return start.date()


def daily_average(
    day: date, intervals: list[GenerationInterval], classifier: CleanEnergyClassifier
) -> DailyEnergyMix:
    """Average each fuel's percentage over all intervals of one day.

    Every interval counts towards the divisor, including those with no mix
    entries, so a fuel missing from some intervals (or an empty interval)
    pulls that day's averages down.
    """
    totals: dict[str, float] = defaultdict(float)
    for interval in intervals:
        for mix in interval.generation_mix:
            totals[mix.fuel] += mix.percentage

    count = len(intervals)
    averages = {fuel: total / count for fuel, total in totals.items()}
    clean = sum((pct for fuel, pct in averages.items() if classifier.is_clean(fuel)), 0.0)

    return DailyEnergyMix(
        date=day,
        average_percentages=averages,
        clean_energy_percentage=clean,
    )


def aggregate_by_day(
    intervals: list[GenerationInterval],
    classifier: CleanEnergyClassifier | None = None,
) -> list[DailyEnergyMix]:
    """Group intervals by UTC date and return one averaged record per date.

    Results are sorted by date ascending.
    """
    if classifier is None:
        classifier = CleanEnergyClassifier()

    by_date: dict[date, list[GenerationInterval]] = defaultdict(list)
    for interval in intervals:
        by_date[utc_date(interval)].append(interval)

    return [daily_average(day, by_date[day], classifier) for day in sorted(by_date)]
