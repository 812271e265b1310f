"""Sliding-window search for the cleanest charging period."""

from collections.abc import Iterator
from decimal import Decimal

from ..exceptions import InvalidDurationError, NoFeasibleWindowError
from ..models import GenerationInterval, OptimalChargingWindow
from .clean import CleanEnergyClassifier


def window_size_for(duration_hours: int, intervals_per_hour: int) -> int:
    """Convert a charging duration in hours to a number of intervals."""
    if isinstance(duration_hours, bool) or not isinstance(duration_hours, int):
        raise InvalidDurationError(
            f"Duration must be a whole number of hours, got {duration_hours!r}"
        )
    if duration_hours < 1:
        raise InvalidDurationError(f"Duration must be at least 1 hour, got {duration_hours}")
    if intervals_per_hour < 1:
        raise InvalidDurationError(
            f"Intervals per hour must be at least 1, got {intervals_per_hour}"
        )
    return duration_hours * intervals_per_hour


def window_sums(scores: list[Decimal], window_size: int) -> Iterator[Decimal]:
    """Yield the sum of every window of `window_size` consecutive scores, in order.

    The first sum is computed directly; each later one drops the outgoing
    score and adds the incoming one. Decimal arithmetic keeps the running
    sum identical to a direct sum at every position.
    """
    current_sum = sum(scores[:window_size], Decimal(0))
    yield current_sum
    for i in range(1, len(scores) - window_size + 1):
        current_sum = current_sum - scores[i - 1] + scores[i + window_size - 1]
        yield current_sum


def find_optimal_window(
    intervals: list[GenerationInterval],
    window_size: int,
    classifier: CleanEnergyClassifier | None = None,
) -> OptimalChargingWindow:
    """Find the run of `window_size` consecutive intervals with the highest clean share.

    Algorithm:
    1. Score each interval as the sum of its clean fuel percentages.
    2. Sum the first `window_size` scores as the starting best.
    3. Slide one interval at a time, dropping the outgoing score and adding the
       incoming one. A window only replaces the best on a strict improvement,
       so the earliest of several equally good windows wins.
    """
    if window_size < 1:
        raise InvalidDurationError(f"Window size must be at least 1, got {window_size}")
    if len(intervals) < window_size:
        raise NoFeasibleWindowError(
            f"Need {window_size} intervals for the requested window "
            f"but only {len(intervals)} are available"
        )
    if classifier is None:
        classifier = CleanEnergyClassifier()

    scores = [classifier.clean_score(interval) for interval in intervals]

    best_sum = None
    best_start = 0
    for i, current_sum in enumerate(window_sums(scores, window_size)):
        if best_sum is None or current_sum > best_sum:
            best_sum = current_sum
            best_start = i

    return OptimalChargingWindow(
        start=intervals[best_start].start,
        end=intervals[best_start + window_size - 1].end,
        average_clean_percentage=float(best_sum / window_size),
    )
