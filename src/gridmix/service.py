"""Energy mix service: fetches intervals and runs the daily and window analyses."""

import logging
from collections.abc import Callable
from datetime import datetime, time, timedelta, timezone

from .analysis.clean import CleanEnergyClassifier
from .analysis.daily import aggregate_by_day
from .analysis.window import find_optimal_window, window_size_for
from .config import Settings
from .exceptions import ExternalDataFetchError, GridMixError, NoFeasibleWindowError
from .models import DailyEnergyMix, GenerationInterval, OptimalChargingWindow

logger = logging.getLogger(__name__)

IntervalFetcher = Callable[[datetime, datetime], list[GenerationInterval]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EnergyMixService:
    """Computes the multi-day mix and the optimal charging window.

    Args:
        fetch_intervals: callable returning intervals for a (start, end) UTC range
        settings: runtime settings (clean sources, resolution, horizons)
        now: clock returning the current aware UTC datetime
    """

    def __init__(
        self,
        fetch_intervals: IntervalFetcher,
        settings: Settings | None = None,
        now: Callable[[], datetime] = utc_now,
    ):
        self.fetch_intervals = fetch_intervals
        self.settings = settings or Settings()
        self.classifier = CleanEnergyClassifier(self.settings.clean_sources)
        self.now = now

    def _fetch(self, start: datetime, end: datetime, purpose: str) -> list[GenerationInterval]:
        try:
            return self.fetch_intervals(start, end)
        except GridMixError:
            logger.error("Failed to fetch %s data", purpose)
            raise
        except Exception as e:
            logger.error("Failed to fetch %s data: %s", purpose, e)
            raise ExternalDataFetchError(f"Failed to fetch {purpose} data") from e

    def forecast_range(self) -> tuple[datetime, datetime]:
        """Today 00:01 UTC through the end of the last forecast day, UTC."""
        today = self.now().astimezone(timezone.utc).date()
        start = datetime.combine(today, time(0, 1), tzinfo=timezone.utc)
        last_day = today + timedelta(days=self.settings.forecast_days - 1)
        end = datetime.combine(last_day, time.max, tzinfo=timezone.utc)
        return start, end

    def get_three_days_energy_mix(self) -> list[DailyEnergyMix]:
        """Average generation mix for today and the following days, one record per date."""
        start, end = self.forecast_range()
        intervals = self._fetch(start, end, "multi-day energy mix")
        return aggregate_by_day(intervals, self.classifier)

    def get_optimal_charging_window(self, duration_hours: int) -> OptimalChargingWindow:
        """Find the cleanest `duration_hours` block within the lookahead horizon."""
        window_size = window_size_for(duration_hours, self.settings.intervals_per_hour)

        start = self.now().astimezone(timezone.utc)
        end = start + timedelta(hours=self.settings.horizon_hours)
        intervals = self._fetch(start, end, "optimal charging window")

        try:
            return find_optimal_window(intervals, window_size, self.classifier)
        except NoFeasibleWindowError as e:
            logger.warning("Optimization failed: %s", e)
            raise
