"""Data models for generation-mix intervals and derived results."""

from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class GenerationMix:
    """Share of generation from a single fuel type."""

    fuel: str
    percentage: float


@dataclass(frozen=True)
class GenerationInterval:
    """A fixed-length slice of generation data (30 minutes from the GB grid)."""

    start: datetime
    end: datetime
    generation_mix: tuple[GenerationMix, ...] = ()


@dataclass(frozen=True)
class DailyEnergyMix:
    """Average generation mix for one UTC calendar date."""

    date: date
    average_percentages: Mapping[str, float] = field(hash=False)
    clean_energy_percentage: float = 0.0

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "average_percentages", MappingProxyType(dict(self.average_percentages)))

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "averagePercentages": dict(self.average_percentages),
            "cleanEnergyPercentage": self.clean_energy_percentage,
        }


@dataclass(frozen=True)
class OptimalChargingWindow:
    """The best contiguous run of intervals for charging."""

    start: datetime
    end: datetime
    average_clean_percentage: float

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "averageCleanPercentage": self.average_clean_percentage,
        }
