"""Carbon Intensity API collector.

Fetches half-hourly generation mix data for Great Britain from the National
Grid ESO Carbon Intensity API (https://carbonintensity.org.uk/).
"""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import ExternalDataFetchError
from ..models import GenerationInterval, GenerationMix

logger = logging.getLogger(__name__)

# The API accepts and returns minute-resolution ISO 8601 timestamps in UTC
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%MZ"


def format_timestamp(dt: datetime) -> str:
    """Format a datetime for the API path, treating naive values as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse an API timestamp such as 2026-01-29T10:00Z into an aware UTC datetime."""
    timestamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def parse_interval(entry: dict[str, Any]) -> GenerationInterval:
    """Convert one `data` entry from the API into a GenerationInterval.

    A null or missing `generationmix` becomes an empty mix.
    """
    mix = [
        GenerationMix(fuel=str(item["fuel"]), percentage=float(item["perc"]))
        for item in entry.get("generationmix") or []
    ]
    return GenerationInterval(
        start=parse_timestamp(entry["from"]),
        end=parse_timestamp(entry["to"]),
        generation_mix=tuple(mix),
    )


def parse_generation_response(payload: Any) -> list[GenerationInterval]:
    """Parse a /generation response body, sorted by interval start."""
    if not isinstance(payload, dict):
        raise ExternalDataFetchError(f"Unexpected response from Carbon Intensity API: {payload!r}")

    data = payload.get("data")
    if data is None:
        raise ExternalDataFetchError("Carbon Intensity API response has no 'data' field")
    # A single-interval request returns an object rather than a list
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ExternalDataFetchError(f"Unexpected 'data' in Carbon Intensity API response: {data!r}")

    try:
        intervals = [parse_interval(entry) for entry in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ExternalDataFetchError(f"Malformed generation data from Carbon Intensity API: {e}") from e

    intervals.sort(key=lambda interval: interval.start)
    return intervals


class CarbonIntensityClient:
    """Interval source backed by the Carbon Intensity API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        defaults = Settings()
        self.base_url = (base_url or defaults.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else defaults.timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CarbonIntensityClient":
        return cls(base_url=settings.api_base_url, timeout=settings.timeout)

    def generation_url(self, start: datetime, end: datetime) -> str:
        return f"{self.base_url}/generation/{format_timestamp(start)}/{format_timestamp(end)}"

    def fetch_intervals(self, start: datetime, end: datetime) -> list[GenerationInterval]:
        """Fetch generation mix intervals between two UTC datetimes.

        Raises:
            ExternalDataFetchError: on network errors, non-2xx responses or
                a response body that can't be parsed.
        """
        url = self.generation_url(start, end)
        logger.info("Fetching generation mix %s -> %s", format_timestamp(start), format_timestamp(end))

        try:
            with httpx.Client(transport=self.transport) as client:
                response = client.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise ExternalDataFetchError(
                f"HTTP error from Carbon Intensity API: {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalDataFetchError(f"Network error connecting to Carbon Intensity API: {e}") from e
        except ValueError as e:
            raise ExternalDataFetchError(f"Invalid JSON from Carbon Intensity API: {e}") from e

        intervals = parse_generation_response(payload)
        logger.debug("Received %d intervals", len(intervals))
        return intervals
