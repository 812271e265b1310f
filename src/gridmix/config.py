"""Settings loading from YAML config and environment variables."""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_API_BASE_URL = "https://api.carbonintensity.org.uk"
DEFAULT_CLEAN_SOURCES = frozenset({"biomass", "nuclear", "hydro", "wind", "solar"})
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "gridmix.yaml"

# The Carbon Intensity API reports half-hourly intervals
DEFAULT_INTERVALS_PER_HOUR = 2


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the service and collector."""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 30.0
    clean_sources: frozenset[str] = field(default=DEFAULT_CLEAN_SOURCES)
    intervals_per_hour: int = DEFAULT_INTERVALS_PER_HOUR
    horizon_hours: int = 48
    forecast_days: int = 3


def _positive_int(name: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if number < 1 or number != float(value):
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return number


def _parse_sources(value) -> frozenset[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigError(f"clean_sources must be a list of fuel names, got {value!r}")
    sources = frozenset(str(s).strip() for s in value if str(s).strip())
    if not sources:
        raise ConfigError("clean_sources must name at least one fuel")
    return sources


def _from_mapping(settings: Settings, data: dict) -> Settings:
    """Apply known keys from a config mapping onto settings."""
    changes = {}
    if "api_base_url" in data:
        changes["api_base_url"] = str(data["api_base_url"]).rstrip("/")
    if "timeout" in data:
        try:
            changes["timeout"] = float(data["timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"timeout must be a number, got {data['timeout']!r}") from e
        if changes["timeout"] <= 0:
            raise ConfigError("timeout must be greater than zero")
    if "clean_sources" in data:
        changes["clean_sources"] = _parse_sources(data["clean_sources"])
    for key in ("intervals_per_hour", "horizon_hours", "forecast_days"):
        if key in data:
            changes[key] = _positive_int(key, data[key])
    return replace(settings, **changes)


def load_settings_from_yaml(config_path: Path) -> Settings:
    """Load settings from a YAML config file."""
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    return _from_mapping(Settings(), data.get("gridmix", data))


def get_config_path() -> Path | None:
    """Get the config file path from GRIDMIX_CONFIG, or the repo default if present."""
    env_path = os.environ.get("GRIDMIX_CONFIG")
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from YAML (if any), then apply environment overrides.

    Environment variables:
        GRIDMIX_API_URL: Carbon Intensity API base URL
        GRIDMIX_TIMEOUT: HTTP timeout in seconds
        GRIDMIX_CLEAN_SOURCES: comma-separated clean fuel names
        GRIDMIX_INTERVALS_PER_HOUR: provider resolution
    """
    load_dotenv()

    path = config_path or get_config_path()
    settings = load_settings_from_yaml(path) if path else Settings()

    env = {
        "api_base_url": os.environ.get("GRIDMIX_API_URL"),
        "timeout": os.environ.get("GRIDMIX_TIMEOUT"),
        "clean_sources": os.environ.get("GRIDMIX_CLEAN_SOURCES"),
        "intervals_per_hour": os.environ.get("GRIDMIX_INTERVALS_PER_HOUR"),
    }
    return _from_mapping(settings, {k: v for k, v in env.items() if v})
