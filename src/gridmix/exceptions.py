"""Exceptions raised by gridmix."""


class GridMixError(Exception):
    """Base exception for gridmix errors."""
    pass


class ExternalDataFetchError(GridMixError):
    """The generation data provider could not be reached or returned bad data."""
    pass


class NoFeasibleWindowError(GridMixError):
    """Not enough intervals are available to fill the requested window."""
    pass


class InvalidDurationError(GridMixError, ValueError):
    """The requested charging duration is not a positive whole number of hours."""
    pass


class ConfigError(GridMixError, ValueError):
    """A configuration value is missing or malformed."""
    pass
