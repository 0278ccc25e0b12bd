"""
Errors raised to callers of the analytics engine.

Missing or unparseable data never raises; it resolves to None and is excluded
from aggregates. Only caller misuse (invalid thresholds) surfaces as an error.
"""

from numbers import Real
from typing import Iterable


class ConfigurationError(ValueError):
	"""Raised when a caller supplies an invalid threshold or option."""


def require_non_negative(name: str, value) -> None:
	"""Vote floors, rating cutoffs and gaps may be zero but never negative."""
	if isinstance(value, bool) or not isinstance(value, Real):
		raise ConfigurationError(f"{name} must be a number, got {value!r}")
	if value < 0:
		raise ConfigurationError(f"{name} must be >= 0, got {value}")


def require_positive_int(name: str, value) -> None:
	"""Limits and window spans must be whole numbers of at least 1."""
	if isinstance(value, bool) or not isinstance(value, int):
		raise ConfigurationError(f"{name} must be an integer, got {value!r}")
	if value < 1:
		raise ConfigurationError(f"{name} must be >= 1, got {value}")


def require_choice(name: str, value, choices: Iterable[str]) -> None:
	choices = tuple(choices)
	if value not in choices:
		raise ConfigurationError(f"{name} must be one of {choices}, got {value!r}")
