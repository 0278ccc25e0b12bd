"""
Configuration for the analytics engine.
Holds the default thresholds of every analysis and where the catalog lives.
Values can be overridden through MOVIE_ANALYTICS_* environment variables.
"""

import os  # environment-based settings
from dataclasses import dataclass, fields  # settings record and field introspection
from typing import Mapping, Optional

from loguru import logger  # console logging

from .errors import (
	ConfigurationError,
	require_choice,
	require_non_negative,
	require_positive_int,
)

ENV_PREFIX = "MOVIE_ANALYTICS_"

# Grouping options accepted by the summary and growth analyses
SUMMARY_GROUPINGS = ("country", "language", "country_language")
GROWTH_CATEGORIES = ("genre", "country")


@dataclass
class AnalyticsSettings:
	"""
	Default thresholds per analysis. Each vote floor is independent because the
	analyses apply different confidence levels (100, 200, 500, 1000 votes).
	"""
	data_dir: str = "data"  # directory holding the catalog JSONL files
	log_level: str = "INFO"  # loguru sink level for the CLI

	# Genre performance
	genre_min_votes: int = 1000
	genre_top_n: int = 5

	# Director insights
	director_min_votes: int = 500
	director_min_movies: int = 3
	director_min_avg_rating: float = 8.0

	# Actor popularity
	actor_min_votes: int = 500
	actor_min_rating: float = 7.5
	actor_limit: int = 50

	# Country & language
	summary_min_votes: int = 100
	summary_group_by: str = "country"
	top_gross_min_votes: int = 200
	top_gross_limit: int = 20

	# Revenue vs rating
	correlation_min_votes: int = 1000

	# Trends and growth
	trend_min_votes: int = 0
	growth_recent_span: int = 3
	growth_prior_span: int = 3
	growth_gap: int = 0
	growth_category: str = "genre"

	# Recommendations
	recommend_limit: int = 20

	def validate(self) -> 'AnalyticsSettings':
		"""Check every threshold; raise ConfigurationError on the first invalid one."""
		for name in ("genre_min_votes", "director_min_votes", "actor_min_votes", "summary_min_votes",
				"top_gross_min_votes", "correlation_min_votes", "trend_min_votes", "growth_gap",
				"director_min_avg_rating", "actor_min_rating"):
			require_non_negative(name, getattr(self, name))
		for name in ("genre_top_n", "director_min_movies", "actor_limit", "top_gross_limit",
				"growth_recent_span", "growth_prior_span", "recommend_limit"):
			require_positive_int(name, getattr(self, name))
		require_choice("summary_group_by", self.summary_group_by, SUMMARY_GROUPINGS)
		require_choice("growth_category", self.growth_category, GROWTH_CATEGORIES)
		_require_log_level(self.log_level)
		return self

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'AnalyticsSettings':
		"""
		Build settings from MOVIE_ANALYTICS_<FIELD> variables (e.g. MOVIE_ANALYTICS_DATA_DIR).
		Unset variables keep their defaults; malformed numbers raise ConfigurationError.
		"""
		environ = os.environ if environ is None else environ
		values = {}
		for f in fields(cls):
			raw = environ.get(ENV_PREFIX + f.name.upper())
			if raw is None or raw.strip() == "":
				continue
			values[f.name] = _coerce(f.name, raw.strip(), type(f.default))
		if values:
			logger.debug(f"[Config] Overrides from environment: {sorted(values)}")
		return cls(**values).validate()


def _require_log_level(level) -> None:
	"""Accept any level loguru knows (built-in or registered), case-insensitively."""
	if not isinstance(level, str):
		raise ConfigurationError(f"log_level must be a level name, got {level!r}")
	try:
		logger.level(level.upper())
	except ValueError:
		raise ConfigurationError(f"log_level must be a loguru level name, got {level!r}") from None


def _coerce(name: str, raw: str, target: type):
	if target is str:
		return raw
	try:
		return target(raw)
	except ValueError:
		raise ConfigurationError(f"{ENV_PREFIX}{name.upper()} must be a {target.__name__}, got {raw!r}") from None
