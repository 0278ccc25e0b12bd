"""
Analytics facade.
Normalizes a catalog snapshot once and exposes every analysis (genre rankings,
director and actor insights, country summaries, correlation, trends, growth
and recommendations) with caller-supplied thresholds.
"""

from typing import Dict, List, Optional

from loguru import logger

from .aggregation import AggregationEngine, sort_token
from .config import GROWTH_CATEGORIES, SUMMARY_GROUPINGS, AnalyticsSettings
from .correlation import CorrelationCalculator
from .errors import require_choice, require_positive_int
from .models import (
	ActorPopularity,
	Catalog,
	CorrelationResult,
	DirectorInsight,
	GroupSummary,
	GrowthSignal,
	RankedMovie,
	Recommendation,
	YearTrend,
)
from .normalizer import FieldNormalizer
from .recommender import RecommendationScorer, is_cast_role
from .trends import TrendAnalyzer


class MovieAnalytics:
	"""
	High-level API over one immutable catalog snapshot.
	Every threshold is a method argument; None means "use the settings default".
	Methods keep no state between calls, so they can run concurrently.
	"""

	def __init__(self, catalog: Catalog, settings: Optional[AnalyticsSettings] = None):
		self.catalog = catalog  # keep snapshot reference
		self.settings = (settings or AnalyticsSettings()).validate()
		self.normalizer = FieldNormalizer()
		self.aggregation = AggregationEngine()
		self.correlation = CorrelationCalculator()
		self.trends = TrendAnalyzer()

		# Normalize once; every analysis reads these records
		self.records = self.normalizer.normalize_catalog(catalog)

		# Precompute the association indexes used as group keys
		self._genres = catalog.genres_by_movie()
		self._directors = catalog.directors_by_movie()
		cast: Dict[str, set] = {}
		for role in catalog.roles:
			if is_cast_role(role.category):  # whitelisted categories only
				cast.setdefault(role.movie_id, set()).add(role.person_id)
		self._cast = {movie_id: sorted(people) for movie_id, people in cast.items()}

		self.recommender = RecommendationScorer.from_catalog(catalog)
		logger.info(f"[Analytics] Ready with {len(self.records)} movies")

	def top_rated_by_genre(self, min_votes: Optional[int] = None, per_genre: Optional[int] = None) -> Dict[str, List[RankedMovie]]:
		"""Top movies per genre by rating (votes, then id, break ties)."""
		min_votes = self._default(min_votes, 'genre_min_votes')
		per_genre = self._default(per_genre, 'genre_top_n')
		return self.aggregation.group_and_rank(
			self.records, lambda r: self._genres.get(r.movie_id, ()), min_votes, top_n=per_genre,
		)

	def top_directors(
		self,
		min_votes: Optional[int] = None,
		min_movies: Optional[int] = None,
		min_avg_rating: Optional[float] = None,
	) -> List[DirectorInsight]:
		"""Directors with at least min_movies movies and an average above min_avg_rating."""
		min_votes = self._default(min_votes, 'director_min_votes')
		min_movies = self._default(min_movies, 'director_min_movies')
		min_avg_rating = self._default(min_avg_rating, 'director_min_avg_rating')

		profiles = self.aggregation.profile_groups(self.records, lambda r: self._directors.get(r.movie_id, ()), min_votes)
		return [
			DirectorInsight(
				director_id=p.key,
				director_name=self.catalog.person_name(p.key),
				movie_count=p.movie_count,
				avg_rating=p.avg_rating,
				min_rating=p.min_rating,
				max_rating=p.max_rating,
			)
			for p in self.aggregation.consistent_performers(profiles, min_movies, min_avg_rating)
		]

	def top_actors(
		self,
		min_votes: Optional[int] = None,
		min_rating: Optional[float] = None,
		limit: Optional[int] = None,
	) -> List[ActorPopularity]:
		"""Cast members appearing most often in movies rated above min_rating."""
		min_votes = self._default(min_votes, 'actor_min_votes')
		min_rating = self._default(min_rating, 'actor_min_rating')
		limit = self._default(limit, 'actor_limit')
		require_positive_int("limit", limit)

		profiles = self.aggregation.profile_groups(
			self.records, lambda r: self._cast.get(r.movie_id, ()), min_votes, min_rating=min_rating,
		)
		ordered = sorted(profiles.values(), key=lambda p: (-p.movie_count, -p.avg_rating, sort_token(p.key)))
		return [
			ActorPopularity(
				actor_id=p.key,
				actor_name=self.catalog.person_name(p.key),
				movie_count=p.movie_count,
				avg_rating=p.avg_rating,
			)
			for p in ordered[:limit]
		]

	def country_language_summary(self, min_votes: Optional[int] = None, group_by: Optional[str] = None) -> Dict[object, GroupSummary]:
		"""
		Production volume, average rating and gross per country, language, or
		(country, language) pair. Ordered by movie count desc, average rating desc.
		"""
		min_votes = self._default(min_votes, 'summary_min_votes')
		group_by = self._default(group_by, 'summary_group_by')
		require_choice("group_by", group_by, SUMMARY_GROUPINGS)
		return self.aggregation.summarize(self.records, self._summary_key(group_by), min_votes)

	def top_countries_by_gross(self, min_votes: Optional[int] = None, limit: Optional[int] = None) -> List[GroupSummary]:
		"""Countries ordered by average gross per movie (unknown gross last)."""
		min_votes = self._default(min_votes, 'top_gross_min_votes')
		limit = self._default(limit, 'top_gross_limit')
		require_positive_int("limit", limit)
		summaries = self.aggregation.summarize(self.records, self._summary_key('country'), min_votes).values()
		ordered = sorted(summaries, key=lambda s: (s.avg_gross is None, -(s.avg_gross or 0), sort_token(s.key)))
		return ordered[:limit]

	def revenue_rating_correlation(self, min_votes: Optional[int] = None) -> CorrelationResult:
		"""Pearson correlation between gross income and average rating."""
		min_votes = self._default(min_votes, 'correlation_min_votes')
		pairs = [(r.gross, r.avg_rating) for r in self.aggregation.gated(self.records, min_votes)]
		return self.correlation.correlate(pairs)

	def yearly_trend(self, min_votes: Optional[int] = None) -> List[YearTrend]:
		return self.trends.yearly_trend(self.records, self._default(min_votes, 'trend_min_votes'))

	def growth_signal(
		self,
		recent_span: Optional[int] = None,
		prior_span: Optional[int] = None,
		gap: Optional[int] = None,
		category: Optional[str] = None,
	) -> Dict[str, GrowthSignal]:
		"""Recent-vs-prior window growth per genre (or per country)."""
		category = self._default(category, 'growth_category')
		require_choice("category", category, GROWTH_CATEGORIES)
		if category == 'genre':
			categories = lambda r: self._genres.get(r.movie_id, ())
		else:
			categories = lambda r: (r.country,) if r.country else ()
		return self.trends.growth_signal(
			self.records,
			categories,
			recent_span=self._default(recent_span, 'growth_recent_span'),
			prior_span=self._default(prior_span, 'growth_prior_span'),
			gap=self._default(gap, 'growth_gap'),
		)

	def recommend(self, target_movie_id: str, limit: Optional[int] = None) -> List[Recommendation]:
		return self.recommender.recommend(target_movie_id, limit=self._default(limit, 'recommend_limit'))

	def _default(self, value, setting: str):
		return getattr(self.settings, setting) if value is None else value

	@staticmethod
	def _summary_key(group_by: str):
		if group_by == 'country':
			return lambda r: r.country
		if group_by == 'language':
			return lambda r: r.language
		return lambda r: (r.country, r.language)
