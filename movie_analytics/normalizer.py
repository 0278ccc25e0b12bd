"""
Field normalization module.
Turns raw catalog values into the clean forms used by every analysis:
free-text gross income becomes a Decimal, and two year sources collapse into
one canonical year. Anything missing or unparseable becomes None.
"""

import re  # strip non-numeric characters
from datetime import date  # publication dates
from decimal import Decimal, InvalidOperation  # exact monetary amounts
from typing import List, Optional

from loguru import logger  # console logging

from .models import Catalog, Movie, MovieRecord, RatingStat


class FieldNormalizer:
	"""
	Parses gross income and resolves the canonical release year.
	Stateless; one instance can be shared across threads.
	"""

	# Everything that is not a digit or a decimal point is noise ("$", ",", "INR", spaces)
	RE_NON_NUMERIC = re.compile(r"[^0-9.]")
	# Two fractional digits of precision for monetary amounts
	CENTS = Decimal("0.01")

	def parse_gross_income(self, raw) -> Optional[Decimal]:
		"""
		Parse a free-text gross income such as "$ 1,234.50" into Decimal("1234.50").
		Returns None for empty input or when the numeric residue is not a valid number.
		"""
		if raw is None:  # absent field
			return None
		digits = self.RE_NON_NUMERIC.sub("", str(raw))  # keep digits and '.'
		if not digits:  # nothing numeric left
			return None
		try:
			# quantize also fails for amounts beyond the context precision
			return Decimal(digits).quantize(self.CENTS)
		except InvalidOperation:
			# e.g. "1.2.3" or "." survive the strip but are not numbers
			logger.debug(f"[Normalizer] Unparseable gross income {raw!r} -> unknown")
			return None

	def resolve_year(self, date_published: Optional[date], year_field: Optional[int]) -> Optional[int]:
		"""Prefer the publication date's year, fall back to the year field, else None."""
		if date_published is not None:
			return date_published.year
		if year_field is not None:
			return int(year_field)
		return None

	def normalize(self, movie: Movie, rating: Optional[RatingStat] = None) -> MovieRecord:
		"""Build the normalized record for one movie, joining its rating stat when present."""
		return MovieRecord(
			movie_id=movie.id,
			title=movie.title,
			country=movie.country,
			language=movie.language,
			published_year=self.resolve_year(movie.date_published, movie.year),
			gross=self.parse_gross_income(movie.gross_income_raw),
			avg_rating=rating.avg_rating if rating else None,
			total_votes=rating.total_votes if rating else None,
		)

	def normalize_catalog(self, catalog: Catalog) -> List[MovieRecord]:
		"""Normalize every movie once, in movie-id order."""
		records = [
			self.normalize(catalog.movies[movie_id], catalog.ratings.get(movie_id))
			for movie_id in sorted(catalog.movies)
		]
		unknown_gross = sum(1 for r in records if r.gross is None)
		unknown_year = sum(1 for r in records if r.published_year is None)
		unrated = sum(1 for r in records if not r.is_rated)
		logger.info(
			f"[Normalizer] Normalized {len(records)} movies | unknown_gross={unknown_gross} "
			f"unknown_year={unknown_year} unrated={unrated}"
		)
		return records
