"""
Trend analysis module.
Yearly release statistics and recent-vs-prior growth signals per category.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from .aggregation import CENTS
from .errors import require_non_negative, require_positive_int
from .models import GrowthSignal, MovieRecord, YearTrend

Window = Tuple[int, int]  # inclusive (start, end) years


class TrendAnalyzer:
	"""
	Year-keyed analyses over normalized records. Records without a canonical
	year are left out; missing years are not gap-filled.
	"""

	def yearly_trend(self, records: Iterable[MovieRecord], min_votes: int = 0) -> List[YearTrend]:
		"""Movie count, average rating and known-gross sum per canonical year, ascending."""
		require_non_negative("min_votes", min_votes)
		by_year: Dict[int, List[MovieRecord]] = {}
		for r in records:
			if r.published_year is None or not r.is_rated or r.total_votes < min_votes:
				continue
			by_year.setdefault(r.published_year, []).append(r)

		trend = []
		for year in sorted(by_year):
			members = by_year[year]
			known = [r.gross for r in members if r.gross is not None]
			trend.append(YearTrend(
				year=year,
				movie_count=len(members),
				avg_rating=sum(r.avg_rating for r in members) / len(members),
				sum_gross=sum(known, Decimal(0)).quantize(CENTS) if known else None,
			))
		logger.info(f"[Trends] Yearly trend covers {len(trend)} years")
		return trend

	def growth_windows(self, max_year: int, recent_span: int = 3, prior_span: int = 3, gap: int = 0) -> Tuple[Window, Window]:
		"""
		Recent window ends at max_year; the prior window ends gap years before the
		recent one starts. Defaults give [max-2, max] and [max-5, max-3].
		"""
		require_positive_int("recent_span", recent_span)
		require_positive_int("prior_span", prior_span)
		require_non_negative("gap", gap)
		recent_start = max_year - recent_span + 1
		prior_end = recent_start - gap - 1
		return (recent_start, max_year), (prior_end - prior_span + 1, prior_end)

	def growth_signal(
		self,
		records: Iterable[MovieRecord],
		categories: Callable[[MovieRecord], Iterable[str]],
		recent_span: int = 3,
		prior_span: int = 3,
		gap: int = 0,
	) -> Dict[str, GrowthSignal]:
		"""
		Compare per-category movie counts between the recent and prior windows.
		max_year is the latest canonical year in the whole dataset, not per category.
		Ordered by delta desc, then category.
		"""
		dated = [r for r in records if r.published_year is not None]
		if not dated:
			# still reject bad spans on an empty dataset
			self.growth_windows(0, recent_span, prior_span, gap)
			logger.info("[Trends] No dated records; growth signal is empty")
			return {}

		max_year = max(r.published_year for r in dated)
		recent, prior = self.growth_windows(max_year, recent_span, prior_span, gap)
		logger.info(f"[Trends] Growth windows | recent={recent} prior={prior}")

		counts: Dict[str, List[int]] = {}  # category -> [recent, prior]
		for r in dated:
			for category in set(categories(r)):
				bucket = counts.setdefault(category, [0, 0])
				if recent[0] <= r.published_year <= recent[1]:
					bucket[0] += 1
				elif prior[0] <= r.published_year <= prior[1]:
					bucket[1] += 1

		signals = [
			GrowthSignal(
				category=category,
				recent_count=recent_count,
				prior_count=prior_count,
				delta=recent_count - prior_count,
				pct_change=self._pct_change(recent_count, prior_count),
				recent_window=recent,
				prior_window=prior,
			)
			for category, (recent_count, prior_count) in counts.items()
		]
		signals.sort(key=lambda s: (-s.delta, s.category))
		return {s.category: s for s in signals}

	def _pct_change(self, recent_count: int, prior_count: int) -> Optional[float]:
		if prior_count == 0:  # no baseline: growth is undefined rather than infinite
			return None
		pct = Decimal(recent_count - prior_count) * 100 / Decimal(prior_count)
		return float(pct.quantize(CENTS, rounding=ROUND_HALF_UP))
