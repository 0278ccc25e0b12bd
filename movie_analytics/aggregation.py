"""
Aggregation module.
Groups normalized movie records by a key (genre, country, director, ...) and
produces ranked groups, gross/rating summaries and per-group rating profiles.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from loguru import logger

from .errors import require_non_negative, require_positive_int
from .models import GroupProfile, GroupSummary, MovieRecord, RankedMovie

# A record may belong to several groups (e.g. one per genre)
GroupKeys = Callable[[MovieRecord], Iterable[Hashable]]
GroupKey = Callable[[MovieRecord], Hashable]

CENTS = Decimal("0.01")


def sort_token(key) -> Tuple:
	"""
	Comparable form of a group key so None and tuple keys sort deterministically.
	None sorts after every real value.
	"""
	if isinstance(key, tuple):
		return tuple(sort_token(part) for part in key)
	if key is None:
		return (1, "")
	return (0, str(key))


def rank_order(record: MovieRecord) -> Tuple:
	"""Rating desc, then votes desc, then movie id for a repeatable order on full ties."""
	return (-record.avg_rating, -record.total_votes, record.movie_id)


class AggregationEngine:
	"""
	Grouped statistics over MovieRecords.
	Every operation applies the vote-confidence gate first: records without a
	rating, or with fewer than min_votes votes, are left out entirely.
	"""

	def passes_vote_gate(self, record: MovieRecord, min_votes: int) -> bool:
		return record.is_rated and record.total_votes >= min_votes

	def gated(self, records: Iterable[MovieRecord], min_votes: int) -> List[MovieRecord]:
		require_non_negative("min_votes", min_votes)
		kept = [r for r in records if self.passes_vote_gate(r, min_votes)]
		logger.debug(f"[Aggregation] Vote gate >= {min_votes}: kept {len(kept)} records")
		return kept

	def group_and_rank(
		self,
		records: Iterable[MovieRecord],
		group_keys: GroupKeys,
		min_votes: int,
		top_n: Optional[int] = None,
	) -> Dict[Hashable, List[RankedMovie]]:
		"""
		Rank records within each group by rating desc, votes desc, movie id.
		Groups come back in ascending key order; each is cut to top_n when given.
		"""
		if top_n is not None:
			require_positive_int("top_n", top_n)

		groups: Dict[Hashable, Dict[str, MovieRecord]] = {}
		for record in self.gated(records, min_votes):
			for key in group_keys(record):
				groups.setdefault(key, {})[record.movie_id] = record

		ranked: Dict[Hashable, List[RankedMovie]] = {}
		for key in sorted(groups, key=sort_token):
			members = sorted(groups[key].values(), key=rank_order)
			if top_n is not None:
				members = members[:top_n]
			ranked[key] = [
				RankedMovie(
					rank=position,
					movie_id=r.movie_id,
					title=r.title,
					published_year=r.published_year,
					avg_rating=r.avg_rating,
					total_votes=r.total_votes,
				)
				for position, r in enumerate(members, 1)
			]
		logger.info(f"[Aggregation] Ranked {len(ranked)} groups (top_n={top_n})")
		return ranked

	def summarize(
		self,
		records: Iterable[MovieRecord],
		group_key: GroupKey,
		min_votes: int,
	) -> Dict[Hashable, GroupSummary]:
		"""
		Per-group movie count, average rating, and gross sum/average.
		Count and rating use every gated record; the gross figures use only
		records whose gross is known, and stay None when none is.
		"""
		buckets: Dict[Hashable, List[MovieRecord]] = {}
		for record in self.gated(records, min_votes):
			buckets.setdefault(group_key(record), []).append(record)

		summaries = []
		for key, members in buckets.items():
			known = [r.gross for r in members if r.gross is not None]
			sum_gross = sum(known, Decimal(0)).quantize(CENTS) if known else None
			avg_gross = (sum_gross / len(known)).quantize(CENTS, rounding=ROUND_HALF_UP) if known else None
			summaries.append(GroupSummary(
				key=key,
				movie_count=len(members),
				avg_rating=sum(r.avg_rating for r in members) / len(members),
				sum_gross=sum_gross,
				avg_gross=avg_gross,
				gross_count=len(known),
			))

		summaries.sort(key=lambda s: (-s.movie_count, -s.avg_rating, sort_token(s.key)))
		logger.info(f"[Aggregation] Summarized {len(summaries)} groups")
		return {s.key: s for s in summaries}

	def profile_groups(
		self,
		records: Iterable[MovieRecord],
		group_keys: GroupKeys,
		min_votes: int,
		min_rating: Optional[float] = None,
	) -> Dict[Hashable, GroupProfile]:
		"""
		Distinct-movie count and average/min/max rating per group.
		min_rating, when given, keeps only records rated strictly above it.
		"""
		if min_rating is not None:
			require_non_negative("min_rating", min_rating)

		ratings: Dict[Hashable, Dict[str, float]] = {}
		for record in self.gated(records, min_votes):
			if min_rating is not None and not record.avg_rating > min_rating:
				continue
			for key in group_keys(record):
				ratings.setdefault(key, {})[record.movie_id] = record.avg_rating

		profiles = {}
		for key in sorted(ratings, key=sort_token):
			values = list(ratings[key].values())
			profiles[key] = GroupProfile(
				key=key,
				movie_count=len(values),
				avg_rating=sum(values) / len(values),
				min_rating=min(values),
				max_rating=max(values),
			)
		return profiles

	def consistent_performers(
		self,
		profiles: Dict[Hashable, GroupProfile],
		min_movies: int,
		min_avg_rating: float,
	) -> List[GroupProfile]:
		"""
		Keep groups with at least min_movies movies AND an average strictly above
		min_avg_rating; order by average desc, movie count desc, key.
		"""
		require_positive_int("min_movies", min_movies)
		require_non_negative("min_avg_rating", min_avg_rating)
		kept = [
			p for p in profiles.values()
			if p.movie_count >= min_movies and p.avg_rating > min_avg_rating
		]
		kept.sort(key=lambda p: (-p.avg_rating, -p.movie_count, sort_token(p.key)))
		logger.debug(f"[Aggregation] {len(kept)} of {len(profiles)} groups meet count>={min_movies}, avg>{min_avg_rating}")
		return kept
