"""
Recommendation module.
Scores movies by weighted overlap with a target movie: shared directors,
shared cast and shared genres each contribute a fixed weight, and a candidate
matching several signals accumulates all of them.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from loguru import logger

from .errors import require_positive_int
from .models import Catalog, Recommendation

# Role categories that count as cast
CAST_CATEGORIES = frozenset({'actor', 'actress', 'cast', 'performer'})

DIRECTOR_WEIGHT = 3
CAST_WEIGHT = 2
GENRE_WEIGHT = 1


def is_cast_role(category: Optional[str], allow_unknown: bool = False) -> bool:
	"""Whitelisted category check; allow_unknown lets a role without a category through."""
	if category is None:
		return allow_unknown
	return category.strip().lower() in CAST_CATEGORIES


@dataclass
class SignalSource:
	"""
	One kind of similarity evidence: a name, a weight, and the features each
	movie carries (e.g. its director ids). Two movies match on this signal when
	they share at least one feature.

	target_features, when given, replaces features on the target side only:
	the cast signal picks the target's actors from cast roles but matches
	candidates on any role those people hold.
	"""
	name: str
	weight: int
	features: Dict[str, Set[str]] = field(default_factory=dict)  # movie_id -> features
	target_features: Optional[Dict[str, Set[str]]] = None  # movie_id -> features used when it is the target
	_index: Dict[str, Set[str]] = field(default_factory=dict, init=False, repr=False)  # feature -> movie_ids

	def __post_init__(self):
		for movie_id, feats in self.features.items():
			for feat in feats:
				self._index.setdefault(feat, set()).add(movie_id)

	@classmethod
	def from_pairs(
		cls,
		name: str,
		weight: int,
		pairs: Iterable[Tuple[str, str]],
		target_pairs: Optional[Iterable[Tuple[str, str]]] = None,
	) -> 'SignalSource':
		return cls(
			name=name,
			weight=weight,
			features=_group_pairs(pairs),
			target_features=_group_pairs(target_pairs) if target_pairs is not None else None,
		)

	def candidates(self, target_id: str) -> Set[str]:
		"""Movies sharing at least one feature with the target, excluding the target."""
		source = self.features if self.target_features is None else self.target_features
		matched: Set[str] = set()
		for feat in source.get(target_id, ()):
			matched.update(self._index.get(feat, ()))
		matched.discard(target_id)
		return matched


def _group_pairs(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Set[str]]:
	grouped: Dict[str, Set[str]] = {}
	for movie_id, feat in pairs:
		grouped.setdefault(movie_id, set()).add(feat)
	return grouped


class RecommendationScorer:
	"""
	Merges any number of weighted signal sources into one ranked list.
	New kinds of evidence (e.g. shared writers) plug in as extra SignalSources.
	"""

	def __init__(self, catalog: Catalog, sources: List[SignalSource]):
		self.catalog = catalog
		self.sources = sources
		logger.debug(
			"[Recommender] Signals: " + ", ".join(f"{s.name}(w={s.weight}, movies={len(s.features)})" for s in sources)
		)

	@classmethod
	def from_catalog(cls, catalog: Catalog) -> 'RecommendationScorer':
		"""Default scorer: director (3), cast (2) and genre (1) signals."""
		return cls(catalog, [
			SignalSource.from_pairs('director', DIRECTOR_WEIGHT, ((d.movie_id, d.person_id) for d in catalog.directors)),
			SignalSource.from_pairs(
				'cast', CAST_WEIGHT,
				((r.movie_id, r.person_id) for r in catalog.roles),  # candidates match on any role
				target_pairs=((r.movie_id, r.person_id) for r in catalog.roles if is_cast_role(r.category, allow_unknown=True)),
			),
			SignalSource.from_pairs('genre', GENRE_WEIGHT, ((g.movie_id, g.genre) for g in catalog.genres)),
		])

	def score(self, target_id: str) -> Dict[str, Tuple[int, List[str]]]:
		"""Weighted multiset union: candidate -> (summed weight, matched signal names)."""
		merged: Dict[str, Tuple[int, List[str]]] = {}
		for source in self.sources:
			for candidate in source.candidates(target_id):
				total, names = merged.get(candidate, (0, []))
				merged[candidate] = (total + source.weight, names + [source.name])
		return merged

	def recommend(self, target_id: str, limit: int = 20) -> List[Recommendation]:
		"""
		Rank candidates by score desc, rating desc, votes desc (unknown ratings last),
		then movie id. An unknown target yields an empty list.
		"""
		require_positive_int("limit", limit)
		if target_id not in self.catalog.movies:
			logger.info(f"[Recommender] Unknown target '{target_id}'; no recommendations")
			return []

		results: List[Recommendation] = []
		for movie_id, (score, names) in self.score(target_id).items():
			movie = self.catalog.movies.get(movie_id)
			if movie is None:  # linked id without a movie row
				continue
			rating = self.catalog.ratings.get(movie_id)  # outer join: may be absent
			results.append(Recommendation(
				movie_id=movie_id,
				title=movie.title,
				score=score,
				avg_rating=rating.avg_rating if rating else None,
				total_votes=rating.total_votes if rating else None,
				signals=tuple(names),
			))

		results.sort(key=self._order)
		logger.info(f"[Recommender] Target '{target_id}': {len(results)} candidates, returning {min(limit, len(results))}")
		return results[:limit]

	@staticmethod
	def _order(rec: Recommendation):
		return (
			-rec.score,
			rec.avg_rating is None, -(rec.avg_rating or 0.0),
			rec.total_votes is None, -(rec.total_votes or 0),
			rec.movie_id,
		)
