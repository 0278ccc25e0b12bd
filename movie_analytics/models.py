"""
Data models for the Movie Analytics engine.
Defines the source entities (as read from the catalog) and the result records
produced by each analysis. Unknown values are represented as None.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Date type for the publication date of a movie
from datetime import date  # calendar date
# Decimal keeps monetary amounts exact (no float rounding on sums)
from decimal import Decimal  # fixed-point amounts
# Import typing helpers for precise and self-documenting types
from typing import Dict, List, Optional, Tuple  # collection and optional types


@dataclass(frozen=True)
class Movie:
	"""
	A single movie exactly as provided by the catalog.
	Release year and gross income are kept raw; see normalizer for the cleaned forms.
	"""
	id: str  # unique identifier of the movie (e.g., "tt0111161")
	title: str  # display title
	country: Optional[str] = None  # production country (may list several, kept as given)
	language: Optional[str] = None  # spoken language(s), kept as given
	year: Optional[int] = None  # explicit year field (may be stale)
	date_published: Optional[date] = None  # publication date, finer-grained than year
	gross_income_raw: Optional[str] = None  # free-text worldwide gross (e.g., "$ 1,234,567")


@dataclass(frozen=True)
class GenreTag:
	movie_id: str  # movie the tag belongs to
	genre: str  # genre name as stored (e.g., "Drama")


@dataclass(frozen=True)
class DirectorLink:
	movie_id: str  # directed movie
	person_id: str  # director's person id


@dataclass(frozen=True)
class RoleLink:
	movie_id: str  # movie the role belongs to
	person_id: str  # person holding the role
	category: Optional[str] = None  # role category (e.g., "actor", "actress", "producer")


@dataclass(frozen=True)
class Person:
	id: str  # person identifier shared by directors and cast
	name: str  # display name


@dataclass(frozen=True)
class RatingStat:
	movie_id: str  # rated movie
	avg_rating: float  # average rating on a 0-10 scale
	total_votes: int  # number of votes, used as a confidence gate
	median_rating: Optional[float] = None  # optional median rating from the source


@dataclass(frozen=True)
class MovieRecord:
	"""
	A movie after normalization: canonical year, parsed gross and joined rating.
	This is the single row shape consumed by every aggregation.
	"""
	movie_id: str
	title: str
	country: Optional[str]
	language: Optional[str]
	published_year: Optional[int]  # date year, else year field, else None
	gross: Optional[Decimal]  # None means unknown, never zero
	avg_rating: Optional[float] = None  # None when the movie has no rating stat
	total_votes: Optional[int] = None  # None when the movie has no rating stat

	@property
	def is_rated(self) -> bool:
		return self.avg_rating is not None and self.total_votes is not None


@dataclass
class Catalog:
	"""
	In-memory snapshot of the six source collections.
	Built once by the loader (or directly in tests) and never mutated afterwards.
	"""
	movies: Dict[str, Movie] = field(default_factory=dict)  # movie_id -> Movie
	genres: List[GenreTag] = field(default_factory=list)  # movie/genre pairs
	directors: List[DirectorLink] = field(default_factory=list)  # movie/director pairs
	roles: List[RoleLink] = field(default_factory=list)  # movie/person/category rows
	people: Dict[str, Person] = field(default_factory=dict)  # person_id -> Person
	ratings: Dict[str, RatingStat] = field(default_factory=dict)  # movie_id -> RatingStat

	@classmethod
	def from_collections(
		cls,
		movies: List[Movie],
		genres: Optional[List[GenreTag]] = None,
		directors: Optional[List[DirectorLink]] = None,
		roles: Optional[List[RoleLink]] = None,
		people: Optional[List[Person]] = None,
		ratings: Optional[List[RatingStat]] = None,
	) -> 'Catalog':
		"""Build a catalog from plain lists, indexing movies, people and ratings by id."""
		return cls(
			movies={m.id: m for m in movies},
			genres=list(genres or []),
			directors=list(directors or []),
			roles=list(roles or []),
			people={p.id: p for p in (people or [])},
			ratings={r.movie_id: r for r in (ratings or [])},
		)

	def genres_by_movie(self) -> Dict[str, List[str]]:
		"""Return movie_id -> sorted list of distinct genres."""
		index: Dict[str, set] = {}
		for tag in self.genres:
			index.setdefault(tag.movie_id, set()).add(tag.genre)
		return {movie_id: sorted(genres) for movie_id, genres in index.items()}

	def directors_by_movie(self) -> Dict[str, List[str]]:
		"""Return movie_id -> sorted list of distinct director person ids."""
		index: Dict[str, set] = {}
		for link in self.directors:
			index.setdefault(link.movie_id, set()).add(link.person_id)
		return {movie_id: sorted(people) for movie_id, people in index.items()}

	def person_name(self, person_id: str) -> Optional[str]:
		person = self.people.get(person_id)
		return person.name if person else None


@dataclass(frozen=True)
class RankedMovie:
	rank: int  # 1-based position within its group
	movie_id: str
	title: str
	published_year: Optional[int]
	avg_rating: float
	total_votes: int


@dataclass(frozen=True)
class GroupProfile:
	key: str  # group key (e.g., a director's person id)
	movie_count: int  # distinct movies in the group
	avg_rating: float
	min_rating: float
	max_rating: float


@dataclass(frozen=True)
class DirectorInsight:
	director_id: str
	director_name: Optional[str]  # None when the person is missing from the names collection
	movie_count: int
	avg_rating: float
	min_rating: float
	max_rating: float


@dataclass(frozen=True)
class ActorPopularity:
	actor_id: str
	actor_name: Optional[str]
	movie_count: int  # distinct well-rated movies the actor appears in
	avg_rating: float  # average rating across those movies


@dataclass(frozen=True)
class GroupSummary:
	key: object  # group key; a string, or a (country, language) tuple
	movie_count: int  # every record passing the vote gate
	avg_rating: float  # every record passing the vote gate
	sum_gross: Optional[Decimal]  # known gross only; None when no gross is known
	avg_gross: Optional[Decimal]  # known gross only; None when no gross is known
	gross_count: int = 0  # how many records contributed to the gross figures


@dataclass(frozen=True)
class CorrelationResult:
	n: int  # number of pairs used
	mean_x: Optional[float]
	mean_y: Optional[float]
	pearson_r: Optional[float]  # None when undefined (zero variance or too few pairs)


@dataclass(frozen=True)
class YearTrend:
	year: int
	movie_count: int
	avg_rating: float
	sum_gross: Optional[Decimal]  # None when no gross is known for the year


@dataclass(frozen=True)
class GrowthSignal:
	category: str
	recent_count: int
	prior_count: int
	delta: int  # recent_count - prior_count
	pct_change: Optional[float]  # None when prior_count is 0
	recent_window: Tuple[int, int] = (0, 0)  # inclusive year bounds
	prior_window: Tuple[int, int] = (0, 0)  # inclusive year bounds


@dataclass(frozen=True)
class Recommendation:
	movie_id: str
	title: str
	score: int  # summed signal weights
	avg_rating: Optional[float]  # None when the candidate has no rating stat
	total_votes: Optional[int]
	signals: Tuple[str, ...] = ()  # names of the signals that matched, e.g. ("director", "genre")
