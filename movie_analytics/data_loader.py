"""
Data loading module.
Reads the six catalog collections (movies, genres, director links, roles,
people, ratings) from JSON Lines files and converts them into typed records.
"""

# Standard libs for JSON parsing, dates, typing, and paths
import json  # read JSON lines
from datetime import date, datetime  # publication date parsing
from pathlib import Path  # filesystem-safe paths
from typing import Callable, Dict, List, Optional, TypeVar

# Import our entity records
from .models import Catalog, DirectorLink, GenreTag, Movie, Person, RatingStat, RoleLink

# Console logging
from loguru import logger  # console logger

T = TypeVar("T")


class CatalogLoader:
	"""
	Loads a catalog snapshot from a directory of JSONL files, one per collection.
	Field names follow the IMDb case-study schema (movie, genre, director_mapping,
	role_mapping, names, ratings).
	"""

	# Collection name -> file name inside the data directory
	FILES = {
		'movies': 'movie.jsonl',
		'genres': 'genre.jsonl',
		'directors': 'director_mapping.jsonl',
		'roles': 'role_mapping.jsonl',
		'people': 'names.jsonl',
		'ratings': 'ratings.jsonl',
	}

	# Accepted date layouts besides ISO (e.g. "09-06-2017", "09/06/2017")
	DATE_FORMATS = ('%d-%m-%Y', '%d/%m/%Y')

	def load_catalog(self, data_dir: str) -> Catalog:
		"""
		Load every collection from data_dir and return a Catalog.
		A missing directory is an error; a missing collection file just yields an empty collection.
		"""
		data_dir = Path(data_dir)  # normalize path

		# Validate the directory early to give clear error messages
		if not data_dir.is_dir():
			raise FileNotFoundError(f"Catalog directory not found: {data_dir}")

		logger.info(f"[Loader] Loading catalog from {data_dir}...")  # log action
		catalog = Catalog.from_collections(
			movies=self._load(data_dir / self.FILES['movies'], self._parse_movie),
			genres=self._load(data_dir / self.FILES['genres'], self._parse_genre),
			directors=self._load(data_dir / self.FILES['directors'], self._parse_director),
			roles=self._load(data_dir / self.FILES['roles'], self._parse_role),
			people=self._load(data_dir / self.FILES['people'], self._parse_person),
			ratings=self._load(data_dir / self.FILES['ratings'], self._parse_rating),
		)
		logger.info(
			f"[Loader] Loaded {len(catalog.movies)} movies, {len(catalog.genres)} genre tags, "
			f"{len(catalog.directors)} director links, {len(catalog.roles)} roles, "
			f"{len(catalog.people)} people, {len(catalog.ratings)} ratings"
		)
		return catalog

	def _load(self, filepath: Path, parse: Callable[[Dict], T]) -> List[T]:
		"""Read one JSONL file line by line, skipping malformed lines with a warning."""
		if not filepath.exists():
			logger.warning(f"[Loader] Collection file missing, using empty collection: {filepath}")
			return []

		items: List[T] = []  # accumulator for parsed records
		# Open the file and read line-by-line to handle large datasets efficiently
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate blank lines
					continue
				try:
					data = json.loads(line)  # parse JSON object per line
					items.append(parse(data))  # convert dict -> record
				except json.JSONDecodeError as e:
					logger.warning(f"[Loader] Skipping invalid JSON in {filepath.name} at line {line_num}: {e}")
				except (KeyError, TypeError, ValueError) as e:
					logger.warning(f"[Loader] Skipping bad record in {filepath.name} at line {line_num}: {e!r}")

		logger.debug(f"[Loader] {filepath.name}: {len(items)} records")
		return items

	def _parse_movie(self, data: Dict) -> Movie:
		"""
		Convert a raw movie row into a Movie. The gross stays raw text here;
		the normalizer owns its parsing so there is a single definition of "unknown".
		"""
		gross = data.get('worlwide_gross_income')  # spelling used by the source schema
		if gross is None:
			gross = data.get('worldwide_gross_income')  # corrected spelling also accepted
		return Movie(
			id=str(data['id']),  # ids are required
			title=self._clean_text(data.get('title')) or '',
			country=self._clean_text(data.get('country')),
			language=self._clean_text(data.get('languages') or data.get('language')),
			year=self._parse_int(data.get('year')),
			date_published=self._parse_date(data.get('date_published')),
			gross_income_raw=None if gross is None else str(gross),
		)

	def _parse_genre(self, data: Dict) -> GenreTag:
		return GenreTag(movie_id=str(data['movie_id']), genre=self._require_text(data, 'genre'))

	def _parse_director(self, data: Dict) -> DirectorLink:
		return DirectorLink(movie_id=str(data['movie_id']), person_id=str(data['name_id']))

	def _parse_role(self, data: Dict) -> RoleLink:
		return RoleLink(
			movie_id=str(data['movie_id']),
			person_id=str(data['name_id']),
			category=self._clean_text(data.get('category')),
		)

	def _parse_person(self, data: Dict) -> Person:
		return Person(id=str(data['id']), name=self._clean_text(data.get('name')) or '')

	def _parse_rating(self, data: Dict) -> RatingStat:
		# avg_rating and total_votes are required; a rating row without them is skipped
		median = data.get('median_rating')
		return RatingStat(
			movie_id=str(data['movie_id']),
			avg_rating=float(data['avg_rating']),
			total_votes=int(data['total_votes']),
			median_rating=float(median) if median not in (None, '') else None,
		)

	def _clean_text(self, value) -> Optional[str]:
		"""Trim whitespace; empty strings and None become None."""
		if value is None:
			return None
		text = str(value).strip()
		return text or None

	def _require_text(self, data: Dict, key: str) -> str:
		text = self._clean_text(data.get(key))
		if text is None:
			raise ValueError(f"missing {key}")
		return text

	def _parse_int(self, value) -> Optional[int]:
		"""Parse an integer-like value; anything unparseable is unknown (None)."""
		if value is None or value == '':
			return None
		try:
			return int(float(value))
		except (TypeError, ValueError):
			logger.debug(f"[Loader] Unparseable integer {value!r} -> unknown")
			return None

	def _parse_date(self, value) -> Optional[date]:
		"""Parse ISO dates (optionally with a time part) or day-first dates; else None."""
		if value is None:
			return None
		text = str(value).strip()
		if not text:
			return None
		try:
			return datetime.fromisoformat(text).date()
		except ValueError:
			pass
		for fmt in self.DATE_FORMATS:
			try:
				return datetime.strptime(text, fmt).date()
			except ValueError:
				continue
		logger.debug(f"[Loader] Unparseable date {value!r} -> unknown")
		return None
