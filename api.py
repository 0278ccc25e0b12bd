"""
FastAPI server exposing the movie analytics API.
Endpoints:
- GET /health: basic health check
- GET /genres/top, /directors/top, /actors/top: rankings
- GET /summary/countries, /summary/top-gross: country & language comparisons
- GET /correlation/revenue-rating: gross vs rating correlation
- GET /trends/yearly, /trends/growth: trends over time
- GET /movies/{movie_id}/recommendations: similar movies

Startup loads the catalog from MOVIE_ANALYTICS_DATA_DIR (default: data/).
Run: uvicorn api:app --reload
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from decimal import Decimal  # gross amounts arrive as Decimal
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query, Request  # FastAPI primitives
from fastapi.responses import JSONResponse  # custom error payloads
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for data loading and analytics
from movie_analytics import AnalyticsSettings, ConfigurationError, MovieAnalytics
from movie_analytics.data_loader import CatalogLoader  # loads the catalog collections

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Analytics API", version="1.0.0")  # web app

# Globals that hold the analytics engine instance and measured startup time
ENGINE: Optional[MovieAnalytics] = None  # will point to the initialized engine
STARTUP_TIME_S: float = 0.0  # measures how long startup took


class RankedMovieOut(BaseModel):
	rank: int
	movie_id: str
	title: str
	published_year: Optional[int] = None
	avg_rating: float
	total_votes: int


class GenreRankingOut(BaseModel):
	genre: str
	movies: List[RankedMovieOut]


class DirectorOut(BaseModel):
	director_id: str
	director_name: Optional[str] = None
	movie_count: int
	avg_rating: float
	min_rating: float
	max_rating: float


class ActorOut(BaseModel):
	actor_id: str
	actor_name: Optional[str] = None
	movie_count: int
	avg_rating: float


class SummaryOut(BaseModel):
	country: Optional[str] = None  # set when grouping includes country
	language: Optional[str] = None  # set when grouping includes language
	movie_count: int
	avg_rating: float
	sum_gross: Optional[float] = None  # None when no gross is known
	avg_gross: Optional[float] = None


class CorrelationOut(BaseModel):
	n: int
	mean_gross: Optional[float] = None
	mean_rating: Optional[float] = None
	pearson_r: Optional[float] = None  # None when undefined


class YearTrendOut(BaseModel):
	year: int
	movie_count: int
	avg_rating: float
	sum_gross: Optional[float] = None


class GrowthOut(BaseModel):
	category: str
	recent_count: int
	prior_count: int
	delta: int
	pct_change: Optional[float] = None  # None when prior_count is 0
	recent_window: List[int]
	prior_window: List[int]


class RecommendationOut(BaseModel):
	movie_id: str
	title: str
	score: int
	avg_rating: Optional[float] = None
	total_votes: Optional[int] = None
	signals: List[str]


class RecommendationResponse(BaseModel):
	target_movie_id: str
	limit: int
	elapsed_ms: float  # server-side scoring time in ms
	results: List[RecommendationOut]


def _money(value: Optional[Decimal]) -> Optional[float]:
	return float(value) if value is not None else None


def _engine() -> MovieAnalytics:
	"""Return the engine or answer 503 while it is not initialized."""
	if ENGINE is None:
		logger.warning("[API] Request received but engine not initialized")  # guard log
		raise HTTPException(status_code=503, detail="Analytics engine not initialized")
	return ENGINE


# Invalid thresholds are caller errors: answer 400 with the message
@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
	logger.info(f"[API] Rejected {request.url.path}: {exc}")
	return JSONResponse(status_code=400, content={"detail": str(exc)})


# FastAPI startup hook to initialize the analytics engine once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog and build the analytics engine."""
	global ENGINE, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = AnalyticsSettings.from_env()  # thresholds and data location
	logger.info(f"[API] Startup: loading catalog from '{settings.data_dir}'...")  # log intent
	catalog = CatalogLoader().load_catalog(settings.data_dir)  # read collections
	ENGINE = MovieAnalytics(catalog, settings)  # normalize and index

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"engine_ready": ENGINE is not None,  # True if engine initialized
		"movies": len(ENGINE.records) if ENGINE is not None else 0,  # catalog size
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/genres/top", response_model=List[GenreRankingOut])
async def top_rated_by_genre(min_votes: Optional[int] = None, per_genre: Optional[int] = None):
	ranked = _engine().top_rated_by_genre(min_votes=min_votes, per_genre=per_genre)
	return [
		GenreRankingOut(genre=genre, movies=[RankedMovieOut(**vars(m)) for m in movies])
		for genre, movies in ranked.items()
	]


@app.get("/directors/top", response_model=List[DirectorOut])
async def top_directors(
	min_votes: Optional[int] = None,
	min_movies: Optional[int] = None,
	min_avg_rating: Optional[float] = None,
):
	insights = _engine().top_directors(min_votes=min_votes, min_movies=min_movies, min_avg_rating=min_avg_rating)
	return [DirectorOut(**vars(d)) for d in insights]


@app.get("/actors/top", response_model=List[ActorOut])
async def top_actors(min_votes: Optional[int] = None, min_rating: Optional[float] = None, limit: Optional[int] = None):
	actors = _engine().top_actors(min_votes=min_votes, min_rating=min_rating, limit=limit)
	return [ActorOut(**vars(a)) for a in actors]


@app.get("/summary/countries", response_model=List[SummaryOut])
async def country_language_summary(
	min_votes: Optional[int] = None,
	group_by: Optional[str] = Query(None, description="country, language or country_language"),
):
	engine = _engine()
	group_by = group_by or engine.settings.summary_group_by
	summaries = engine.country_language_summary(min_votes=min_votes, group_by=group_by)
	return [_summary_out(s, group_by) for s in summaries.values()]


@app.get("/summary/top-gross", response_model=List[SummaryOut])
async def top_countries_by_gross(min_votes: Optional[int] = None, limit: Optional[int] = None):
	summaries = _engine().top_countries_by_gross(min_votes=min_votes, limit=limit)
	return [_summary_out(s, 'country') for s in summaries]


@app.get("/correlation/revenue-rating", response_model=CorrelationOut)
async def revenue_rating_correlation(min_votes: Optional[int] = None):
	result = _engine().revenue_rating_correlation(min_votes=min_votes)
	return CorrelationOut(n=result.n, mean_gross=result.mean_x, mean_rating=result.mean_y, pearson_r=result.pearson_r)


@app.get("/trends/yearly", response_model=List[YearTrendOut])
async def yearly_trend(min_votes: Optional[int] = None):
	return [
		YearTrendOut(year=t.year, movie_count=t.movie_count, avg_rating=t.avg_rating, sum_gross=_money(t.sum_gross))
		for t in _engine().yearly_trend(min_votes=min_votes)
	]


@app.get("/trends/growth", response_model=List[GrowthOut])
async def growth_signal(
	recent_span: Optional[int] = None,
	prior_span: Optional[int] = None,
	gap: Optional[int] = None,
	category: Optional[str] = Query(None, description="genre or country"),
):
	signals = _engine().growth_signal(recent_span=recent_span, prior_span=prior_span, gap=gap, category=category)
	return [
		GrowthOut(
			category=s.category,
			recent_count=s.recent_count,
			prior_count=s.prior_count,
			delta=s.delta,
			pct_change=s.pct_change,
			recent_window=list(s.recent_window),
			prior_window=list(s.prior_window),
		)
		for s in signals.values()
	]


@app.get("/movies/{movie_id}/recommendations", response_model=RecommendationResponse)
async def recommend(movie_id: str, limit: Optional[int] = None):
	"""Similar movies by shared directors, cast and genres."""
	engine = _engine()
	limit = limit if limit is not None else engine.settings.recommend_limit
	start = time.time()  # start timer
	results = engine.recommend(movie_id, limit=limit)
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /recommendations served {len(results)} results for '{movie_id}' in {elapsed_ms:.2f} ms")
	return RecommendationResponse(
		target_movie_id=movie_id,
		limit=limit,
		elapsed_ms=round(elapsed_ms, 2),
		results=[
			RecommendationOut(
				movie_id=r.movie_id,
				title=r.title,
				score=r.score,
				avg_rating=r.avg_rating,
				total_votes=r.total_votes,
				signals=list(r.signals),
			)
			for r in results
		],
	)


def _summary_out(summary, group_by: str) -> SummaryOut:
	"""Split the group key into country/language fields for the response."""
	if group_by == 'country_language':
		country, language = summary.key
	elif group_by == 'language':
		country, language = None, summary.key
	else:
		country, language = summary.key, None
	return SummaryOut(
		country=country,
		language=language,
		movie_count=summary.movie_count,
		avg_rating=summary.avg_rating,
		sum_gross=_money(summary.sum_gross),
		avg_gross=_money(summary.avg_gross),
	)
