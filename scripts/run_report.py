"""
Run every analysis over the catalog and log the results.

This script:
1) Loads the catalog collections from the configured data directory
2) Normalizes movies and builds the analytics engine
3) Runs rankings, summaries, correlation, trends and growth signals
4) Optionally recommends movies similar to a target id

Usage:
    poetry run python -m scripts.run_report [TARGET_MOVIE_ID]

Thresholds and the data directory come from MOVIE_ANALYTICS_* environment
variables (see movie_analytics.config).
"""

import sys  # command-line target and log sink
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from movie_analytics import AnalyticsSettings, ConfigurationError, MovieAnalytics
from movie_analytics.data_loader import CatalogLoader  # data ingestion


def main(argv=None) -> int:
	argv = sys.argv[1:] if argv is None else argv
	try:
		settings = AnalyticsSettings.from_env()
	except ConfigurationError as e:
		logger.error(f"[Report] Invalid configuration: {e}")
		return 2

	# Console sink at the configured level
	logger.remove()
	logger.add(sys.stderr, level=settings.log_level.upper())

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Movie Analytics Report")
	logger.info("=" * 60)

	# Resolve the data directory relative to the project root when not absolute
	data_dir = Path(settings.data_dir)
	if not data_dir.is_absolute():
		data_dir = Path(__file__).resolve().parents[1] / data_dir

	# 1) Load data
	logger.info("[1/4] Loading catalog...")
	t0 = time.time()
	catalog = CatalogLoader().load_catalog(str(data_dir))
	engine = MovieAnalytics(catalog, settings)
	logger.info(f"[OK] Engine ready in {time.time() - t0:.2f}s")

	# 2) Rankings
	logger.info("\n[2/4] Rankings...")
	for genre, movies in engine.top_rated_by_genre().items():
		logger.info(f"  {genre}: " + ", ".join(f"{m.title} ({m.avg_rating}, {m.total_votes} votes)" for m in movies))
	for d in engine.top_directors():
		logger.info(f"  Director {d.director_name or d.director_id}: {d.movie_count} movies, avg {d.avg_rating:.2f} [{d.min_rating}-{d.max_rating}]")
	for a in engine.top_actors()[:10]:
		logger.info(f"  Actor {a.actor_name or a.actor_id}: {a.movie_count} movies, avg {a.avg_rating:.2f}")

	# 3) Comparisons and trends
	logger.info("\n[3/4] Comparisons and trends...")
	for s in list(engine.country_language_summary().values())[:10]:
		logger.info(f"  {s.key}: {s.movie_count} movies, avg rating {s.avg_rating:.2f}, total gross {s.sum_gross}, avg gross {s.avg_gross}")
	for s in engine.top_countries_by_gross()[:5]:
		logger.info(f"  Top gross {s.key}: avg gross {s.avg_gross}")
	corr = engine.revenue_rating_correlation()
	logger.info(f"  Revenue vs rating: n={corr.n} r={corr.pearson_r}")
	for t in engine.yearly_trend():
		logger.info(f"  {t.year}: {t.movie_count} movies, avg rating {t.avg_rating:.2f}, total gross {t.sum_gross}")
	for g in engine.growth_signal().values():
		logger.info(f"  Growth {g.category}: {g.prior_count} -> {g.recent_count} ({g.pct_change}%)")

	# 4) Recommendations
	logger.info("\n[4/4] Recommendations...")
	if argv:
		for r in engine.recommend(argv[0]):
			logger.info(f"  [{r.score}] {r.title} ({r.avg_rating}, {r.total_votes} votes) via {', '.join(r.signals)}")
	else:
		logger.info("  No target movie id given; skipped.")

	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke report
