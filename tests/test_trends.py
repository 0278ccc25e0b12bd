"""
Tests for TrendAnalyzer: yearly trend, growth windows and growth signals.
Run: python tests/test_trends.py
"""

from datetime import date
from decimal import Decimal

from sample_catalog import assert_close, assert_equal, assert_raises, assert_true, build_catalog, movie

from movie_analytics import ConfigurationError, MovieAnalytics
from movie_analytics.trends import TrendAnalyzer


def growth_catalog():
	"""Max year 2020. Drama: 3 recent, 2 prior. Horror: 1 recent, 0 prior. Western: prior only."""
	movies = [
		movie('r1', published=date(2020, 1, 1)),
		movie('r2', year=2019),
		movie('r3', year=2018),
		movie('r4', year=2018),
		movie('p1', year=2017),
		movie('p2', published=date(2015, 6, 1), year=2021),  # date wins: 2015, and 2021 never becomes max
		movie('p3', year=2016),
		movie('o1', year=2014),  # outside both windows
		movie('n1'),  # no year
	]
	genres = [
		('r1', 'Drama'), ('r2', 'Drama'), ('r3', 'Drama'), ('r4', 'Horror'),
		('p1', 'Drama'), ('p2', 'Drama'), ('p3', 'Western'), ('o1', 'Drama'), ('n1', 'Drama'),
	]
	return build_catalog(movies=movies, genres=genres)


def test_growth_windows():
	recent, prior = TrendAnalyzer().growth_windows(2020)
	assert_equal(recent, (2018, 2020), "recent window")
	assert_equal(prior, (2015, 2017), "prior window")
	recent, prior = TrendAnalyzer().growth_windows(2020, recent_span=2, prior_span=4, gap=1)
	assert_equal((recent, prior), ((2019, 2020), (2014, 2017)), "custom spans and gap")


def test_growth_signal():
	signals = MovieAnalytics(growth_catalog()).growth_signal()
	drama = signals['Drama']
	assert_equal((drama.recent_count, drama.prior_count, drama.delta), (3, 2, 1), "drama counts")
	assert_equal(drama.pct_change, 50.0, "drama percentage change")
	assert_equal((drama.recent_window, drama.prior_window), ((2018, 2020), (2015, 2017)), "windows reported")

	horror = signals['Horror']
	assert_equal((horror.recent_count, horror.prior_count), (1, 0), "horror counts")
	assert_equal(horror.pct_change, None, "no prior movies means unknown growth")

	western = signals['Western']
	assert_equal((western.delta, western.pct_change), (-1, -100.0), "decline")
	assert_equal(list(signals), ['Drama', 'Horror', 'Western'], "ordered by delta desc, then name")


def test_pct_change_rounding():
	assert_equal(TrendAnalyzer()._pct_change(4, 3), 33.33, "two decimals")
	assert_equal(TrendAnalyzer()._pct_change(2, 3), -33.33, "negative two decimals")
	assert_equal(TrendAnalyzer()._pct_change(1, 0), None, "zero baseline")


def test_growth_by_country():
	catalog = build_catalog(movies=[movie('a', year=2020, country='USA'), movie('b', year=2016, country='USA'), movie('c', year=2016)])
	signals = MovieAnalytics(catalog).growth_signal(category='country')
	assert_equal(list(signals), ['USA'], "movies without a country are skipped")
	assert_equal(signals['USA'].pct_change, 0.0, "flat growth")


def test_growth_signal_empty_and_invalid():
	assert_equal(MovieAnalytics(build_catalog(movies=[movie('a')])).growth_signal(), {}, "no dated movies")
	analytics = MovieAnalytics(growth_catalog())
	assert_raises(lambda: analytics.growth_signal(recent_span=0), ConfigurationError, "zero span")
	assert_raises(lambda: analytics.growth_signal(gap=-1), ConfigurationError, "negative gap")
	assert_raises(lambda: analytics.growth_signal(category='studio'), ConfigurationError, "unknown category")


def test_yearly_trend():
	catalog = build_catalog(
		movies=[
			movie('a', year=2019, gross='$ 100'),
			movie('b', published=date(2019, 3, 1), gross=None),
			movie('c', year=2021, gross=None),
			movie('d', year=2020),  # unrated
			movie('e'),  # no year
		],
		ratings=[('a', 6.0, 10), ('b', 8.0, 10), ('c', 7.0, 10), ('e', 9.0, 10)],
	)
	trend = MovieAnalytics(catalog).yearly_trend()
	assert_equal([t.year for t in trend], [2019, 2021], "ascending, no gap-filling for 2020")
	assert_equal(trend[0].movie_count, 2, "both 2019 movies counted")
	assert_close(trend[0].avg_rating, 7.0, "2019 average")
	assert_equal(trend[0].sum_gross, Decimal("100.00"), "known gross only")
	assert_equal(trend[1].sum_gross, None, "no known gross is unknown")
	assert_true(MovieAnalytics(catalog).yearly_trend(min_votes=11) == [], "vote floor applies")


def main():
	print("Running TrendAnalyzer tests...")
	test_growth_windows()
	test_growth_signal()
	test_pct_change_rounding()
	test_growth_by_country()
	test_growth_signal_empty_and_invalid()
	print(" - growth signal ok")
	test_yearly_trend()
	print(" - yearly trend ok")
	print("All TrendAnalyzer tests passed!")


if __name__ == '__main__':
	main()
