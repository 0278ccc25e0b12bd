"""
Tests for AnalyticsSettings: defaults, environment overrides and validation.
Run: python tests/test_config.py
"""

from sample_catalog import assert_equal, assert_raises

from movie_analytics import AnalyticsSettings, ConfigurationError


def test_defaults():
	s = AnalyticsSettings().validate()
	assert_equal((s.genre_min_votes, s.genre_top_n), (1000, 5), "genre defaults")
	assert_equal((s.director_min_votes, s.director_min_movies, s.director_min_avg_rating), (500, 3, 8.0), "director defaults")
	assert_equal((s.actor_min_votes, s.actor_min_rating, s.actor_limit), (500, 7.5, 50), "actor defaults")
	assert_equal((s.summary_min_votes, s.top_gross_min_votes, s.correlation_min_votes), (100, 200, 1000), "vote floors")
	assert_equal((s.growth_recent_span, s.growth_prior_span, s.growth_gap), (3, 3, 0), "growth windows")
	assert_equal(s.recommend_limit, 20, "recommendation limit")


def test_from_env():
	s = AnalyticsSettings.from_env({
		'MOVIE_ANALYTICS_DATA_DIR': '/srv/imdb',
		'MOVIE_ANALYTICS_GENRE_MIN_VOTES': '250',
		'MOVIE_ANALYTICS_ACTOR_MIN_RATING': '7',
		'MOVIE_ANALYTICS_RECOMMEND_LIMIT': ' ',
		'UNRELATED': 'x',
	})
	assert_equal(s.data_dir, '/srv/imdb', "string override")
	assert_equal(s.genre_min_votes, 250, "int override")
	assert_equal(s.actor_min_rating, 7.0, "float override")
	assert_equal(s.recommend_limit, 20, "blank value keeps default")


def test_invalid_settings():
	assert_raises(lambda: AnalyticsSettings.from_env({'MOVIE_ANALYTICS_GENRE_TOP_N': 'five'}), ConfigurationError, "non-numeric")
	assert_raises(lambda: AnalyticsSettings.from_env({'MOVIE_ANALYTICS_ACTOR_LIMIT': '-3'}), ConfigurationError, "negative limit")
	assert_raises(lambda: AnalyticsSettings(genre_min_votes=-1).validate(), ConfigurationError, "negative vote floor")
	assert_raises(lambda: AnalyticsSettings(summary_group_by='city').validate(), ConfigurationError, "unknown grouping")
	assert_raises(lambda: AnalyticsSettings(growth_recent_span=1.5).validate(), ConfigurationError, "fractional span")


def test_log_level():
	assert_equal(AnalyticsSettings.from_env({'MOVIE_ANALYTICS_LOG_LEVEL': 'debug'}).log_level, 'debug', "known level, any case")
	assert_raises(lambda: AnalyticsSettings.from_env({'MOVIE_ANALYTICS_LOG_LEVEL': 'LOUD'}), ConfigurationError, "unknown level")
	assert_raises(lambda: AnalyticsSettings(log_level=10).validate(), ConfigurationError, "level must be a name")


def main():
	print("Running AnalyticsSettings tests...")
	test_defaults()
	test_from_env()
	test_invalid_settings()
	test_log_level()
	print("All AnalyticsSettings tests passed!")


if __name__ == '__main__':
	main()
