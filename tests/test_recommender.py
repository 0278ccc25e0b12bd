"""
Tests for RecommendationScorer: weighted signal overlap and ordering.
Run: python tests/test_recommender.py
"""

from sample_catalog import (
	assert_equal,
	assert_raises,
	assert_true,
	build_catalog,
	movie,
	recommendation_catalog,
)

from movie_analytics import ConfigurationError, MovieAnalytics
from movie_analytics.recommender import RecommendationScorer, SignalSource, is_cast_role


def test_scores_compound_across_signals():
	results = MovieAnalytics(recommendation_catalog()).recommend('M123')
	assert_equal([(r.movie_id, r.score) for r in results], [('C', 4), ('A', 3), ('F', 2), ('E', 2), ('B', 1)], "C above A above F and E above B")
	assert_equal(results[0].signals, ('director', 'genre'), "matched signals listed")
	assert_true(all(r.movie_id != 'M123' for r in results), "target excluded")


def test_unrated_candidate_still_listed():
	results = {r.movie_id: r for r in MovieAnalytics(recommendation_catalog()).recommend('M123')}
	assert_equal((results['B'].avg_rating, results['B'].total_votes), (None, None), "missing rating is unknown")
	assert_equal(results['C'].title, 'Title C', "title joined")


def test_cast_whitelist():
	results = {r.movie_id: r for r in MovieAnalytics(recommendation_catalog()).recommend('M123')}
	assert_true('E' in results, "actress role counts as cast (case-insensitive)")
	assert_equal(results['F'].score, 2, "target's actor matches in any role on the candidate")
	assert_true('G' not in results, "unrelated movie not listed")
	assert_true(is_cast_role('Performer'), "whitelist is case-insensitive")
	assert_true(not is_cast_role(None), "role without category is not cast by default")
	assert_true(is_cast_role(None, allow_unknown=True), "role without category allowed on request")
	assert_true(not is_cast_role('director'), "crew role is not cast")


def test_target_cast_selection():
	catalog = build_catalog(
		movies=[movie(m) for m in ('T', 'a', 'b', 'c')],
		roles=[
			('T', 'p1', None), ('a', 'p1', 'writer'),  # uncategorized target role counts as cast
			('T', 'p2', 'producer'), ('b', 'p2', 'actor'),  # target's crew is not cast
			('T', 'p3', 'actor'), ('c', 'p3', 'actor'), ('c', 'p1', None),  # two shared people count once
		],
	)
	results = MovieAnalytics(catalog).recommend('T')
	assert_equal([(r.movie_id, r.score) for r in results], [('a', 2), ('c', 2)], "cast picked on the target side only")


def test_tie_breaks():
	catalog = build_catalog(
		movies=[movie(m) for m in ('T', 'a', 'b', 'c', 'd', 'e')],
		genres=[(m, 'Drama') for m in ('T', 'a', 'b', 'c', 'd', 'e')],
		ratings=[('a', 7.0, 100), ('b', 8.0, 50), ('c', 8.0, 500), ('e', 7.0, 100)],
	)
	results = MovieAnalytics(catalog).recommend('T')
	assert_equal([r.movie_id for r in results], ['c', 'b', 'a', 'e', 'd'], "rating, votes, id; unrated last")


def test_limit_and_unknown_target():
	analytics = MovieAnalytics(recommendation_catalog())
	assert_equal(len(analytics.recommend('M123', limit=2)), 2, "limit truncates")
	assert_equal(analytics.recommend('nope'), [], "unknown target gives an empty list")
	assert_raises(lambda: analytics.recommend('M123', limit=-1), ConfigurationError, "negative limit")


def test_extra_signal_source():
	catalog = recommendation_catalog()
	writers = SignalSource.from_pairs('writer', 5, [('M123', 'w1'), ('G', 'w1')])
	scorer = RecommendationScorer(catalog, [writers])
	results = scorer.recommend('M123')
	assert_equal([(r.movie_id, r.score) for r in results], [('G', 5)], "custom signal plugs into the merge")


def test_candidates_without_movie_row_dropped():
	catalog = build_catalog(movies=[movie('T'), movie('a')], genres=[('T', 'Drama'), ('a', 'Drama'), ('ghost', 'Drama')])
	assert_equal([r.movie_id for r in MovieAnalytics(catalog).recommend('T')], ['a'], "ghost id has no movie row")


def main():
	print("Running RecommendationScorer tests...")
	test_scores_compound_across_signals()
	test_unrated_candidate_still_listed()
	test_cast_whitelist()
	test_target_cast_selection()
	print(" - scoring ok")
	test_tie_breaks()
	test_limit_and_unknown_target()
	print(" - ordering ok")
	test_extra_signal_source()
	test_candidates_without_movie_row_dropped()
	print(" - signal sources ok")
	print("All RecommendationScorer tests passed!")


if __name__ == '__main__':
	main()
