"""
Unit tests for FieldNormalizer: gross income parsing and canonical year resolution.
Run: python tests/test_normalizer.py
"""

from datetime import date
from decimal import Decimal

from sample_catalog import assert_equal, assert_true, build_catalog, movie

from movie_analytics.normalizer import FieldNormalizer
from movie_analytics.models import RatingStat


def test_gross_income_parsing():
	n = FieldNormalizer()
	assert_equal(n.parse_gross_income("$1,234.50"), Decimal("1234.50"), "currency symbol and separators stripped")
	assert_equal(n.parse_gross_income("$ 1,234,567"), Decimal("1234567.00"), "two fractional digits kept")
	assert_equal(n.parse_gross_income("INR 500"), Decimal("500.00"), "no currency conversion")
	assert_equal(n.parse_gross_income(1500), Decimal("1500.00"), "numbers accepted as-is")


def test_gross_income_unknown():
	n = FieldNormalizer()
	for raw in (None, "", "N/A", "$ ,", "unknown"):
		assert_equal(n.parse_gross_income(raw), None, f"no digits in {raw!r} means unknown")
	for raw in ("1.2.3", ".", "$..."):
		assert_equal(n.parse_gross_income(raw), None, f"unparseable residue in {raw!r} means unknown")
	assert_true(n.parse_gross_income("$0") == Decimal("0.00"), "a literal zero stays zero")


def test_resolve_year_prefers_date():
	n = FieldNormalizer()
	assert_equal(n.resolve_year(date(2019, 1, 4), 2018), 2019, "date year wins over a differing year field")
	assert_equal(n.resolve_year(None, 2018), 2018, "year field used when date absent")
	assert_equal(n.resolve_year(date(2001, 5, 1), None), 2001, "date alone")
	assert_equal(n.resolve_year(None, None), None, "neither source means unknown")


def test_normalize_record():
	n = FieldNormalizer()
	rated = n.normalize(movie('m1', year=2017, published=date(2018, 2, 1), gross="$ 10"), RatingStat('m1', 7.5, 1200))
	assert_equal(rated.published_year, 2018, "canonical year")
	assert_equal(rated.gross, Decimal("10.00"), "parsed gross")
	assert_equal((rated.avg_rating, rated.total_votes), (7.5, 1200), "rating joined")
	assert_true(rated.is_rated, "rated record")

	unrated = n.normalize(movie('m2'))
	assert_true(not unrated.is_rated, "no rating stat means unrated, not zero")
	assert_equal(unrated.avg_rating, None, "rating unknown")


def test_normalize_catalog_order():
	catalog = build_catalog(movies=[movie('b'), movie('a'), movie('c')], ratings=[('a', 5.0, 10)])
	records = FieldNormalizer().normalize_catalog(catalog)
	assert_equal([r.movie_id for r in records], ['a', 'b', 'c'], "records in movie-id order")
	assert_equal([r.is_rated for r in records], [True, False, False], "ratings joined by id")


def main():
	print("Running FieldNormalizer tests...")
	test_gross_income_parsing()
	test_gross_income_unknown()
	print(" - gross income ok")
	test_resolve_year_prefers_date()
	print(" - year resolution ok")
	test_normalize_record()
	test_normalize_catalog_order()
	print(" - record normalization ok")
	print("All FieldNormalizer tests passed!")


if __name__ == '__main__':
	main()
