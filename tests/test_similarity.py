import pytest

from app.mapper.similarity import levenshtein, similarity


class TestLevenshtein:
    def test_known_distances(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("flaw", "lawn") == 2
        assert levenshtein("insurance", "insurance") == 0

    def test_empty_strings(self):
        assert levenshtein("", "") == 0
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3


class TestSimilarity:
    def test_identical_after_normalization(self):
        """Case and punctuation differences still count as identical."""
        assert similarity("Insurance", "insurance") == 1.0
        assert similarity("Road Tax", "road-tax %") == 1.0

    def test_containment_scores_fixed_value(self):
        assert similarity("tax", "Road Tax") == 0.8
        assert similarity("Road Tax Amount", "road tax") == 0.8

    def test_edit_distance_ratio(self):
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert similarity("taxes", "taxrt") == pytest.approx(0.6)

    def test_unrelated_strings_score_zero(self):
        assert similarity("abc", "xyz") == 0.0

    def test_both_empty_is_defined(self):
        assert similarity("", "") == 1.0
        assert similarity("%", "--") == 1.0

    def test_one_empty_is_contained(self):
        assert similarity("", "emps") == 0.8

    def test_bounded(self):
        pairs = [
            ("Effective on road Price to customer - Core", "EMPS Price"),
            ("postalCharges", "Service Charge and Penality"),
            ("p1Total", "Column 7"),
        ]
        for a, b in pairs:
            score = similarity(a, b)
            assert 0.0 <= score <= 1.0
            assert score == similarity(b, a)
