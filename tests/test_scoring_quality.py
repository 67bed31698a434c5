"""Tests de los helpers de presentación del match."""

import pytest

from hemmatch.models import FeatureMatch, MatchResult
from hemmatch.scoring import (
    group_matches,
    importance_label,
    match_quality_description,
    sorted_matches,
)


def _result(**matches) -> MatchResult:
    return MatchResult(score=0, max_score=0, percentage=100, matches=matches)


def _m(matched, importance, label):
    return FeatureMatch(matched=matched, importance=importance, feature_label=label)


class TestQualityDescription:
    @pytest.mark.parametrize(
        ("percentage", "expected"),
        [
            (100, "Perfekt matchning"),
            (90, "Perfekt matchning"),
            (89, "Utmärkt matchning"),
            (70, "Mycket bra matchning"),
            (65, "Bra matchning"),
            (50, "Acceptabel matchning"),
            (45, "Mindre bra matchning"),
            (30, "Dålig matchning"),
            (29, "Mycket dålig matchning"),
            (0, "Mycket dålig matchning"),
        ],
    )
    def test_thresholds(self, percentage, expected):
        assert match_quality_description(percentage) == expected


class TestImportanceLabel:
    def test_known_levels(self):
        assert importance_label(4) == "Måste ha"
        assert importance_label(1) == "Trevligt att ha"
        assert importance_label(0) == "Inte viktigt"

    def test_unknown_level_falls_back_to_number(self):
        assert importance_label(7) == "7"


class TestSortedMatches:
    def test_highest_importance_first(self):
        result = _result(
            garden=_m(True, 1, "Trädgård"),
            balcony=_m(False, 4, "Balkong"),
            elevator=_m(True, 3, "Hiss"),
        )
        order = [feature_id for feature_id, _ in sorted_matches(result)]
        assert order == ["balcony", "elevator", "garden"]


class TestGroupMatches:
    @pytest.fixture()
    def grouped(self):
        result = _result(
            balcony=_m(True, 4, "Balkong"),
            elevator=_m(False, 4, "Hiss"),
            parking=_m(True, 3, "Parkering"),
            garden=_m(False, 2, "Trädgård"),
            laundry=_m(True, 1, "Tvättmaskin"),
            fireplace=_m(True, 0, "Öppen spis"),
        )
        return group_matches(result)

    def test_matched_groups(self, grouped):
        assert grouped.matched.must_have == ["Balkong"]
        assert grouped.matched.very_important == ["Parkering"]
        assert grouped.matched.other == ["Tvättmaskin"]

    def test_unmatched_groups(self, grouped):
        assert grouped.unmatched.must_have == ["Hiss"]
        assert grouped.unmatched.very_important == []
        assert grouped.unmatched.other == ["Trädgård"]

    def test_zero_importance_excluded(self, grouped):
        all_labels = (
            grouped.matched.must_have
            + grouped.matched.very_important
            + grouped.matched.other
        )
        assert "Öppen spis" not in all_labels

    def test_empty_result(self):
        grouped = group_matches(_result())
        assert grouped.matched.is_empty()
        assert grouped.unmatched.is_empty()
