"""Tests de los modelos: adaptadores de filas y serialización del resultado."""

import pytest
from pydantic import ValidationError

from hemmatch.models import (
    FeatureDefinition,
    FeatureType,
    MatchResult,
    PreferenceEntry,
    preferences_from_mapping,
    unwrap_stored_value,
)


class TestFeatureDefinition:
    def test_from_db_row_ignores_extra_columns(self):
        feature = FeatureDefinition.model_validate(
            {"id": "rooms", "label": "Antal rum", "type": "number", "min_value": 1,
             "max_value": 10, "options": None, "created_at": "2024-01-01"}
        )
        assert feature.type == FeatureType.NUMBER
        assert feature.value_range == 9

    def test_default_range(self):
        feature = FeatureDefinition(id="x", label="X", type="number")
        assert feature.value_range == 100

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            FeatureDefinition(id="loc", label="Läge", type="location")


class TestPreferenceEntry:
    def test_from_db_row_unwraps_value(self):
        entry = PreferenceEntry.from_db_row(
            {"feature_id": "balcony", "value": {"value": True}, "importance": 4}
        )
        assert entry.value is True
        assert entry.importance == 4

    def test_from_db_row_plain_value(self):
        entry = PreferenceEntry.from_db_row({"feature_id": "rooms", "value": 3, "importance": 2})
        assert entry.value == 3

    def test_missing_importance_is_zero(self):
        entry = PreferenceEntry.from_db_row({"feature_id": "rooms", "value": 3, "importance": None})
        assert entry.importance == 0

    @pytest.mark.parametrize("importance", [-1, 5])
    def test_importance_out_of_range(self, importance):
        with pytest.raises(ValidationError):
            PreferenceEntry(feature_id="rooms", value=3, importance=importance)

    def test_to_db_dict_wraps_value(self):
        entry = PreferenceEntry(feature_id="heating", value="el", importance=1)
        assert entry.to_db_dict("user-1") == {
            "user_id": "user-1",
            "feature_id": "heating",
            "value": {"value": "el"},
            "importance": 1,
        }

    def test_unwrap_leaves_other_dicts(self):
        assert unwrap_stored_value({"lat": 1}) == {"lat": 1}
        assert unwrap_stored_value(None) is None


class TestPreferencesFromMapping:
    def test_adapts_form_shape(self):
        entries = preferences_from_mapping(
            {
                "balcony": {"value": True, "importance": 4},
                "rooms": {"value": {"value": 3}, "importance": 2},
            }
        )
        by_id = {e.feature_id: e for e in entries}
        assert by_id["balcony"].value is True
        assert by_id["rooms"].value == 3
        assert by_id["rooms"].importance == 2


class TestMatchResultSerialization:
    def test_camel_case_keys(self):
        result = MatchResult(
            score=30,
            max_score=40,
            percentage=75,
            matches={"balcony": {"matched": True, "importance": 4, "feature_label": "Balkong"}},
        )
        data = result.to_db_dict()
        assert data["maxScore"] == 40
        assert data["matches"]["balcony"] == {
            "matched": True,
            "importance": 4,
            "featureLabel": "Balkong",
        }

    def test_parses_stored_json(self):
        stored = {
            "score": 10,
            "maxScore": 20,
            "percentage": 50,
            "matches": {"rooms": {"matched": False, "importance": 2, "featureLabel": "Antal rum"}},
        }
        result = MatchResult.model_validate(stored)
        assert result.max_score == 20
        assert result.matches["rooms"].feature_label == "Antal rum"
        assert result.to_db_dict() == stored

    def test_counts(self):
        result = MatchResult.model_validate(
            {
                "score": 40,
                "maxScore": 60,
                "percentage": 67,
                "matches": {
                    "a": {"matched": True, "importance": 4, "featureLabel": "A"},
                    "b": {"matched": False, "importance": 2, "featureLabel": "B"},
                    "c": {"matched": True, "importance": 0, "featureLabel": "C"},
                },
            }
        )
        assert result.evaluated_count == 2
        assert result.matched_count == 1
