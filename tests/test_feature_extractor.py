"""Tests del extractor de features de propiedades guardadas."""

import pytest

from hemmatch.extraction import KeywordFeatureExtractor, parse_leading_int


@pytest.fixture()
def extractor():
    return KeywordFeatureExtractor()


class TestParseLeadingInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("3", 3),
            ("3 rum", 3),
            ("  72 kvm", 72),
            ("3.5", 3),
            (4, 4),
            (4.9, 4),
            ("ca 70", 0),
            ("", 0),
            (None, 0),
            (True, 0),
            (float("nan"), 0),
        ],
    )
    def test_values(self, raw, expected):
        assert parse_leading_int(raw) == expected


class TestDetectFeatures:
    def test_swedish_keywords(self, extractor):
        flags = extractor.detect_features(["Inglasad balkong", "Hiss", "Diskmaskin", "Öppen spis"])
        assert flags["balcony"] is True
        assert flags["elevator"] is True
        assert flags["dishwasher"] is True
        assert flags["fireplace"] is True
        assert flags["garden"] is False

    def test_english_keywords(self, extractor):
        flags = extractor.detect_features(["Balcony facing south", "Private garden", "Parking included"])
        assert flags["balcony"] is True
        assert flags["garden"] is True
        assert flags["parking"] is True

    def test_compound_words(self, extractor):
        flags = extractor.detect_features(["Balkonger åt två håll", "Garageplats finns", "Tvättstuga i källaren"])
        assert flags["balcony"] is True
        assert flags["garage"] is True
        assert flags["laundry"] is True

    def test_prefixed_compounds(self, extractor):
        flags = extractor.detect_features(["Sydbalkong", "Totalrenoverad 2021", "Dubbelgarage"])
        assert flags["balcony"] is True
        assert flags["renovated"] is True
        assert flags["garage"] is True

    def test_negation_stays_in_its_clause(self, extractor):
        flags = extractor.detect_features(["Ingen hiss men balkong", "Inget badkar, diskmaskin finns"])
        assert flags["elevator"] is False
        assert flags["balcony"] is True
        assert flags["bathtub"] is False
        assert flags["dishwasher"] is True

    def test_any_non_negated_mention_counts(self, extractor):
        flags = extractor.detect_features(["Ingen parkering på gatan, parkering i garage ingår"])
        assert flags["parking"] is True

    def test_negations(self, extractor):
        flags = extractor.detect_features(["Ingen hiss", "Saknar balkong", "No dishwasher"])
        assert flags["elevator"] is False
        assert flags["balcony"] is False
        assert flags["dishwasher"] is False

    def test_empty_or_missing(self, extractor):
        assert not any(extractor.detect_features(None).values())
        assert not any(extractor.detect_features([]).values())

    def test_single_string(self, extractor):
        assert extractor.detect_features("Badkar")["bathtub"] is True

    def test_evidence(self, extractor):
        evidence = extractor.detect_with_evidence(["Nyrenoverat kök", "Hiss"])
        assert evidence["renovated"]["value"] is True
        assert evidence["renovated"]["matched_text"] == "nyrenoverat kök"
        assert evidence["garden"] == {"value": False, "matched_text": None}


class TestExtract:
    def test_property_row(self, extractor):
        row = {
            "id": "prop-1",
            "rooms": "3 rum",
            "size": "72",
            "features": ["Balkong", "Hiss", "Ingen parkering"],
        }
        values = extractor.extract(row)
        assert values["rooms"] == 3
        assert values["size"] == 72
        assert values["balcony"] is True
        assert values["elevator"] is True
        assert values["parking"] is False

    def test_missing_columns(self, extractor):
        values = extractor.extract({"id": "prop-2"})
        assert values["rooms"] == 0
        assert values["size"] == 0
        assert values["balcony"] is False
