"""
Extracción de valores de features desde una propiedad guardada.

Las columnas numéricas (rooms, size) se parsean directamente; las
amenities booleanas se detectan por keywords (sueco/inglés) en la
lista de características libres del aviso.
"""

import math
import re
import unicodedata
from collections.abc import Iterable, Mapping
from typing import Any, Optional

import structlog

logger = structlog.get_logger()


def parse_leading_int(value: Any) -> int:
    """
    Entero al inicio del valor ('3 rum' -> 3, '3.5' -> 3).

    Valores ilegibles o faltantes cuentan como 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    match = re.match(r"\s*([+-]?\d+)", str(value))
    if not match:
        return 0
    return int(match.group(1))


class KeywordFeatureExtractor:
    """Detector de amenities basado en keywords + negaciones cercanas."""

    NUMERIC_COLUMNS: dict[str, str] = {
        "rooms": "rooms",
        "size": "size",
    }

    # Raíces suecas sin \b: el sueco compone palabras en ambos extremos
    # ('sydbalkong', 'hissen', 'totalrenoverad', 'dubbelgarage')
    FEATURE_PATTERNS: dict[str, list[str]] = {
        "balcony": [r"balkong", r"\bbalcony"],
        "elevator": [r"hiss", r"\belevator", r"\blift\b"],
        "parking": [r"parkering", r"\bparking", r"\bp-plats"],
        "garage": [r"garage"],
        "garden": [r"trädgård", r"\bgarden", r"gårdsplan"],
        "renovated": [r"renover", r"\brenovated"],
        "fireplace": [r"öppen spis", r"\bfireplace", r"kakelugn"],
        "bathtub": [r"badkar", r"\bbathtub"],
        "dishwasher": [r"diskmaskin", r"\bdishwasher"],
        "laundry": [r"tvättmaskin", r"\blaundry", r"tvättstuga", r"\bwashing machine"],
    }

    # Una negación solo alcanza a la keyword de su misma cláusula
    CLAUSE_BOUNDARY = r"[,;.!?:]|\b(?:men|och|samt|but|and)\b"
    NEGATION_WINDOW = 25

    NEGATION_PATTERNS: list[str] = [
        r"\bingen\b",
        r"\binget\b",
        r"\butan\b",
        r"\bsaknar\b",
        r"\bsaknas\b",
        r"\bej\b",
        r"\binte\b",
        r"\bno\b",
        r"\bwithout\b",
        r"\bnot\b",
    ]

    def _normalize(self, text: str) -> str:
        # NFC: conserva å/ä/ö (las keywords suecas los necesitan)
        normalized = unicodedata.normalize("NFC", text or "")
        return re.sub(r"\s+", " ", normalized).strip().lower()

    def _clause_start(self, text: str, position: int) -> int:
        start = 0
        for boundary in re.finditer(self.CLAUSE_BOUNDARY, text[:position], flags=re.IGNORECASE):
            start = boundary.end()
        return start

    def _is_negated(self, text: str, match: re.Match) -> bool:
        start = max(self._clause_start(text, match.start()), match.start() - self.NEGATION_WINDOW)
        window = text[start:match.start()]
        for neg_pattern in self.NEGATION_PATTERNS:
            if re.search(neg_pattern, window, flags=re.IGNORECASE):
                return True
        return False

    def _find_evidence(self, feature: str, texts: list[str]) -> Optional[str]:
        # Basta una mención no negada ('ingen parkering på gatan, parkering i garage')
        for text in texts:
            for pattern in self.FEATURE_PATTERNS[feature]:
                for match in re.finditer(pattern, text, flags=re.IGNORECASE):
                    if not self._is_negated(text, match):
                        return text
        return None

    def _amenity_texts(self, raw_features: Any) -> list[str]:
        if not raw_features:
            return []
        if isinstance(raw_features, str):
            raw_features = [raw_features]
        if not isinstance(raw_features, Iterable):
            return []
        return [self._normalize(str(item)) for item in raw_features if item]

    def detect_features(self, raw_features: Any) -> dict[str, bool]:
        """Flags booleanos de amenities a partir de la lista de características."""
        texts = self._amenity_texts(raw_features)
        return {
            feature: self._find_evidence(feature, texts) is not None
            for feature in self.FEATURE_PATTERNS
        }

    def detect_with_evidence(self, raw_features: Any) -> dict[str, dict]:
        """
        Detecta amenities y devuelve el texto que disparó cada una.

        Returns:
            {
                "balcony": {"value": True/False, "matched_text": "..."},
                ...
            }
        """
        texts = self._amenity_texts(raw_features)
        results: dict[str, dict] = {}
        for feature in self.FEATURE_PATTERNS:
            evidence = self._find_evidence(feature, texts)
            results[feature] = {
                "value": evidence is not None,
                "matched_text": evidence,
            }
        return results

    def extract(self, property_row: Mapping[str, Any]) -> dict[str, Any]:
        """
        Construye los valores de features de una propiedad guardada.

        Args:
            property_row: Fila de 'saved_properties'

        Returns:
            Dict feature_id -> valor (int para numéricas, bool para amenities)
        """
        values: dict[str, Any] = {
            feature_id: parse_leading_int(property_row.get(column))
            for feature_id, column in self.NUMERIC_COLUMNS.items()
        }
        values.update(self.detect_features(property_row.get("features")))

        logger.debug(
            "Features extraídas",
            property_id=property_row.get("id"),
            amenities=[k for k, v in values.items() if v is True],
        )
        return values
