"""
Extracción de valores de features de propiedades.
"""

from hemmatch.extraction.feature_extractor import KeywordFeatureExtractor, parse_leading_int

__all__ = [
    "KeywordFeatureExtractor",
    "parse_leading_int",
]
