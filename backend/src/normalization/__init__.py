"""Normalization module for record fields."""

from .normalizer import (
    FieldNormalizer,
    NormalizationSummary,
    normalize_records,
)

__all__ = [
    'FieldNormalizer',
    'NormalizationSummary',
    'normalize_records',
]
