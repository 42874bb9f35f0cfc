"""Criteria registry: per-type parsing and display of field values."""

from .criteria import (
    Criteria,
    ColorCriteria,
    DateCriteria,
    DistanceCriteria,
    DurationCriteria,
    ElementCriteria,
    LetterCriteria,
    MassCriteria,
    MeasuredCriteria,
    NumberCriteria,
)
from .exceptions import (
    CriteriaError,
    ParseMismatch,
    UnknownUnit,
    UnknownTimeUnit,
    InvalidNumericText,
    UnknownCriteria,
    FieldNormalizationError,
)
from .registry import CRITERIA, UNIT_TABLES, build_registry, get_criteria, criteria_names
from .renderer import Renderer, RecordingRenderer
from .units import UnitTables, UnitFactor

__all__ = [
    'Criteria',
    'ColorCriteria',
    'DateCriteria',
    'DistanceCriteria',
    'DurationCriteria',
    'ElementCriteria',
    'LetterCriteria',
    'MassCriteria',
    'MeasuredCriteria',
    'NumberCriteria',
    'CriteriaError',
    'ParseMismatch',
    'UnknownUnit',
    'UnknownTimeUnit',
    'InvalidNumericText',
    'UnknownCriteria',
    'FieldNormalizationError',
    'CRITERIA',
    'UNIT_TABLES',
    'build_registry',
    'get_criteria',
    'criteria_names',
    'Renderer',
    'RecordingRenderer',
    'UnitTables',
    'UnitFactor',
]
