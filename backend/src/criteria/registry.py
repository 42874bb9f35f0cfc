"""Process-wide criteria registry."""

from datetime import datetime
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from src.common.config import settings
from src.criteria.criteria import (
    ColorCriteria,
    Criteria,
    DateCriteria,
    DistanceCriteria,
    DurationCriteria,
    ElementCriteria,
    LetterCriteria,
    MassCriteria,
    NumberCriteria,
)
from src.criteria.exceptions import UnknownCriteria
from src.criteria.units import UnitTables


def build_registry(
    unit_tables: UnitTables,
    clock: Optional[Callable[[], datetime]] = None
) -> Mapping[str, Criteria]:
    """Build a read-only name -> criteria mapping.

    Args:
        unit_tables: Tables backing the measured criteria
        clock: Current-time source for relative dates (defaults to datetime.now)

    Returns:
        Immutable mapping keyed by criteria name
    """
    criteria = (
        ColorCriteria(),
        DateCriteria(clock),
        DistanceCriteria(unit_tables),
        DurationCriteria(),
        ElementCriteria(),
        LetterCriteria(),
        MassCriteria(unit_tables),
        NumberCriteria(),
    )
    return MappingProxyType({c.name: c for c in criteria})


UNIT_TABLES = UnitTables(settings.criteria.unit_tables_path)
CRITERIA = build_registry(UNIT_TABLES)


def get_criteria(name: str, registry: Mapping[str, Criteria] = CRITERIA) -> Criteria:
    """Look up a criteria by name.

    Raises:
        UnknownCriteria: If nothing is registered under `name`
    """
    try:
        return registry[name]
    except KeyError:
        raise UnknownCriteria(name) from None


def criteria_names(registry: Mapping[str, Criteria] = CRITERIA) -> List[str]:
    return sorted(registry)
