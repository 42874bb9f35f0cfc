"""Unit conversion tables for measured criteria."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from src.criteria.exceptions import UnknownUnit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitFactor:
    """Multiplier converting one unit into its domain's base unit."""
    factor: float
    source: str


class UnitTables:
    """Read-only per-domain unit tables loaded from a JSON file."""

    def __init__(self, unit_tables_path):
        """Load unit tables.

        Args:
            unit_tables_path: Path to unit_tables.json
        """
        self.unit_tables_path = Path(unit_tables_path)
        self._load_unit_tables()

    def _load_unit_tables(self) -> None:
        """Load tables from JSON and freeze them."""
        with open(self.unit_tables_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)

        self._base_units: Dict[str, str] = {}
        tables: Dict[str, Mapping[str, UnitFactor]] = {}
        for domain, data in raw.items():
            base_unit = data['base_unit']
            table = {base_unit: UnitFactor(factor=1.0, source="Base unit")}
            for unit, info in data['conversions'].items():
                table[unit] = UnitFactor(factor=float(info['factor']), source=info['source'])
            self._base_units[domain] = base_unit
            tables[domain] = MappingProxyType(table)

        self._tables = MappingProxyType(tables)
        logger.debug(f"Loaded unit tables for {list(self._tables)} from {self.unit_tables_path}")

    def table(self, domain: str) -> Mapping[str, UnitFactor]:
        """Get the read-only table for a domain.

        Raises:
            KeyError: If the domain has no table
        """
        return self._tables[domain]

    def get_factor(self, domain: str, unit: str) -> float:
        """Get the factor converting one `unit` into the domain's base unit.

        Raises:
            UnknownUnit: If the unit is not in the domain table
        """
        entry = self._tables[domain].get(unit)
        if entry is None:
            raise UnknownUnit(unit, domain)
        return entry.factor

    def convert(self, value: float, unit: str, domain: str) -> float:
        """Convert `value` expressed in `unit` to the domain's base unit."""
        return value * self.get_factor(domain, unit)

    def base_unit(self, domain: str) -> str:
        return self._base_units[domain]

    def supported_units(self, domain: Optional[str] = None) -> Dict[str, List[str]]:
        """Get all supported units, optionally filtered by domain."""
        if domain:
            if domain not in self._tables:
                return {}
            return {domain: list(self._tables[domain])}
        return {name: list(table) for name, table in self._tables.items()}
