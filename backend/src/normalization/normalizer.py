"""Field normalizer: rewrite record fields into canonical values."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, MutableMapping, Optional, Tuple

import polars as pl

from src.common.config import settings
from src.criteria import CRITERIA, Criteria, FieldNormalizationError

logger = logging.getLogger(__name__)


@dataclass
class NormalizationSummary:
    """Summary of a normalization pass."""
    total_records: int = 0
    fields_normalized: int = 0
    failed_fields: int = 0
    errors: List[FieldNormalizationError] = field(default_factory=list)


class FieldNormalizer:
    """Replaces raw field text with canonical values, one criteria per field name."""

    def __init__(
        self,
        registry: Mapping[str, Criteria] = CRITERIA,
        fail_fast: Optional[bool] = None
    ):
        """Initialize normalizer.

        Args:
            registry: Mapping of field name to criteria
            fail_fast: Abort on the first failing field instead of recording it
                (defaults to settings.criteria.fail_fast)
        """
        self.registry = registry
        self.fail_fast = settings.criteria.fail_fast if fail_fast is None else fail_fast

    def _sanitizer_for(self, field_name: str) -> Optional[Criteria]:
        criteria = self.registry.get(field_name)
        if criteria is None or not criteria.sanitizes:
            return None
        return criteria

    def _sanitize(
        self,
        criteria: Criteria,
        record_index: int,
        field_name: str,
        value: Any,
        summary: NormalizationSummary
    ) -> Tuple[bool, Any]:
        """Sanitize one value, applying the error policy.

        Returns:
            (succeeded, canonical value or the untouched raw value)

        Raises:
            FieldNormalizationError: On failure when fail_fast is set
        """
        try:
            result = criteria.sanitize(value)
        except Exception as e:
            error = FieldNormalizationError(record_index, field_name, value, e)
            if self.fail_fast:
                logger.error(str(error))
                raise error from e
            logger.warning(str(error))
            summary.failed_fields += 1
            summary.errors.append(error)
            return False, value
        summary.fields_normalized += 1
        return True, result

    def normalize_record(
        self,
        record: MutableMapping[str, Any],
        record_index: int = 0,
        summary: Optional[NormalizationSummary] = None
    ) -> NormalizationSummary:
        """Normalize matching fields of a single record in place."""
        summary = summary if summary is not None else NormalizationSummary()
        summary.total_records += 1
        for field_name in list(record.keys()):
            criteria = self._sanitizer_for(field_name)
            if criteria is None:
                continue
            succeeded, value = self._sanitize(
                criteria, record_index, field_name, record[field_name], summary
            )
            if succeeded:
                record[field_name] = value
        return summary

    def normalize_records(self, records: List[MutableMapping[str, Any]]) -> NormalizationSummary:
        """Normalize every record in place.

        Args:
            records: Records keyed by field name

        Returns:
            NormalizationSummary with counts and collected errors

        Raises:
            FieldNormalizationError: On the first failure when fail_fast is set
        """
        summary = NormalizationSummary()
        for idx, record in enumerate(records):
            self.normalize_record(record, idx, summary)

        logger.info(
            f"Normalized {summary.fields_normalized} fields across "
            f"{summary.total_records} records ({summary.failed_fields} failed)"
        )
        return summary

    def normalize_frame(self, df: pl.DataFrame) -> Tuple[pl.DataFrame, NormalizationSummary]:
        """Normalize every column named after a sanitizing criteria.

        Failed cells become null unless fail_fast is set. Nulls pass through.

        Returns:
            (new DataFrame, NormalizationSummary)
        """
        summary = NormalizationSummary(total_records=df.height)
        columns = []
        for column in df.columns:
            criteria = self._sanitizer_for(column)
            if criteria is None:
                continue
            values = []
            for idx, value in enumerate(df[column].to_list()):
                if value is None:
                    values.append(None)
                    continue
                succeeded, result = self._sanitize(criteria, idx, column, value, summary)
                values.append(result if succeeded else None)
            columns.append(pl.Series(column, values, dtype=criteria.dtype))

        logger.info(
            f"Normalized {len(columns)} columns over {df.height} rows "
            f"({summary.failed_fields} failed cells)"
        )
        return (df.with_columns(columns) if columns else df.clone()), summary


def normalize_records(
    records: List[MutableMapping[str, Any]],
    registry: Mapping[str, Criteria] = CRITERIA,
    fail_fast: Optional[bool] = None
) -> NormalizationSummary:
    """Normalize `records` in place against `registry`."""
    return FieldNormalizer(registry, fail_fast).normalize_records(records)
