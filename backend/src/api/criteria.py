"""API endpoints for criteria parsing, display and record normalization."""

import logging
import math
from datetime import datetime
from typing import Any, List

from fastapi import APIRouter, HTTPException

from src.common.schemas import (
    CriteriaInfo,
    FieldErrorSchema,
    NormalizationSummarySchema,
    NormalizeRequest,
    NormalizeResponse,
    PresentRequest,
    PresentResponse,
    SanitizeRequest,
    SanitizeResponse,
)
from src.criteria import (
    CRITERIA,
    Criteria,
    CriteriaError,
    DateCriteria,
    FieldNormalizationError,
    MeasuredCriteria,
    RecordingRenderer,
    UnknownCriteria,
    get_criteria,
)
from src.normalization import FieldNormalizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/criteria", tags=["criteria"])


def _json_safe(value: Any) -> Any:
    """Non-finite floats have no JSON form; report them as null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _lookup(name: str) -> Criteria:
    try:
        return get_criteria(name)
    except UnknownCriteria as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/", response_model=List[CriteriaInfo])
def list_criteria() -> List[CriteriaInfo]:
    """List registered criteria with their accepted units."""
    result = []
    for name, criteria in sorted(CRITERIA.items()):
        units = []
        if isinstance(criteria, MeasuredCriteria):
            units = list(criteria.units)
        result.append(CriteriaInfo(name=name, sanitizes=criteria.sanitizes, units=units))
    return result


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(request: NormalizeRequest) -> NormalizeResponse:
    """Normalize a batch of records.

    Args:
        request: Records keyed by field name, optional fail-fast override

    Returns:
        Records with canonical values and the pass summary
    """
    records = [dict(r) for r in request.records]
    normalizer = FieldNormalizer(fail_fast=request.fail_fast)
    try:
        summary = normalizer.normalize_records(records)
    except FieldNormalizationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return NormalizeResponse(
        records=[{k: _json_safe(v) for k, v in r.items()} for r in records],
        summary=NormalizationSummarySchema(
            total_records=summary.total_records,
            fields_normalized=summary.fields_normalized,
            failed_fields=summary.failed_fields,
            errors=[
                FieldErrorSchema(
                    record_index=err.record_index,
                    field=err.field,
                    value=err.value,
                    error=str(err.cause),
                )
                for err in summary.errors
            ],
        ),
    )


@router.post("/{name}/sanitize", response_model=SanitizeResponse)
def sanitize(name: str, request: SanitizeRequest) -> SanitizeResponse:
    """Parse raw text with the named criteria."""
    criteria = _lookup(name)
    if not criteria.sanitizes:
        raise HTTPException(status_code=400, detail=f"Criteria '{name}' does not sanitize")
    try:
        value = criteria.sanitize(request.text)
    except CriteriaError as e:
        logger.info(f"Rejected {name} input {request.text!r}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return SanitizeResponse(name=name, value=_json_safe(value))


@router.post("/{name}/present", response_model=PresentResponse)
def present(name: str, request: PresentRequest) -> PresentResponse:
    """Render a canonical value with the named criteria."""
    criteria = _lookup(name)
    value = request.value
    if isinstance(criteria, DateCriteria) and not isinstance(value, (str, datetime)):
        raise HTTPException(
            status_code=400,
            detail=f"Cannot present {value!r} as {name}: expected an ISO date string"
        )
    try:
        if isinstance(criteria, DateCriteria) and isinstance(value, str):
            value = datetime.fromisoformat(value)
        target = RecordingRenderer()
        criteria.present(value, target)
    except (TypeError, ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=f"Cannot present {value!r} as {name}: {e}")
    return PresentResponse(name=name, text=target.text, background_color=target.background_color)
