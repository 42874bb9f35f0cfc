"""Pydantic schemas for API requests and responses"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# Request Schemas

class SanitizeRequest(BaseModel):
    """Raw field text to parse"""
    text: str = Field(..., max_length=1000)


class PresentRequest(BaseModel):
    """Canonical value to render"""
    value: Any


class NormalizeRequest(BaseModel):
    """Records to normalize in one pass"""
    records: List[Dict[str, Any]]
    fail_fast: Optional[bool] = None


# Response Schemas

class CriteriaInfo(BaseModel):
    """Registered criteria description"""
    name: str
    sanitizes: bool
    units: List[str] = Field(default_factory=list)


class SanitizeResponse(BaseModel):
    """Canonical value produced by a criteria"""
    name: str
    value: Any


class PresentResponse(BaseModel):
    """What a criteria wrote to its rendering target"""
    name: str
    text: Optional[str] = None
    background_color: Optional[str] = None


class FieldErrorSchema(BaseModel):
    """Single field that could not be sanitized"""
    record_index: int
    field: str
    value: Any
    error: str


class NormalizationSummarySchema(BaseModel):
    """Counts for a normalization pass"""
    total_records: int
    fields_normalized: int
    failed_fields: int
    errors: List[FieldErrorSchema]


class NormalizeResponse(BaseModel):
    """Normalized records with pass summary"""
    records: List[Dict[str, Any]]
    summary: NormalizationSummarySchema
