"""Custom exceptions for criteria parsing and field normalization"""
from typing import Any, Optional


class CriteriaError(Exception):
    """Base exception for criteria errors"""
    pass


class ParseMismatch(CriteriaError):
    """Raised when text does not match the form a criteria expects"""
    pass


class UnknownUnit(CriteriaError):
    """Raised when a unit token is absent from its conversion table"""

    def __init__(self, unit: str, domain: str):
        self.unit = unit
        self.domain = domain
        super().__init__(f"Unit '{unit}' not found in {domain} table")


class UnknownTimeUnit(CriteriaError):
    """Raised when a time-unit token has no known duration"""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown time unit '{token}'")


class InvalidNumericText(CriteriaError):
    """Raised when the numeric part of a measurement holds no digits"""
    pass


class UnknownCriteria(CriteriaError):
    """Raised when no criteria is registered under a name"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No criteria registered for '{name}'")


class FieldNormalizationError(CriteriaError):
    """Raised (or collected) when sanitizing a single record field fails"""

    def __init__(self, record_index: int, field: str, value: Any, cause: Optional[Exception] = None):
        self.record_index = record_index
        self.field = field
        self.value = value
        self.cause = cause
        super().__init__(
            f"Record {record_index}, field '{field}': cannot sanitize {value!r}: {cause}"
        )
