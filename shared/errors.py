"""
Shared error handling for the Exclusion Rules service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class ExclusionsException(Exception):
    """Base exception for the Exclusion Rules service."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidRuleError(ExclusionsException):
    """A stored rule cannot be compiled (e.g. it has no values)."""

    def __init__(self, message: str = "Invalid exclusion rule", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_RULE", message, details)


class UnknownFieldError(ExclusionsException):
    """A rule references a field the record does not have."""

    def __init__(self, field_name: str, record_type: str, details: Optional[Dict[str, Any]] = None):
        details = {"field_name": field_name, "record_type": record_type, **(details or {})}
        super().__init__("UNKNOWN_FIELD", f"Unknown field '{field_name}' on {record_type}", details)
        self.field_name = field_name
        self.record_type = record_type


class RuleStoreError(ExclusionsException):
    """Rule store errors."""

    def __init__(self, store: str, message: str = "Rule store error", details: Optional[Dict[str, Any]] = None):
        super().__init__("RULE_STORE_ERROR", f"{store}: {message}", details)
