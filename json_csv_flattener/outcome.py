from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification carried by every conversion/validation result."""
    NONE = "none"
    EMPTY_JSON = "empty_json"
    INVALID_JSON = "invalid_json"
    NESTED_STRUCTURE_NOT_SUPPORTED = "nested_structure_not_supported"
    TOO_LARGE = "too_large"
    CONVERSION_ERROR = "conversion_error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ConversionOutcome:
    success: bool
    csv: Optional[str] = None
    error: Optional[str] = None
    error_kind: ErrorKind = ErrorKind.NONE
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def succeeded(cls, csv: str) -> "ConversionOutcome":
        return cls(success=True, csv=csv)

    @classmethod
    def failed(cls, message: str, kind: ErrorKind) -> "ConversionOutcome":
        return cls(success=False, error=message, error_kind=kind)


class ConversionFailure(Exception):
    """Base for failures that map onto a single ErrorKind.

    Raised inside the pipeline and turned into a failed ConversionOutcome at
    the public entry points.
    """

    kind = ErrorKind.CONVERSION_ERROR

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_outcome(self) -> ConversionOutcome:
        return ConversionOutcome.failed(self.message, self.kind)


class ValidationError(ConversionFailure):
    kind = ErrorKind.INVALID_JSON


class UnsupportedShapeError(ConversionFailure):
    kind = ErrorKind.INVALID_JSON


class ColumnLimitError(ConversionFailure):
    kind = ErrorKind.CONVERSION_ERROR


class RowLimitError(ConversionFailure):
    kind = ErrorKind.CONVERSION_ERROR
