"""Local error taxonomy for slr-filter.

The numeric core degrades to empty results instead of raising; the types here
cover the edges (ephemeris loading, configuration) and give downstream
applications a small, stable envelope they can translate into their own
error formats.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    INVALID_DATA = "INVALID_DATA"
    INVALID_CONFIG = "INVALID_CONFIG"
    EPHEMERIS_UNAVAILABLE = "EPHEMERIS_UNAVAILABLE"
    EMPTY_RESULT = "EMPTY_RESULT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ErrorType
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


def make_error(error_type: ErrorType, message: str, **context: Any) -> ErrorEnvelope:
    return ErrorEnvelope(type=error_type, message=message, context=dict(context))


class EphemerisLoadError(Exception):
    """Raised when a CPF ephemeris file cannot be read or parsed.

    Attributes:
        path: The file that failed to load.
        reason: Short human-readable cause.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load ephemeris {path}: {reason}")


class ConfigError(ValueError):
    """Raised when a pipeline configuration cannot be loaded or validated."""
