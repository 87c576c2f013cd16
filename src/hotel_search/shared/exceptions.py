"""
Unified Exception Hierarchy for Hotel Search.

Exception Hierarchy:
    HotelSearchError (base)
    ├── BackendError
    │   └── BackendUnavailableError
    ├── ValidationError
    │   ├── InvalidQueryError
    │   └── InvalidParameterError
    ├── IndexingError
    │   └── PartialIndexFailureError
    └── ConfigurationError

Only the backend call and ingestion can fail at runtime. Classification and
query building are total functions and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    WARNING = auto()  # Recoverable, can continue
    ERROR = auto()  # Failed, caller may retry
    CRITICAL = auto()  # Cannot continue
    TRANSIENT = auto()  # Temporary backend condition


class ErrorCategory(Enum):
    """Categories for error classification."""

    BACKEND = "backend"
    VALIDATION = "validation"
    INDEXING = "indexing"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""

    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def merged(self, **changes: Any) -> ErrorContext:
        """Return a copy with ``changes`` applied over unset fields."""
        values = {
            "operation": self.operation,
            "input_value": self.input_value,
            "suggestion": self.suggestion,
            "metadata": dict(self.metadata),
        }
        for key, value in changes.items():
            if key == "metadata":
                values["metadata"].update(value)
            elif values.get(key) is None:
                values[key] = value
        return ErrorContext(**values)


class HotelSearchError(Exception):
    """
    Base exception for all Hotel Search errors.

    Provides:
    - Structured error context
    - Severity classification
    - Retry guidance (the engine itself never retries)
    - Agent-friendly formatting
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.BACKEND,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "type": type(self).__name__,
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.operation:
            result["operation"] = self.context.operation
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        if self.context.metadata:
            result["details"] = self.context.metadata
        return result

    def to_agent_message(self) -> str:
        """Format for Agent consumption (Markdown)."""
        parts = [f"❌ **Error**: {self}"]
        if self.context.suggestion:
            parts.append(f"💡 **Suggestion**: {self.context.suggestion}")
        if self.retryable:
            parts.append("🔄 This error is retryable")
        return "\n".join(parts)


# =============================================================================
# Backend Errors
# =============================================================================


class BackendError(HotelSearchError):
    """Base class for search-backend errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.BACKEND,
            retryable=retryable,
        )


class BackendUnavailableError(BackendError):
    """Raised for network failures, timeouts, HTTP errors and missing indices."""

    def __init__(
        self,
        message: str = "Search backend unavailable",
        *,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(
            suggestion="Check that the search backend is reachable and the hotel indices exist",
            metadata={"status_code": status_code} if status_code is not None else {},
        )
        super().__init__(message, context=ctx, retryable=True)
        self.status_code = status_code
        self.severity = ErrorSeverity.TRANSIENT


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(HotelSearchError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


class InvalidQueryError(ValidationError):
    """Raised when a search query is empty or whitespace only."""

    def __init__(
        self,
        query: str | None,
        reason: str = "Query cannot be empty",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(
            input_value=query,
            suggestion="Provide a hotel name, city, country, brand or hotel code",
        )
        super().__init__(f"Invalid query: {reason}", context=ctx)


class InvalidParameterError(ValidationError):
    """Raised when a parameter value is invalid."""

    def __init__(
        self,
        param_name: str,
        value: Any,
        expected: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(
            input_value=value,
            suggestion=f"Expected {expected}",
        )
        super().__init__(
            f"Invalid parameter '{param_name}': {value!r} (expected {expected})",
            context=ctx,
        )
        self.param_name = param_name


# =============================================================================
# Indexing Errors
# =============================================================================


class IndexingError(HotelSearchError):
    """Base class for ingestion errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.INDEXING,
            retryable=False,
        )


class PartialIndexFailureError(IndexingError):
    """Some documents of one or more bulk batches were rejected."""

    def __init__(
        self,
        rejected: int,
        submitted: int,
        *,
        reasons: list[str] | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(
            operation="bulk_index",
            metadata={"rejected": rejected, "submitted": submitted, "reasons": (reasons or [])[:10]},
        )
        super().__init__(f"{rejected} of {submitted} documents were rejected", context=ctx)
        self.rejected = rejected
        self.submitted = submitted


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HotelSearchError):
    """Raised for configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


def is_retryable_error(error: Exception) -> bool:
    """Check if a caller may reasonably retry after ``error``."""
    if isinstance(error, HotelSearchError):
        return error.retryable

    error_str = str(error).lower()
    transient_patterns = [
        "timeout",
        "timed out",
        "connection reset",
        "connection refused",
        "service unavailable",
        "too many requests",
    ]
    return any(pattern in error_str for pattern in transient_patterns)
