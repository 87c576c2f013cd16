"""
Shared module for Hotel Search.

Provides:
- Unified exception hierarchy
- Async utilities for batched backend calls
"""

from .async_utils import (
    batch_process,
    chunked,
    gather_with_errors,
)
from .exceptions import (
    BackendError,
    BackendUnavailableError,
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    HotelSearchError,
    IndexingError,
    InvalidParameterError,
    InvalidQueryError,
    PartialIndexFailureError,
    ValidationError,
    is_retryable_error,
)

__all__ = [
    # Exceptions
    "HotelSearchError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    "BackendError",
    "BackendUnavailableError",
    "ValidationError",
    "InvalidQueryError",
    "InvalidParameterError",
    "IndexingError",
    "PartialIndexFailureError",
    "ConfigurationError",
    "is_retryable_error",
    # Async utilities
    "gather_with_errors",
    "chunked",
    "batch_process",
]
