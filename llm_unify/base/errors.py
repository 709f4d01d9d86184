"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_unify.base.errors_parts`` to keep a single stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.kinds import (
    AbortError,
    ConfigurationError,
    DecodeError,
    TransportError,
    UnknownModelError,
)
from .errors_parts.classification import classify_exception, classify_status, is_retryable

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "AbortError",
    "DecodeError",
    "UnknownModelError",
    "classify_exception",
    "classify_status",
    "is_retryable",
]
