"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_unify.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .kinds import AbortError, ConfigurationError, DecodeError, TransportError, UnknownModelError
from .classification import classify_exception, classify_status, is_retryable

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
