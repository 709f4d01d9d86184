"""
Concrete error kinds raised by the unification layer.

Each kind is a :class:`ProviderError` with a fixed :class:`ErrorCode` family so
callers can either catch the specific kind or the shared base:

- ``ConfigurationError``: missing credential, unknown service, bad options.
  Raised before any network I/O.
- ``TransportError``: non-2xx HTTP status or network failure. Carries the HTTP
  status when one was received.
- ``AbortError``: the engine's cancellation token fired. Kept separate from
  transport failures so user-initiated cancellation can be handled
  differently.
- ``DecodeError``: unparseable trailing bytes when a stream ends.
- ``UnknownModelError``: a catalog entry has no price table match. Also a
  builtin :class:`LookupError`.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ConfigurationError(ProviderError):
    """Raised for missing credentials or malformed options."""

    def __init__(
        self,
        message: str,
        *,
        provider: str = "-",
        model: Optional[str] = None,
        code: ErrorCode = ErrorCode.CONFIGURATION,
    ) -> None:
        super().__init__(code=code, message=message, provider=provider, model=model)


class TransportError(ProviderError):
    """Raised when the HTTP exchange fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        provider: str = "-",
        model: Optional[str] = None,
        status_code: Optional[int] = None,
        code: ErrorCode = ErrorCode.UNKNOWN,
        retryable: bool = False,
        raw: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=retryable,
            raw=raw,
        )
        self.status_code = status_code


class AbortError(ProviderError):
    """Raised when a request or stream is cancelled through the engine token."""

    def __init__(
        self,
        message: str = "request aborted",
        *,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> None:
        super().__init__(code=ErrorCode.CANCELLED, message=message, provider=provider, model=model)


class DecodeError(ProviderError):
    """Raised when trailing stream bytes cannot be parsed at end of stream."""

    def __init__(
        self,
        message: str,
        *,
        provider: str = "-",
        model: Optional[str] = None,
        remainder: str = "",
    ) -> None:
        super().__init__(code=ErrorCode.DECODE, message=message, provider=provider, model=model)
        self.remainder = remainder


class UnknownModelError(ProviderError, LookupError):
    """Raised by catalog enrichment when a model has no price entry."""

    def __init__(self, message: str, *, provider: str = "-", model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.UNKNOWN_MODEL, message=message, provider=provider, model=model)


__all__ = [
    "ConfigurationError",
    "TransportError",
    "AbortError",
    "DecodeError",
    "UnknownModelError",
]
