"""Cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation token through the canonical
``llm_unify.base.cancellation`` import path while the implementation lives
under ``cancellation_parts``.

Notes
-----
- One token is owned by each completion engine and shared by all of its
  outstanding calls.
- Observing a cancelled token raises :class:`~llm_unify.base.errors.AbortError`.
"""

from .cancellation_parts.cancellation_token import CancellationToken
from .errors import AbortError

__all__ = ["CancellationToken", "AbortError"]
