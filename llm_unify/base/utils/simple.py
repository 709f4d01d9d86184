"""Convenience helpers for one-shot completions.

``complete`` sends a single prompt without keeping the engine around; it is
the programmatic counterpart of a one-line CLI call.
"""
from __future__ import annotations

from typing import Any


def complete(prompt: str, **options: Any) -> Any:
    """Send ``prompt`` as a single user message and return the result.

    ``options`` are the usual request options (``service``, ``model``,
    ``stream``, ``extended``...). The return type follows the engine's
    ``stream``/``extended`` dispatch.
    """
    # imported lazily: the engine depends on this package
    from ...engine.completion import CompletionEngine

    if not isinstance(prompt, str) or not prompt.strip():
        raise ValueError("prompt must be a non-empty string")
    return CompletionEngine(prompt, **options).send()


__all__ = ["complete"]
