"""Ordered model-name variants tried when an exact price lookup misses.

Service catalogs and the price snapshot rarely agree on naming
(``grok-3`` vs ``grok-3-latest``, ``gemini-2.0-flash-exp`` vs
``gemini-2.0-flash``). The variants below are tried in a fixed order that
prefers dated or aliased releases before experimental forms. The list is a
heuristic: stripping ``-preview`` may land on a differently priced model.
"""
from __future__ import annotations

from typing import List

# longest first so "-thinking-exp" is not cut down to "-thinking"
_EXPERIMENTAL_SUFFIXES = ("-experimental", "-thinking-exp", "-preview", "-exp")


def _strip(model: str, suffix: str) -> str:
    return model[: -len(suffix)] if model.endswith(suffix) and len(model) > len(suffix) else ""


def candidate_models(service: str, model: str) -> List[str]:
    """Return the fallback variants for ``model`` in lookup order (deduplicated)."""
    variants = [
        f"{model}-latest",
        f"{model}-beta",
        f"{service}/{model}",
        f"{service}/{model}-beta",
        _strip(model, "-beta"),
        _strip(model, "-thinking"),
    ]
    variants.extend(_strip(model, s) for s in _EXPERIMENTAL_SUFFIXES)
    seen = {model}
    out: List[str] = []
    for v in variants:
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out


__all__ = ["candidate_models"]
