"""Token usage extraction helpers.

Centralizes best-effort extraction of token counts from wire payloads. Each
adapter names the two fields its service uses; the helpers coerce the values
and return ``None`` when the payload carries no usage at all, which is
distinct from a usage report of zero.

Failure Modes
-------------
* Missing container or fields -> ``None``
* Non-integer / negative values -> treated as missing
"""

from __future__ import annotations

from typing import Any, Optional

from ..models import TokenUsage


def coerce_int(value: Any) -> Optional[int]:
    """Convert ``value`` to a non-negative int or return ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        out = int(value)
    except (TypeError, ValueError):
        return None
    return out if out >= 0 else None


def usage_from_mapping(
    container: Any,
    input_key: str = "input_tokens",
    output_key: str = "output_tokens",
    *,
    require_both: bool = False,
) -> Optional[TokenUsage]:
    """Build a :class:`TokenUsage` from ``container[input_key]``/``[output_key]``.

    Returns ``None`` when ``container`` is not a mapping, when neither count is
    present, or (with ``require_both``) when either count is missing.
    """
    if not isinstance(container, dict):
        return None
    inp = coerce_int(container.get(input_key))
    out = coerce_int(container.get(output_key))
    if inp is None and out is None:
        return None
    if require_both and (inp is None or out is None):
        return None
    return TokenUsage(input_tokens=inp or 0, output_tokens=out or 0)


__all__ = ["coerce_int", "usage_from_mapping"]
