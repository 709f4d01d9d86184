"""Safe accessors for loosely typed wire payloads.

Adapter parse functions must never raise on missing or mistyped fields. These
helpers walk nested dicts/lists and return a default instead of raising.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional


def dig(data: Any, *path: Any, default: Any = None) -> Any:
    """Return ``data[p0][p1]...`` or ``default`` when any step is missing.

    String steps index mappings; integer steps index lists (negative indices
    allowed).
    """
    cur = data
    for step in path:
        if isinstance(step, int) and isinstance(cur, list):
            if -len(cur) <= step < len(cur):
                cur = cur[step]
                continue
            return default
        if isinstance(cur, dict) and step in cur:
            cur = cur[step]
            continue
        return default
    return default if cur is None else cur


def dig_str(data: Any, *path: Any) -> str:
    """Like :func:`dig` but only returns non-empty strings (else ``""``)."""
    val = dig(data, *path)
    return val if isinstance(val, str) else ""


def dig_list(data: Any, *path: Any) -> List[Any]:
    """Like :func:`dig` but only returns lists (else ``[]``)."""
    val = dig(data, *path)
    return val if isinstance(val, list) else []


def dicts(items: Iterable[Any]) -> Iterable[dict]:
    """Yield only the mapping items of ``items``."""
    return (i for i in items if isinstance(i, dict))


def join_url(base: Optional[str], path: str) -> str:
    """Join ``base`` and ``path`` with exactly one slash between them."""
    base = (base or "").rstrip("/")
    path = path.lstrip("/")
    return f"{base}/{path}" if path else base


def to_datetime(value: Any) -> Optional[datetime]:
    """Parse epoch seconds or an ISO-8601 string; ``None`` when unparseable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        # fromisoformat rejects more than six fractional digits (Go timestamps)
        text = re.sub(r"(\.\d{6})\d+", r"\1", text)
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


__all__ = ["dig", "dig_str", "dig_list", "dicts", "join_url", "to_datetime"]
