"""Token accounting helpers."""

from .extraction import coerce_int, usage_from_mapping

__all__ = ["coerce_int", "usage_from_mapping"]
