"""DTO controlling price lookup tolerance and catalog filtering."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class QualityFilter(BaseModel):
    """Lookup and catalog options.

    Attributes
    ----------
    allow_similar:
        Permit the ordered suffix/prefix fallback when a model has no exact
        price entry.
    allow_unknown:
        Let catalog enrichment synthesize a zero-cost entry instead of raising
        ``UnknownModelError``.
    """

    model_config = ConfigDict(frozen=True)

    allow_similar: bool = False
    allow_unknown: bool = False


__all__ = ["QualityFilter"]
