"""
ModelInfo DTO for service model catalogs.

Each adapter's ``parse_model`` maps one raw catalog record into a
`ModelInfo`; the catalog step then enriches it with the matching
:class:`PriceEntry` fields.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .price_entry import PriceEntry


@dataclass(frozen=True)
class ModelInfo:
    """A single catalog entry.

    Attributes:
        service: Service key owning this model.
        model: Model identifier used in requests.
        name: Human-friendly display name (falls back to ``model``).
        created: Creation/modification time when the catalog reports one.
        raw: Original catalog record.
        mode, max_tokens, ...: Price table fields after enrichment.
    """

    service: str
    model: str
    name: Optional[str] = None
    created: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)
    mode: str = "chat"
    max_tokens: int = 0
    max_input_tokens: int = 0
    max_output_tokens: int = 0
    input_cost_per_token: float = 0.0
    output_cost_per_token: float = 0.0
    output_cost_per_reasoning_token: float = 0.0
    supports_reasoning: bool = False
    supported_modalities: Tuple[str, ...] = field(default_factory=tuple)
    priced: bool = False

    def with_price(self, entry: PriceEntry, *, priced: bool = True) -> "ModelInfo":
        """Return a copy carrying the limits and costs of ``entry``."""
        return replace(
            self,
            mode=entry.mode or self.mode,
            max_tokens=entry.max_tokens,
            max_input_tokens=entry.max_input_tokens,
            max_output_tokens=entry.max_output_tokens,
            input_cost_per_token=entry.input_cost_per_token,
            output_cost_per_token=entry.output_cost_per_token,
            output_cost_per_reasoning_token=entry.output_cost_per_reasoning_token,
            supports_reasoning=entry.supports_reasoning,
            supported_modalities=entry.supported_modalities,
            priced=priced,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("raw", None)
        data["created"] = self.created.isoformat() if self.created else None
        data["supported_modalities"] = list(self.supported_modalities)
        return data


__all__ = ["ModelInfo"]
