"""
PriceEntry DTO for the price table.

Normalizes one record of a litellm-style ``model_prices_and_context_window``
document. Missing numeric fields default to zero, ``max_tokens`` falls back
to ``max_input_tokens + max_output_tokens``, and the provider prefix of the
key (``"gemini/gemini-2.0-flash"``) is stripped from ``model``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Tuple


def _num(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _int(value: Any) -> int:
    return int(_num(value))


@dataclass(frozen=True)
class PriceEntry:
    """Token limits and per-token costs for one ``(service, model)`` pair."""

    service: str
    model: str
    mode: str = "chat"
    max_tokens: int = 0
    max_input_tokens: int = 0
    max_output_tokens: int = 0
    input_cost_per_token: float = 0.0
    output_cost_per_token: float = 0.0
    output_cost_per_reasoning_token: float = 0.0
    supports_reasoning: bool = False
    supported_modalities: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.service, self.model)

    @classmethod
    def from_raw(cls, key: str, raw: Mapping[str, Any]) -> "PriceEntry":
        """Build an entry from one snapshot record keyed by ``key``."""
        max_input = _int(raw.get("max_input_tokens"))
        max_output = _int(raw.get("max_output_tokens"))
        max_tokens = _int(raw.get("max_tokens")) or (max_input + max_output)
        model = key.split("/", 1)[1] if "/" in key else key
        modalities = raw.get("supported_modalities") or ()
        return cls(
            service=str(raw.get("litellm_provider") or ""),
            model=model,
            mode=str(raw.get("mode") or ""),
            max_tokens=max_tokens,
            max_input_tokens=max_input,
            max_output_tokens=max_output,
            input_cost_per_token=_num(raw.get("input_cost_per_token")),
            output_cost_per_token=_num(raw.get("output_cost_per_token")),
            output_cost_per_reasoning_token=_num(raw.get("output_cost_per_reasoning_token")),
            supports_reasoning=bool(raw.get("supports_reasoning", False)),
            supported_modalities=tuple(str(m) for m in modalities),
        )

    @classmethod
    def zero_cost(cls, service: str, model: str) -> "PriceEntry":
        """Synthesized entry for unknown or local models."""
        return cls(service=service, model=model)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["supported_modalities"] = list(self.supported_modalities)
        return data


__all__ = ["PriceEntry"]
