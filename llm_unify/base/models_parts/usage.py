"""
Token usage and cost records.

`TokenUsage` is the raw ``{input_tokens, output_tokens}`` pair an adapter
extracts from a wire payload. `Usage` is the engine's expanded view with
totals and costs. Costs are ``None`` when no price entry matched and ``0.0``
for local services.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TokenUsage:
    """Raw token counts reported by a service."""

    input_tokens: int = 0
    output_tokens: int = 0

    def merge(self, other: Optional["TokenUsage"]) -> "TokenUsage":
        """Combine two reports; non-zero values from ``other`` win.

        Streaming services report input and output counts in separate events
        (e.g. ``message_start`` and ``message_delta``), so later partial
        reports must not erase earlier counts.
        """
        if other is None:
            return self
        return TokenUsage(
            input_tokens=other.input_tokens or self.input_tokens,
            output_tokens=other.output_tokens or self.output_tokens,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Usage:
    """Expanded usage with totals and costs."""

    input_tokens: int
    output_tokens: int
    total_tokens: int
    input_cost: Optional[float] = None
    output_cost: Optional[float] = None
    total_cost: Optional[float] = None
    local: bool = False

    @classmethod
    def from_tokens(
        cls,
        tokens: TokenUsage,
        *,
        input_cost_per_token: Optional[float] = None,
        output_cost_per_token: Optional[float] = None,
        local: bool = False,
    ) -> "Usage":
        """Compute totals and costs.

        Local services cost zero regardless of the per-token rates. When no
        rates are known (and the service is not local) the costs stay ``None``.
        """
        total_tokens = tokens.input_tokens + tokens.output_tokens
        if local:
            input_cost_per_token = output_cost_per_token = 0.0
        if input_cost_per_token is None or output_cost_per_token is None:
            return cls(tokens.input_tokens, tokens.output_tokens, total_tokens, local=local)
        input_cost = tokens.input_tokens * input_cost_per_token
        output_cost = tokens.output_tokens * output_cost_per_token
        return cls(
            input_tokens=tokens.input_tokens,
            output_tokens=tokens.output_tokens,
            total_tokens=total_tokens,
            input_cost=input_cost,
            output_cost=output_cost,
            total_cost=input_cost + output_cost,
            local=local,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["TokenUsage", "Usage"]
