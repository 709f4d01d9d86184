"""Groq adapter (OpenAI-compatible chat/completions).

Groq differences:
- Reasoning text arrives in ``reasoning`` (with ``reasoning_format="parsed"``).
- Streamed usage is wrapped in ``x_groq.usage``.
- ``reasoning_effort="high"`` is not accepted by reasoning models; it is
  translated into ``reasoning_format="parsed"``.
- Speech models (whisper, tts) share the catalog and are never quality models.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional, Tuple

from ..base.models import TokenUsage
from ..base.openai_style import OpenAIStyleAdapter
from ..base.tokens.extraction import usage_from_mapping
from ..base.utils.wire import dig
from ..config.defaults import GROQ_DEFAULT_BASE_URL, GROQ_DEFAULT_MODEL, QUALITY_DENYLIST


class GroqAdapter(OpenAIStyleAdapter):
    service: ClassVar[str] = "groq"
    DEFAULT_BASE_URL: ClassVar[str] = GROQ_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = GROQ_DEFAULT_MODEL
    KEY_REASONING_CONTENT: ClassVar[str] = "reasoning"
    quality_denylist: ClassVar[Tuple[str, ...]] = QUALITY_DENYLIST + ("distil-whisper", "playai")

    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        options = super().parse_options(options)
        if options.get("reasoning_effort") == "high":
            del options["reasoning_effort"]
            options.setdefault("reasoning_format", "parsed")
        # Groq reports usage in x_groq without being asked
        options.pop("stream_options", None)
        return options

    def parse_usage(self, payload: Any) -> Optional[TokenUsage]:
        usage = dig(payload, "usage") or dig(payload, "x_groq", "usage")
        return usage_from_mapping(usage, "prompt_tokens", "completion_tokens")


__all__ = ["GroqAdapter"]
