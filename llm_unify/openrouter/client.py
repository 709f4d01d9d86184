"""OpenRouter adapter (OpenAI-compatible chat/completions).

OpenRouter model ids carry the upstream vendor (``google/gemini-2.5-flash``),
which is also how its price table entries are keyed. Reasoning text arrives
in ``reasoning``; ``think`` maps to OpenRouter's unified ``reasoning`` option.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict

from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL


class OpenRouterAdapter(OpenAIStyleAdapter):
    service: ClassVar[str] = "openrouter"
    DEFAULT_BASE_URL: ClassVar[str] = OPENROUTER_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = OPENROUTER_DEFAULT_MODEL
    KEY_REASONING_CONTENT: ClassVar[str] = "reasoning"

    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        think = options.get("think")
        max_thinking = options.get("max_thinking_tokens")
        options = super().parse_options(options)
        if think and "reasoning" not in options:
            options["reasoning"] = {"max_tokens": max_thinking} if max_thinking else {"effort": "medium"}
        return options


__all__ = ["OpenRouterAdapter"]
