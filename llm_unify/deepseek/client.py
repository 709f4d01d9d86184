"""DeepSeek adapter (OpenAI-compatible chat/completions).

Reasoning models stream their trace in ``delta.reasoning_content``.
"""
from __future__ import annotations

from typing import ClassVar

from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import DEEPSEEK_DEFAULT_BASE_URL, DEEPSEEK_DEFAULT_MODEL


class DeepSeekAdapter(OpenAIStyleAdapter):
    service: ClassVar[str] = "deepseek"
    DEFAULT_BASE_URL: ClassVar[str] = DEEPSEEK_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = DEEPSEEK_DEFAULT_MODEL


__all__ = ["DeepSeekAdapter"]
