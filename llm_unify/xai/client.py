"""xAI (Grok) adapter (OpenAI-compatible chat/completions)."""
from __future__ import annotations

from typing import ClassVar

from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import XAI_DEFAULT_BASE_URL, XAI_DEFAULT_MODEL


class XAIAdapter(OpenAIStyleAdapter):
    service: ClassVar[str] = "xai"
    DEFAULT_BASE_URL: ClassVar[str] = XAI_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = XAI_DEFAULT_MODEL


__all__ = ["XAIAdapter"]
