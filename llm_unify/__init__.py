"""llm_unify package

One conversational interface over many hosted and local LLM completion
services.

Purpose:
    Let a caller build a conversation, send it to any supported service
    (OpenAI, Anthropic, Ollama, DeepSeek, xAI, OpenRouter, Groq, Google,
    Llamafile, or a registered custom service) and receive text, a
    structured response, or a stream of canonical events, with token usage
    priced against a shared price table.

Public API (re-exported):
    - Version: ``__version__``
    - Engine: :class:`CompletionEngine`, :func:`create`, :func:`complete`
    - Conversation model: :class:`Conversation`, :class:`Message`,
      :class:`Attachment`, :class:`ToolCall`, :class:`ToolResult`
    - Results: :class:`ChatResponse`, :class:`Usage`, :class:`StreamEvent`
    - Prices: :class:`PriceTable`, :func:`get_price_table`
    - Registry: :func:`register`, :func:`unregister`
    - Exceptions: :class:`ProviderError` and its kinds, :class:`ErrorCode`

Example:
    >>> from llm_unify import create
    >>> llm = create("the color of the sky is", service="ollama", max_tokens=10)
    >>> llm.send()  # doctest: +SKIP
"""

from typing import Any

from .base.adapter import ProviderAdapter
from .base.dto.quality_filter import QualityFilter
from .base.dto.tool_call import ToolCall
from .base.dto.tool_result import ToolResult
from .base.dto.tool_spec import ToolSpec
from .base.errors import (
    AbortError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    ProviderError,
    TransportError,
    UnknownModelError,
)
from .base.factory import register, unregister
from .base.models import Attachment, ChatResponse, Conversation, Message, ModelInfo, PriceEntry, Usage
from .base.openai_style import OpenAIStyleAdapter
from .base.repositories.price_table import PriceTable, get_price_table
from .base.streaming.events import StreamEvent
from .base.streaming.handle import StreamHandle, TextStream
from .base.utils import parsers
from .base.utils.simple import complete
from .engine.completion import CompletionEngine

__version__ = "0.1.0"


def create(input: Any = None, **options: Any) -> CompletionEngine:
    """Create a :class:`CompletionEngine` for ``input`` with instance options."""
    return CompletionEngine(input, **options)


__all__ = [
    # Version
    "__version__",
    # Engine
    "CompletionEngine",
    "create",
    "complete",
    # Conversation model
    "Conversation",
    "Message",
    "Attachment",
    "ToolCall",
    "ToolResult",
    "ToolSpec",
    "QualityFilter",
    # Results
    "ChatResponse",
    "Usage",
    "ModelInfo",
    "PriceEntry",
    "StreamEvent",
    "StreamHandle",
    "TextStream",
    # Prices
    "PriceTable",
    "get_price_table",
    # Adapters
    "ProviderAdapter",
    "OpenAIStyleAdapter",
    "register",
    "unregister",
    "parsers",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "TransportError",
    "AbortError",
    "DecodeError",
    "UnknownModelError",
]
