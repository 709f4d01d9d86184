"""anthropic service adapter."""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
