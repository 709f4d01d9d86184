"""openai service adapter."""

from .client import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
