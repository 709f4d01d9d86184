"""openrouter service adapter."""

from .client import OpenRouterAdapter

__all__ = ["OpenRouterAdapter"]
