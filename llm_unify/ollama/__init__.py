"""ollama service adapter."""

from .client import OllamaAdapter

__all__ = ["OllamaAdapter"]
