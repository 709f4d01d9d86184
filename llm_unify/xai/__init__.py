"""xai service adapter."""

from .client import XAIAdapter

__all__ = ["XAIAdapter"]
