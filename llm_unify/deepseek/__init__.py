"""deepseek service adapter."""

from .client import DeepSeekAdapter

__all__ = ["DeepSeekAdapter"]
