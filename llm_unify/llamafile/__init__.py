"""llamafile service adapter."""

from .client import LlamafileAdapter

__all__ = ["LlamafileAdapter"]
