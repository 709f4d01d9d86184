"""google service adapter."""

from .client import GoogleAdapter

__all__ = ["GoogleAdapter"]
