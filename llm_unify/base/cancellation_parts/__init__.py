"""Cancellation parts: token implementation and its internal state."""

from .cancellation_token import CancellationToken
from .state import State

__all__ = ["CancellationToken", "State"]
