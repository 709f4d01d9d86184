"""Cancellation token implementation.

Exposes the ``CancellationToken`` class owned by each completion engine. The
token is passed into the transport (which registers a callback that shuts
down the live connection socket) and into the stream draining loop (which
polls it between wire events).
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable

from ..errors import AbortError
from .state import State

_LOG = logging.getLogger("llm_unify.cancellation")


class CancellationToken:
    """A thread-safe cancellation token with cancel callbacks.

    ``cancel`` may be called from any thread. Callbacks registered through
    :meth:`add_callback` run once, outside the lock, on the cancelling thread.
    A callback registered after cancellation runs immediately.
    """

    def __init__(self) -> None:
        self._state = State()
        self._lock = Lock()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        with self._lock:
            return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        with self._lock:
            return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and run registered callbacks (idempotent)."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
        for cb in callbacks:
            try:
                cb()
            except Exception:  # nosec B110 - a failing close must not block other callbacks
                _LOG.debug("cancel callback failed", exc_info=True)

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run on cancel; returns an unregister function."""
        with self._lock:
            run_now = self._state.cancelled
            if not run_now:
                self._state.callbacks.append(callback)
        if run_now:
            callback()

        def _remove() -> None:
            with self._lock:
                if callback in self._state.callbacks:
                    self._state.callbacks.remove(callback)

        return _remove

    def raise_if_cancelled(self, *, provider: str = "-", model: str | None = None) -> None:
        """Raise ``AbortError`` if the token is cancelled."""
        if self.cancelled:
            raise AbortError(self.reason or "request aborted", provider=provider, model=model)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
