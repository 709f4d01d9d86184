"""Streaming lifecycle for one ``send()`` call.

Purpose
-------
Drive the decode loop over a live response body: bytes are decoded into
wire events, each wire event is run through the adapter parsers into
canonical :class:`StreamEvent` values, and the session finalizes exactly
once when the wire sequence is fully exhausted.

State machine
-------------
``IDLE -> STREAMING -> FINALIZED | ABORTED | FAILED``. ``finalize`` (the
callback that commits messages to the conversation) runs only on the
transition to ``FINALIZED``. A consumer that stops iterating early leaves the
session in ``STREAMING``; nothing is committed unless iteration resumes and
reaches the end.

Cancellation
------------
The engine token is polled before every wire event. Cancelling while a read
is blocked shuts down the connection socket (the transport registers that
callback), so the read returns at once and the transport reports
``AbortError``.

Failure modes
-------------
- ``AbortError``: token fired; state ``ABORTED``.
- ``TransportError``: in-band error event or read failure; state ``FAILED``.
- ``DecodeError``: unparseable trailing bytes; state ``FAILED``.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Optional

from ..cancellation import CancellationToken
from ..errors import AbortError, ProviderError, TransportError
from ..logging import LogContext, get_logger, normalized_log_event
from .accumulator import StreamAccumulator
from .events import StreamEvent
from .sse_decoder import decode_stream
from .state import StreamState

if TYPE_CHECKING:  # pragma: no cover
    from ..adapter import ProviderAdapter

_LOG = get_logger("llm_unify.streaming")


class StreamSession:
    """One streamed response from first byte to terminal state.

    Parameters
    ----------
    adapter:
        Adapter whose chunk parsers interpret the wire events.
    chunks:
        Iterable of raw response bytes (see ``Transport.iter_bytes``).
    token:
        Engine cancellation token.
    finalize:
        Called once with the accumulator after full exhaustion; its return
        value becomes :attr:`result`.
    close:
        Releases the HTTP response; runs whenever the loop exits.
    """

    def __init__(
        self,
        *,
        adapter: "ProviderAdapter",
        chunks: Iterable[bytes],
        token: CancellationToken,
        finalize: Callable[[StreamAccumulator], Any],
        close: Optional[Callable[[], None]] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.adapter = adapter
        self.accumulator = StreamAccumulator(adapter)
        self.state = StreamState.IDLE
        self.result: Any = None
        self.error: Optional[BaseException] = None
        self._chunks = chunks
        self._token = token
        self._finalize = finalize
        self._close = close
        self._ctx = ctx or LogContext(service=adapter.service_name)
        self._logger = logger or _LOG
        self._events = self._run()

    @property
    def events(self) -> Iterator[StreamEvent]:
        """The single lazy event sequence of this session."""
        return self._events

    def drain(self) -> Any:
        """Consume the remaining events and return the finalized result."""
        for _ in self._events:
            pass
        if self.state is StreamState.FINALIZED:
            return self.result
        if self.error is not None:
            raise self.error
        raise AbortError("stream ended before completion", provider=self.adapter.service_name, model=self._ctx.model)

    # ----- internals -----
    def _run(self) -> Iterator[StreamEvent]:
        provider, model = self.adapter.service_name, self._ctx.model
        self.state = StreamState.STREAMING
        self.adapter.reset_stream_state()
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", emitted=0, level=logging.DEBUG)
        try:
            for wire_event in decode_stream(self._chunks, self.adapter.is_stream_done):
                self._token.raise_if_cancelled(provider=provider, model=model)
                message = self.adapter.parse_stream_error(wire_event)
                if message:
                    raise TransportError(message, provider=provider, model=model)
                yield from self.accumulator.ingest(wire_event)
            self._token.raise_if_cancelled(provider=provider, model=model)
            self.result = self._finalize(self.accumulator)
        except AbortError as exc:
            self._fail(StreamState.ABORTED, exc, "stream.abort", "abort")
            raise
        except ProviderError as exc:
            if exc.provider == "-":
                exc.provider, exc.model = provider, model
            self._fail(StreamState.FAILED, exc, "stream.error", "error")
            raise
        except Exception as exc:
            self._fail(StreamState.FAILED, exc, "stream.error", "error")
            raise
        else:
            self.state = StreamState.FINALIZED
            normalized_log_event(
                self._logger,
                "stream.end",
                self._ctx,
                phase="finalize",
                emitted=self.accumulator.emitted,
                tokens=self.accumulator.usage,
            )
        finally:
            if self._close is not None:
                self._close()

    def _fail(self, state: StreamState, exc: BaseException, event: str, phase: str) -> None:
        self.state = state
        self.error = exc
        code = getattr(exc, "code", None)
        normalized_log_event(
            self._logger,
            event,
            self._ctx,
            phase=phase,
            error_code=str(code.value) if code is not None else type(exc).__name__,
            emitted=self.accumulator.emitted,
            tokens=self.accumulator.usage,
            level=logging.INFO if state is StreamState.ABORTED else logging.WARNING,
            error=str(exc),
        )


__all__ = ["StreamSession"]
