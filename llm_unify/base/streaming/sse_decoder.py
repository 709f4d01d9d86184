"""Incremental decoder for streamed JSON payloads.

Purpose
-------
Turn arbitrary byte chunks from an HTTP response into a sequence of decoded
JSON values. The same decoder handles server-sent events (``data: {...}``
lines) and newline-delimited JSON (Ollama), so adapters never see framing.

Algorithm
---------
1. Bytes go through an incremental UTF-8 decoder, so a multi-byte character
   split across two chunks is never corrupted.
2. Text is split on newlines; the unterminated tail stays pending.
3. Blank lines, SSE comments (``:``) and ``event:``/``id:``/``retry:`` fields
   are ignored; a ``data:`` prefix is stripped.
4. Each payload line is appended to a working buffer from which as many
   complete JSON values as possible are parsed. A value split across several
   lines stays buffered until it completes. A newline-terminated payload that
   is invalid before its end (``data: keep-alive``) can never complete and is
   dropped with a debug log, so later events still decode.
5. The ``[DONE]`` sentinel, or a value the ``is_terminal`` predicate accepts,
   ends the sequence.

Failure modes
-------------
- ``close()`` makes one final parse attempt over whatever is still buffered;
  a non-empty unparseable remainder raises :class:`DecodeError`.
"""
from __future__ import annotations

import codecs
import json
from typing import Any, Callable, Iterable, Iterator, List, Optional

from ..errors import DecodeError
from ..logging import get_logger

_LOG = get_logger("llm_unify.streaming.decoder")

DONE_SENTINEL = "[DONE]"
_IGNORED_FIELDS = ("event:", "id:", "retry:")


class StreamDecoder:
    """Stateful byte-to-JSON decoder for one response body."""

    def __init__(self, is_terminal: Optional[Callable[[Any], bool]] = None) -> None:
        self._is_terminal = is_terminal
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._line = ""
        self._pending = ""
        self._json = json.JSONDecoder()
        self.done = False

    def feed(self, chunk: bytes) -> List[Any]:
        """Consume ``chunk`` and return the JSON values it completed."""
        if self.done or not chunk:
            return []
        self._line += self._utf8.decode(chunk)
        out: List[Any] = []
        while not self.done and "\n" in self._line:
            line, self._line = self._line.split("\n", 1)
            out.extend(self._consume_line(line.rstrip("\r"), terminated=True))
        return out

    def close(self) -> List[Any]:
        """Flush the tail of the stream; raise ``DecodeError`` on leftovers."""
        if self.done:
            return []
        self._line += self._utf8.decode(b"", final=True)
        out: List[Any] = []
        if self._line:
            line, self._line = self._line, ""
            out.extend(self._consume_line(line.rstrip("\r")))
        if not self.done:
            remainder = self._pending.strip()
            if remainder:
                self._pending = ""
                raise DecodeError(
                    f"unparseable trailing stream data: {remainder[:120]!r}",
                    remainder=remainder,
                )
        self.done = True
        return out

    # ----- internals -----
    def _consume_line(self, line: str, terminated: bool = False) -> List[Any]:
        stripped = line.strip()
        if not stripped or stripped.startswith(":"):
            return []
        if stripped.startswith(_IGNORED_FIELDS):
            return []
        if stripped.startswith("data:"):
            stripped = stripped[len("data:"):].strip()
        if stripped == DONE_SENTINEL:
            self.done = True
            return []
        self._pending = f"{self._pending}\n{stripped}" if self._pending else stripped
        return self._drain(drop_invalid=terminated)

    def _drain(self, drop_invalid: bool = False) -> List[Any]:
        out: List[Any] = []
        text = self._pending
        pos = 0
        while pos < len(text):
            while pos < len(text) and text[pos].isspace():
                pos += 1
            if pos >= len(text):
                break
            try:
                value, end = self._json.raw_decode(text, pos)
            except json.JSONDecodeError as exc:
                if drop_invalid and exc.pos < len(text):
                    _LOG.debug("dropping unparseable stream line: %r", text[pos:][:120])
                    pos = len(text)
                break
            out.append(value)
            pos = end
            if self._is_terminal is not None and self._is_terminal(value):
                self.done = True
                pos = len(text)
                break
        self._pending = text[pos:].lstrip()
        return out


def decode_stream(
    chunks: Iterable[bytes],
    is_terminal: Optional[Callable[[Any], bool]] = None,
) -> Iterator[Any]:
    """Yield JSON values decoded from an iterable of byte chunks."""
    decoder = StreamDecoder(is_terminal)
    for chunk in chunks:
        yield from decoder.feed(chunk)
        if decoder.done:
            return
    yield from decoder.close()


__all__ = ["StreamDecoder", "decode_stream", "DONE_SENTINEL"]
