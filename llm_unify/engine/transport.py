"""HTTP transport for adapter-built requests.

Purpose
-------
Execute a :class:`WireRequest` with ``httpx`` and translate every failure into
the package error taxonomy. The engine's cancellation token is wired into
each open response: cancelling shuts down the connection socket, so a read
blocked in another thread returns at once and is reported as ``AbortError``.
The token is also checked after every chunk and when the body ends.

Failure modes
-------------
- Non-2xx status: ``TransportError`` carrying the status code, the
  classified ``ErrorCode`` and the service's error text when decodable.
- Network or protocol failure: ``TransportError`` (``AbortError`` when the
  token fired).
"""
from __future__ import annotations

import json
import logging
import socket
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx

from ..base.adapter import WireRequest
from ..base.cancellation import CancellationToken
from ..base.errors import AbortError, TransportError, classify_exception, classify_status, is_retryable
from ..base.http import build_timeout, get_httpx_client
from ..base.utils.wire import dig

_LOG = logging.getLogger("llm_unify.transport")


def _error_text(response: httpx.Response) -> str:
    """Best-effort service error message from an error response body."""
    try:
        text = response.read().decode("utf-8", errors="replace")
    except httpx.HTTPError:
        return ""
    try:
        body = json.loads(text)
    except ValueError:
        return text.strip()[:500]
    message = dig(body, "error", "message") or dig(body, "message") or dig(body, "error")
    return str(message) if message else text.strip()[:500]


def _interrupt(response: httpx.Response) -> None:
    """Shut down the response's socket so a blocked read returns.

    ``Response.close`` alone does not wake a thread parked in ``recv``. Without
    a raw socket (mock transports, HTTP/2) the response is closed instead.
    """
    stream = response.extensions.get("network_stream")
    sock = stream.get_extra_info("socket") if stream is not None else None
    if sock is None:
        response.close()
        return
    try:
        # base-class call skips the TLS close_notify of SSLSocket.shutdown
        socket.socket.shutdown(sock, socket.SHUT_RDWR)
    except OSError:
        _LOG.debug("socket shutdown on cancel failed", exc_info=True)


class Transport:
    """Thin wrapper around a (pooled or injected) ``httpx.Client``."""

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def client_for(self, url: str) -> httpx.Client:
        """Injected client, else the pooled client for the URL's origin."""
        if self._client is not None:
            return self._client
        parsed = httpx.URL(url)
        return get_httpx_client(f"{parsed.scheme}://{parsed.netloc.decode('ascii')}", "chat")

    @contextmanager
    def open(
        self,
        request: WireRequest,
        token: CancellationToken,
        *,
        streaming: bool = False,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> Iterator[httpx.Response]:
        """Send ``request`` and yield the open, successful response."""
        token.raise_if_cancelled(provider=provider, model=model)
        client = self.client_for(request.url)
        http_request = client.build_request(
            request.method,
            request.url,
            headers=request.headers,
            json=request.body,
            timeout=build_timeout(streaming),
        )
        try:
            response = client.send(http_request, stream=True)
        except httpx.HTTPError as exc:
            raise self._wrap(exc, token, provider, model) from exc
        remove = token.add_callback(lambda: _interrupt(response))
        try:
            if response.status_code >= 400:
                message = _error_text(response) or f"HTTP {response.status_code}"
                code = classify_status(response.status_code)
                raise TransportError(
                    message,
                    provider=provider,
                    model=model,
                    status_code=response.status_code,
                    code=code,
                    retryable=is_retryable(code),
                )
            yield response
        finally:
            remove()
            response.close()

    def iter_bytes(
        self,
        response: httpx.Response,
        token: CancellationToken,
        *,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> Iterator[bytes]:
        """Yield raw body chunks, mapping read failures onto the error taxonomy."""
        try:
            for chunk in response.iter_bytes():
                token.raise_if_cancelled(provider=provider, model=model)
                if chunk:
                    yield chunk
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise self._wrap(exc, token, provider, model) from exc
        # a shut-down socket can also end a close-delimited body cleanly
        token.raise_if_cancelled(provider=provider, model=model)

    def read_json(
        self,
        response: httpx.Response,
        token: CancellationToken,
        *,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> Any:
        """Read a full JSON body."""
        raw = b"".join(self.iter_bytes(response, token, provider=provider, model=model))
        token.raise_if_cancelled(provider=provider, model=model)
        try:
            return json.loads(raw.decode("utf-8")) if raw.strip() else {}
        except ValueError as exc:
            raise TransportError(f"invalid JSON response: {exc}", provider=provider, model=model, raw=exc) from exc

    def request_json(
        self,
        request: WireRequest,
        token: CancellationToken,
        *,
        provider: str = "-",
        model: Optional[str] = None,
    ) -> Any:
        with self.open(request, token, provider=provider, model=model) as response:
            return self.read_json(response, token, provider=provider, model=model)

    def probe(self, request: WireRequest, token: CancellationToken, *, provider: str = "-") -> tuple:
        """Return ``(status_code, text)`` for a connectivity check."""
        with self.open(request, token, provider=provider) as response:
            raw = b"".join(self.iter_bytes(response, token, provider=provider))
            return response.status_code, raw.decode("utf-8", errors="replace")

    @staticmethod
    def _wrap(
        exc: Exception,
        token: CancellationToken,
        provider: str,
        model: Optional[str],
    ) -> Exception:
        if token.cancelled:
            return AbortError(token.reason or "request aborted", provider=provider, model=model)
        code = classify_exception(exc)
        return TransportError(
            str(exc) or type(exc).__name__,
            provider=provider,
            model=model,
            code=code,
            retryable=is_retryable(code),
            raw=exc,
        )


__all__ = ["Transport"]
