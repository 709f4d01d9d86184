"""Wire-format builders, an ``httpx.MockTransport`` recorder and a stalling
loopback server for tests."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Dict, Iterable, List

import httpx


def sse(*events: Any, done: bool = True) -> bytes:
    """Encode ``events`` as server-sent ``data:`` lines."""
    lines = [f"data: {json.dumps(e)}\n\n" for e in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def ndjson(*events: Any) -> bytes:
    return "".join(json.dumps(e) + "\n" for e in events).encode("utf-8")


class Recorder:
    """MockTransport handler that records requests and replays responses."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self._responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def json_body(payload: Any, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, json=payload)


def stream_body(chunks: Iterable[bytes], status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Responder streaming ``chunks`` one by one (fresh iterator per request)."""
    chunk_list = list(chunks)
    return lambda request: httpx.Response(status, content=iter(chunk_list))


class StalledServer:
    """Loopback HTTP server that writes ``first`` and then holds the connection.

    The handler parks until the context exits (or ``hold`` seconds pass), so a
    client read after ``first`` blocks on a real socket.
    """

    def __init__(self, first: bytes, hold: float = 5.0) -> None:
        self.release = threading.Event()
        release = self.release

        class _Handler(BaseHTTPRequestHandler):
            def do_POST(self) -> None:  # noqa: N802 - http.server naming
                self.rfile.read(int(self.headers.get("Content-Length") or 0))
                self.send_response(200)
                self.send_header("Content-Type", "text/event-stream")
                self.end_headers()
                self.wfile.write(first)
                self.wfile.flush()
                release.wait(hold)

            def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
                pass

        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        self._httpd.daemon_threads = True
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}/v1"

    def __enter__(self) -> "StalledServer":
        self._thread.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.release.set()
        self._httpd.shutdown()
        self._httpd.server_close()
