"""Completion engine.

Purpose
-------
Drive one conversation against one (configurable) service. ``send()`` merges
instance and call options, builds the request through the service adapter,
performs the HTTP call and routes the response through one of four paths:

=========  ==========  ====================================================
stream     extended    result
=========  ==========  ====================================================
False      False       text (or parsed value); one assistant message
False      True        ``ChatResponse``; thinking, tool calls, assistant
True       False       ``TextStream`` of content fragments
True       True        ``StreamHandle`` with typed events and ``complete()``
=========  ==========  ====================================================

Streaming results commit to the conversation only when the event sequence
is fully exhausted, and at most once.

Cancellation
------------
The engine owns one :class:`CancellationToken` shared by every outstanding
call. ``abort()`` fires it and installs a fresh token for later calls.

Failure modes
-------------
- ``ConfigurationError`` for invalid options, unknown services or a missing
  API key, before any network I/O.
- ``TransportError`` / ``AbortError`` / ``DecodeError`` from the exchange.
"""
from __future__ import annotations

import uuid
from contextlib import ExitStack
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from ..base.adapter import ProviderAdapter, WireRequest
from ..base.cancellation import CancellationToken
from ..base.dto.adapter_params import AdapterParams
from ..base.dto.request_options import RequestOptions
from ..base.dto.tool_call import ToolCall
from ..base.dto.tool_result import ToolResult
from ..base.errors import ConfigurationError, TransportError
from ..base.factory import REGISTRY, AdapterRegistry
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Attachment, ChatResponse, Conversation, Message, ModelInfo, TokenUsage, Usage
from ..base.openai_style import OpenAIStyleAdapter
from ..base.repositories.price_table import PriceTable, get_price_table
from ..base.streaming.accumulator import CONTENT, THINKING, TOOL_CALL, StreamAccumulator
from ..base.streaming.handle import StreamHandle, TextStream
from ..base.streaming.session import StreamSession
from ..base.utils.parsers import json_parser
from ..config import get_default_service, get_service_config
from ..config.defaults import DEFAULT_MAX_TOKENS
from ..config.env import get_env_var_name
from .catalog import fetch_models, quality_models
from .transport import Transport

_LOG = get_logger("llm_unify.engine")


class CompletionEngine:
    """Conversation plus options plus the machinery to complete it.

    Parameters
    ----------
    input:
        Initial prompt (a user message), a message sequence, a
        :class:`Conversation` to copy, or ``None``.
    client:
        Optional ``httpx.Client``; defaults to the shared pool.
    price_table:
        Optional table; defaults to the process-wide one.
    registry:
        Optional adapter registry; defaults to the process-wide one.
    **options:
        Instance-level request options (see :class:`RequestOptions`).
    """

    def __init__(
        self,
        input: Any = None,
        *,
        client: Optional[httpx.Client] = None,
        price_table: Optional[PriceTable] = None,
        registry: Optional[AdapterRegistry] = None,
        **options: Any,
    ) -> None:
        self.conversation = Conversation.from_input(input)
        self.options: Dict[str, Any] = dict(options)
        self._transport = Transport(client)
        self._prices = price_table if price_table is not None else get_price_table()
        self._registry = registry or REGISTRY
        self._token = CancellationToken()
        self._adapters: Dict[Tuple[Any, ...], ProviderAdapter] = {}

    # ----- Introspection -----
    @property
    def service(self) -> str:
        return (self.options.get("service") or get_default_service()).lower().strip()

    @property
    def model(self) -> str:
        explicit = self.options.get("model")
        if explicit:
            return explicit
        cfg = get_service_config(self.service, {"base_url": self.options.get("base_url")})
        if cfg.get("model"):
            return cfg["model"]
        return self._registry.resolve(self.service, base_url=cfg.get("base_url")).DEFAULT_MODEL

    @property
    def messages(self) -> List[Message]:
        return self.conversation.messages

    @property
    def token(self) -> CancellationToken:
        return self._token

    def __len__(self) -> int:
        return len(self.conversation)

    # ----- Conversation helpers -----
    def user(self, text: str, attachments: Optional[List[Attachment]] = None) -> Message:
        return self.conversation.user(text, attachments)

    def system(self, text: str) -> Message:
        return self.conversation.system(text)

    def assistant(self, text: str) -> Message:
        return self.conversation.assistant(text)

    def thinking(self, text: str) -> Message:
        return self.conversation.thinking(text)

    def tool_call(self, name: str, input: Any = None, *, id: Optional[str] = None) -> Message:
        call = ToolCall(name=name, input=input if input is not None else {}, **({"id": id} if id else {}))
        return self.conversation.tool_call(call)

    def tool_result(
        self,
        tool_call_id: str,
        content: Any,
        *,
        name: Optional[str] = None,
        is_error: bool = False,
    ) -> Message:
        result = ToolResult(tool_call_id=tool_call_id, content=content, name=name, is_error=is_error)
        return self.conversation.tool_result(result)

    # ----- Requests -----
    def chat(self, text: str, **options: Any) -> Any:
        """Append ``text`` as a user message and ``send()``."""
        self.conversation.user(text)
        return self.send(**options)

    def send(self, **options: Any) -> Any:
        """Complete the conversation with the merged instance and call options."""
        opts = self._options(options)
        adapter = self._adapter(opts)
        wire = opts.wire_options()
        wire["model"] = wire.get("model") or adapter.default_model
        wire.setdefault("max_tokens", DEFAULT_MAX_TOKENS)
        wire["messages"] = self.conversation.snapshot()
        request = adapter.build_request(wire)
        ctx = LogContext(service=adapter.service_name, model=wire["model"], request_id=uuid.uuid4().hex[:12])
        sent = {k: v for k, v in wire.items() if k != "messages"}
        if opts.stream:
            return self._send_stream(adapter, request, opts, sent, ctx)
        return self._send_once(adapter, request, opts, sent, ctx)

    def abort(self, reason: Optional[str] = None) -> None:
        """Cancel every outstanding call on this engine.

        Later calls use a fresh token, so the engine stays usable.
        """
        token, self._token = self._token, CancellationToken()
        token.cancel(reason or "aborted by caller")

    # ----- Catalog & connectivity -----
    def get_models(self, **options: Any) -> List[ModelInfo]:
        opts = self._options(options)
        adapter = self._adapter(opts)
        return fetch_models(adapter, self._transport, self._prices, self._token, opts.quality_filter)

    def get_quality_models(self, **options: Any) -> List[ModelInfo]:
        opts = self._options(options)
        adapter = self._adapter(opts)
        return quality_models(adapter, self._transport, self._prices, self._token, opts.quality_filter)

    def verify_connection(self, **options: Any) -> bool:
        """Probe the service; ``False`` on any transport failure."""
        opts = self._options(options)
        adapter = self._adapter(opts)
        try:
            status, text = self._transport.probe(adapter.verify_request(), self._token, provider=adapter.service_name)
        except TransportError as exc:
            _LOG.debug("verify_connection failed for %s: %s", adapter.service_name, exc)
            return False
        return adapter.verify_response(status, text)

    # ----- internals: setup -----
    def _options(self, overrides: Dict[str, Any]) -> RequestOptions:
        merged = {**self.options, **overrides}
        try:
            return RequestOptions.model_validate(merged)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid request options: {exc}") from exc

    def _adapter(self, opts: RequestOptions) -> ProviderAdapter:
        service = (opts.service or get_default_service()).lower().strip()
        cfg = get_service_config(service, {"model": opts.model, "base_url": opts.base_url, "api_key": opts.api_key})
        key = (
            service,
            cfg.get("base_url"),
            cfg.get("api_key"),
            cfg.get("model"),
            tuple(sorted(opts.headers.items())),
        )
        adapter = self._adapters.get(key)
        if adapter is not None:
            return adapter
        params = AdapterParams(
            service=service,
            model=cfg.get("model"),
            api_key=cfg.get("api_key"),
            base_url=cfg.get("base_url"),
            headers=dict(opts.headers),
        )
        adapter = self._registry.create(service, params)
        # the generic adapter serves base_url-only services, which may be keyless gateways
        generic = type(adapter) is OpenAIStyleAdapter
        if not adapter.is_local and not adapter.api_key and not generic:
            raise ConfigurationError(
                f"missing API key for service '{service}' (set {get_env_var_name(service)})",
                provider=service,
            )
        self._adapters[key] = adapter
        return adapter

    # ----- internals: result shaping -----
    @staticmethod
    def _post_process(content: str, opts: RequestOptions) -> Any:
        if opts.parser is not None:
            return opts.parser(content)
        if opts.json_output:
            return json_parser(content)
        return content

    def _usage(self, adapter: ProviderAdapter, model: str, tokens: Optional[TokenUsage], opts: RequestOptions) -> Usage:
        return self._prices.cost(
            adapter.price_service,
            model,
            tokens,
            local=adapter.is_local,
            quality_filter=opts.quality_filter,
        )

    def _response(
        self,
        adapter: ProviderAdapter,
        sent: Dict[str, Any],
        opts: RequestOptions,
        *,
        content: str,
        thinking: str,
        tool_calls: List[ToolCall],
        tokens: Optional[TokenUsage],
        parsed: Any,
    ) -> ChatResponse:
        return ChatResponse(
            service=adapter.service_name,
            model=sent["model"],
            content=content,
            thinking=thinking,
            tool_calls=list(tool_calls),
            usage=self._usage(adapter, sent["model"], tokens, opts),
            messages=self.conversation.messages,
            options=sent,
            parsed=parsed,
        )

    # ----- internals: delivery paths -----
    def _send_once(
        self,
        adapter: ProviderAdapter,
        request: WireRequest,
        opts: RequestOptions,
        sent: Dict[str, Any],
        ctx: LogContext,
    ) -> Any:
        provider, model = adapter.service_name, sent["model"]
        normalized_log_event(_LOG, "send.start", ctx, phase="start", emitted=0, stream=False)
        body = self._transport.request_json(request, self._token, provider=provider, model=model)
        content = adapter.parse_content(body)
        tokens = adapter.parse_usage(body)
        parsed = self._post_process(content, opts)

        if not opts.extended:
            self.conversation.assistant(content)
            normalized_log_event(_LOG, "send.end", ctx, phase="finalize", emitted=1, tokens=tokens)
            return parsed

        thinking = adapter.parse_thinking(body)
        tool_calls = adapter.parse_tool_calls(body)
        if thinking:
            self.conversation.thinking(thinking)
        for call in tool_calls:
            self.conversation.tool_call(call)
        if content or not tool_calls:
            self.conversation.assistant(content)
        response = self._response(
            adapter,
            sent,
            opts,
            content=content,
            thinking=thinking,
            tool_calls=tool_calls,
            tokens=tokens,
            parsed=parsed,
        )
        normalized_log_event(
            _LOG,
            "send.end",
            ctx,
            phase="finalize",
            emitted=1,
            tokens=response.usage,
            tool_calls=len(tool_calls) or None,
        )
        return response

    def _send_stream(
        self,
        adapter: ProviderAdapter,
        request: WireRequest,
        opts: RequestOptions,
        sent: Dict[str, Any],
        ctx: LogContext,
    ) -> Any:
        provider, model = adapter.service_name, sent["model"]
        token = self._token
        stack = ExitStack()
        response = stack.enter_context(
            self._transport.open(request, token, streaming=True, provider=provider, model=model)
        )
        chunks = self._transport.iter_bytes(response, token, provider=provider, model=model)

        def finalize(acc: StreamAccumulator) -> Any:
            parsed = self._post_process(acc.content, opts)
            if not opts.extended:
                self.conversation.assistant(acc.content)
                return parsed
            for kind, value in acc.order:
                if kind == THINKING:
                    self.conversation.thinking(acc.thinking)
                elif kind == CONTENT:
                    self.conversation.assistant(acc.content)
                elif kind == TOOL_CALL:
                    self.conversation.tool_call(value)
            if not acc.content and not acc.tool_calls:
                self.conversation.assistant("")
            return self._response(
                adapter,
                sent,
                opts,
                content=acc.content,
                thinking=acc.thinking,
                tool_calls=acc.tool_calls,
                tokens=acc.usage,
                parsed=parsed,
            )

        session = StreamSession(
            adapter=adapter,
            chunks=chunks,
            token=token,
            finalize=finalize,
            close=stack.close,
            ctx=ctx,
            logger=_LOG,
        )
        return StreamHandle(session) if opts.extended else TextStream(session)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CompletionEngine(service={self.options.get('service')!r}, messages={len(self.conversation)})"


__all__ = ["CompletionEngine"]
