"""Process-wide price table.

Purpose
-------
Resolve ``(service, model)`` to a :class:`PriceEntry` carrying token limits
and per-token costs, and turn raw token counts into a costed :class:`Usage`.

Lifecycle
---------
- The bundled snapshot (``llm_unify/data/model_prices.json``) is loaded
  lazily on first lookup.
- ``refresh()`` fetches a fresh litellm-format snapshot and replaces the
  whole table in one swap; it never merges with the previous snapshot.
- Custom entries live in a separate override map consulted before the
  snapshot. They survive ``refresh()`` and are managed with
  ``add_custom``/``remove_custom``/``clear_custom``.
- ``reset()`` drops the snapshot and the customs (test isolation).

External dependencies
---------------------
- ``importlib.resources`` for the bundled snapshot.
- ``httpx`` (pooled client) for ``refresh()``.

Failure modes
-------------
- ``refresh()`` raises ``TransportError`` when the download fails or the
  document is not a JSON object; the current table is left untouched.
"""
from __future__ import annotations

import json
import logging
import threading
from importlib import resources
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from ....config.defaults import (
    PRICE_SERVICE_ALIASES,
    PRICE_TABLE_CHAT_MODES,
    PRICE_TABLE_RESOURCE,
    PRICE_TABLE_URL,
)
from ...dto.quality_filter import QualityFilter
from ...errors import TransportError, classify_exception
from ...http import build_timeout, get_httpx_client
from ...logging import LogContext, get_logger, log_event
from ...models import PriceEntry, TokenUsage, Usage
from .fallback import candidate_models

_LOG = get_logger("llm_unify.prices")

Key = Tuple[str, str]


def parse_snapshot(data: Mapping[str, Any]) -> Dict[Key, PriceEntry]:
    """Index a litellm-style document by ``(service, model)``.

    Records without ``litellm_provider`` (e.g. the ``sample_spec`` entry) are
    skipped. When two keys normalize to the same pair the first one wins.
    """
    index: Dict[Key, PriceEntry] = {}
    for key, raw in data.items():
        if not isinstance(raw, dict) or not raw.get("litellm_provider"):
            continue
        entry = PriceEntry.from_raw(key, raw)
        index.setdefault(entry.key, entry)
    return index


def _load_bundled() -> Dict[Key, PriceEntry]:
    package, name = PRICE_TABLE_RESOURCE
    text = resources.files(package).joinpath(name).read_text(encoding="utf-8")
    return parse_snapshot(json.loads(text))


def _visible(entry: Optional[PriceEntry]) -> Optional[PriceEntry]:
    if entry is None or entry.mode not in PRICE_TABLE_CHAT_MODES:
        return None
    return entry


class PriceTable:
    """Snapshot plus custom overrides, with exact and fuzzy lookup."""

    def __init__(self, snapshot: Optional[Mapping[Key, PriceEntry]] = None) -> None:
        self._lock = threading.RLock()
        self._snapshot: Optional[Dict[Key, PriceEntry]] = dict(snapshot) if snapshot is not None else None
        self._custom: Dict[Key, PriceEntry] = {}

    # ----- snapshot lifecycle -----
    def _entries(self) -> Dict[Key, PriceEntry]:
        snapshot = self._snapshot
        if snapshot is None:
            with self._lock:
                if self._snapshot is None:
                    self._snapshot = _load_bundled()
                    log_event(_LOG, "price_table.load", None, source="bundled", entries=len(self._snapshot))
                snapshot = self._snapshot
        return snapshot

    def load(self, data: Mapping[str, Any]) -> int:
        """Replace the snapshot with an already downloaded document."""
        snapshot = parse_snapshot(data)
        with self._lock:
            self._snapshot = snapshot
        return len(snapshot)

    def refresh(self, url: Optional[str] = None, client: Optional[httpx.Client] = None) -> int:
        """Download a fresh snapshot and swap it in; return the entry count."""
        url = url or PRICE_TABLE_URL
        http = client or get_httpx_client(None, "prices")
        try:
            resp = http.get(url, timeout=build_timeout())
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            code = classify_exception(exc)
            status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
            raise TransportError(
                f"price table refresh failed: {exc}",
                provider="prices",
                status_code=status,
                code=code,
                raw=exc,
            ) from exc
        if not isinstance(data, dict):
            raise TransportError("price table refresh returned a non-object document", provider="prices")
        count = self.load(data)
        log_event(_LOG, "price_table.refresh", None, url=url, entries=count)
        return count

    def reset(self) -> None:
        """Forget the loaded snapshot and every custom entry."""
        with self._lock:
            self._snapshot = None
            self._custom.clear()

    # ----- custom overrides -----
    def add_custom(self, service: str, model: str, **fields: Any) -> PriceEntry:
        """Register an override for ``(service, model)``; ``mode`` defaults to chat."""
        fields.setdefault("mode", "chat")
        modalities = fields.get("supported_modalities")
        if modalities is not None:
            fields["supported_modalities"] = tuple(modalities)
        entry = PriceEntry(service=service, model=model, **fields)
        with self._lock:
            self._custom[entry.key] = entry
        return entry

    def remove_custom(self, service: str, model: str) -> bool:
        with self._lock:
            return self._custom.pop((service, model), None) is not None

    def clear_custom(self) -> None:
        with self._lock:
            self._custom.clear()

    def customs(self) -> List[PriceEntry]:
        return list(self._custom.values())

    # ----- lookup -----
    def _exact(self, service: str, model: str) -> Optional[PriceEntry]:
        key = (service, model)
        custom = _visible(self._custom.get(key))
        if custom is not None:
            return custom
        return _visible(self._entries().get(key))

    def get(
        self,
        service: str,
        model: str,
        quality_filter: Optional[QualityFilter] = None,
    ) -> Optional[PriceEntry]:
        """Return the visible entry for ``(service, model)`` or ``None``.

        Exact match first. Fuzzy variants (see :func:`candidate_models`) are
        tried only when ``quality_filter.allow_similar`` is set.
        """
        service = PRICE_SERVICE_ALIASES.get(service, service)
        entry = self._exact(service, model)
        if entry is not None or quality_filter is None or not quality_filter.allow_similar:
            return entry
        for candidate in candidate_models(service, model):
            entry = self._exact(service, candidate)
            if entry is not None:
                return entry
        return None

    def entries(self, service: Optional[str] = None) -> List[PriceEntry]:
        """Visible entries (customs first), optionally for one service."""
        if service is not None:
            service = PRICE_SERVICE_ALIASES.get(service, service)
        merged: Dict[Key, PriceEntry] = dict(self._custom)
        for key, entry in self._entries().items():
            merged.setdefault(key, entry)
        return [
            e
            for e in merged.values()
            if e.mode in PRICE_TABLE_CHAT_MODES and (service is None or e.service == service)
        ]

    def cost(
        self,
        service: str,
        model: str,
        tokens: Optional[TokenUsage],
        *,
        local: bool = False,
        quality_filter: Optional[QualityFilter] = None,
    ) -> Usage:
        """Expand raw token counts into a costed :class:`Usage`.

        Local services always cost zero. A missing price entry leaves the
        costs as ``None``; it never raises.
        """
        tokens = tokens or TokenUsage()
        if local:
            return Usage.from_tokens(tokens, local=True)
        entry = self.get(service, model, quality_filter)
        if entry is None:
            log_event(_LOG, "price_table.miss", LogContext(service=service, model=model), level=logging.DEBUG)
            return Usage.from_tokens(tokens)
        return Usage.from_tokens(
            tokens,
            input_cost_per_token=entry.input_cost_per_token,
            output_cost_per_token=entry.output_cost_per_token,
        )

    def __len__(self) -> int:
        return len(self._entries())


_DEFAULT = PriceTable()


def get_price_table() -> PriceTable:
    """Process-wide table shared by every engine that is not given its own."""
    return _DEFAULT


__all__ = ["PriceTable", "get_price_table", "parse_snapshot"]
