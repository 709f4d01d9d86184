"""Model catalog retrieval and price enrichment.

``fetch_models`` lists a service's models (from its models endpoint, or the
adapter's static list) and enriches each entry with the matching price table
record. ``quality_models`` narrows that list to general-purpose chat models.
"""
from __future__ import annotations

from typing import List, Optional

from ..base.adapter import ProviderAdapter
from ..base.cancellation import CancellationToken
from ..base.dto.quality_filter import QualityFilter
from ..base.errors import UnknownModelError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelInfo, PriceEntry
from ..base.repositories.price_table import PriceTable
from .transport import Transport

_LOG = get_logger("llm_unify.catalog")


def enrich(
    models: List[ModelInfo],
    adapter: ProviderAdapter,
    prices: PriceTable,
    quality_filter: Optional[QualityFilter] = None,
) -> List[ModelInfo]:
    """Attach price table fields to each model.

    A model without a price entry raises ``UnknownModelError`` unless
    ``allow_unknown`` is set or the service is local; those get a zero-cost
    entry and ``priced=False``.
    """
    qf = quality_filter or QualityFilter()
    out: List[ModelInfo] = []
    for info in models:
        entry = prices.get(adapter.price_service, info.model, qf)
        if entry is not None:
            out.append(info.with_price(entry))
            continue
        if not (qf.allow_unknown or adapter.is_local):
            raise UnknownModelError(
                f"no price table entry for {adapter.service_name}/{info.model}",
                provider=adapter.service_name,
                model=info.model,
            )
        out.append(info.with_price(PriceEntry.zero_cost(adapter.price_service, info.model), priced=False))
    return out


def fetch_models(
    adapter: ProviderAdapter,
    transport: Transport,
    prices: PriceTable,
    token: CancellationToken,
    quality_filter: Optional[QualityFilter] = None,
) -> List[ModelInfo]:
    """List and enrich the models of ``adapter``'s service."""
    models = adapter.static_models()
    source = "static"
    if models is None:
        body = transport.request_json(adapter.models_request(), token, provider=adapter.service_name)
        models = [adapter.parse_model(raw) for raw in adapter.parse_models_response(body)]
        models = [m for m in models if m.model]
        source = "remote"
    log_event(_LOG, "catalog.fetch", LogContext(service=adapter.service_name), source=source, count=len(models))
    return enrich(models, adapter, prices, quality_filter)


def quality_models(
    adapter: ProviderAdapter,
    transport: Transport,
    prices: PriceTable,
    token: CancellationToken,
    quality_filter: Optional[QualityFilter] = None,
) -> List[ModelInfo]:
    """Priced, chat-capable models that pass the adapter's keyword filter.

    Unpriced models are dropped instead of raising; local services keep their
    zero-cost entries.
    """
    qf = quality_filter or QualityFilter()
    lenient = QualityFilter(allow_similar=qf.allow_similar, allow_unknown=True)
    models = fetch_models(adapter, transport, prices, token, lenient)
    return [
        m
        for m in models
        if (m.priced or adapter.is_local or qf.allow_unknown) and adapter.filter_quality_model(m)
    ]


__all__ = ["enrich", "fetch_models", "quality_models"]
