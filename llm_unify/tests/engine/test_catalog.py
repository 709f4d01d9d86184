"""Model catalog listing, price enrichment and quality filtering."""
from __future__ import annotations

import pytest

from llm_unify.base.dto.quality_filter import QualityFilter
from llm_unify.base.errors import UnknownModelError
from llm_unify.engine import CompletionEngine

from ..helpers import json_body

OPENAI_CATALOG = {
    "object": "list",
    "data": [
        {"id": "gpt-4o-mini", "created": 1721172741},
        {"id": "text-embedding-3-small", "created": 1705948997},
        {"id": "whisper-1", "created": 1677532384},
    ],
}


def _engine(recorder, payload, **options):
    return CompletionEngine(client=recorder(json_body(payload)).client(), **options)


def test_models_are_enriched_with_price_fields(recorder):
    engine = _engine(recorder, {"data": [{"id": "gpt-4o-mini", "created": 1721172741}]}, service="openai", api_key="sk-1")
    (model,) = engine.get_models()
    assert model.priced and model.mode == "chat"  # nosec B101 - pytest assert in tests
    assert model.input_cost_per_token == pytest.approx(1.5e-7)  # nosec B101 - pytest assert in tests
    assert model.output_cost_per_token == pytest.approx(6e-7)  # nosec B101 - pytest assert in tests


def test_unpriced_model_raises_unless_allowed(recorder):
    payload = {"data": [{"id": "gpt-9-turbo"}]}
    with pytest.raises(UnknownModelError):
        _engine(recorder, payload, service="openai", api_key="sk-1").get_models()
    lenient = _engine(recorder, payload, service="openai", api_key="sk-1", quality_filter={"allow_unknown": True})
    (model,) = lenient.get_models()
    assert not model.priced and model.input_cost_per_token == 0.0  # nosec B101


def test_quality_models_drop_non_chat_and_unpriced(recorder):
    payload = {"data": OPENAI_CATALOG["data"] + [{"id": "gpt-9-turbo"}]}
    engine = _engine(recorder, payload, service="openai", api_key="sk-1")
    assert [m.model for m in engine.get_quality_models()] == ["gpt-4o-mini"]  # nosec B101


def test_similar_lookup_finds_latest_alias(recorder):
    payload = {"data": [{"id": "grok-3"}]}
    strict = _engine(recorder, payload, service="xai", api_key="xai-1")
    with pytest.raises(UnknownModelError):
        strict.get_models()
    fuzzy = _engine(recorder, payload, service="xai", api_key="xai-1", quality_filter=QualityFilter(allow_similar=True))
    (model,) = fuzzy.get_models()
    assert model.model == "grok-3" and model.priced  # nosec B101 - pytest assert in tests


def test_local_catalog_never_raises(recorder):
    tags = {"models": [{"name": "llama3.1:latest", "model": "llama3.1:latest"}, {"name": "mystery:7b", "model": "mystery:7b"}]}
    engine = _engine(recorder, tags, service="ollama")
    models = engine.get_models()
    assert [m.model for m in models] == ["llama3.1:latest", "mystery:7b"]  # nosec B101
    assert all(m.input_cost_per_token == 0.0 for m in models)  # nosec B101 - pytest assert in tests
    assert len(engine.get_quality_models()) == 2  # nosec B101 - pytest assert in tests


def test_static_catalog_skips_http(recorder):
    rec = recorder()
    engine = CompletionEngine(service="llamafile", client=rec.client())
    assert [m.model for m in engine.get_models()] == ["llamafile"]  # nosec B101 - pytest assert in tests
    assert rec.requests == []  # nosec B101 - pytest assert in tests


def test_google_catalog_prices_under_gemini(recorder):
    payload = {"data": [{"id": "models/gemini-2.0-flash"}, {"id": "models/text-embedding-004"}]}
    engine = _engine(recorder, payload, service="google", api_key="g-1")
    assert [m.model for m in engine.get_quality_models()] == ["gemini-2.0-flash"]  # nosec B101
