"""Pytest configuration for the llm_unify test suite.

Every test runs against a clean process-wide state: the price table snapshot
and custom entries are reset, pooled HTTP clients are closed, and config
caches are cleared with environment variables that would leak in from the
developer machine removed.

HTTP to remote hosts is never performed: tests build an ``httpx.Client`` over
``httpx.MockTransport`` (see :mod:`llm_unify.tests.helpers`) and inject it
into the engine. Cancellation tests that need a blocked socket read use the
loopback ``StalledServer``.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional

import httpx
import pytest

from llm_unify.base.http import close_all_clients
from llm_unify.base.repositories.price_table import get_price_table
from llm_unify.config import reset_config_cache

from .helpers import Recorder, json_body

_LEAKY_ENV = (
    "LLM_UNIFY_SERVICE",
    "LLM_UNIFY_CONFIG_FILE",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "DEEPSEEK_API_KEY",
    "XAI_API_KEY",
    "GROK_API_KEY",
    "OPENROUTER_API_KEY",
    "GROQ_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_MODEL",
    "OLLAMA_BASE_URL",
    "OLLAMA_MODEL",
)


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Reset shared state before and after each test."""
    for name in _LEAKY_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    get_price_table().reset()
    yield
    get_price_table().reset()
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def recorder() -> Callable[..., Recorder]:
    """Factory building a :class:`Recorder` from a responder."""

    def _make(responder: Optional[Callable[[httpx.Request], httpx.Response]] = None) -> Recorder:
        return Recorder(responder or json_body({}))

    return _make
