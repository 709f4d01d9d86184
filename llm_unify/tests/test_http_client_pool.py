"""Unit tests for the shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- A closed client is replaced on next access.
- Timeouts derive from the environment-backed timeout config.
"""
from __future__ import annotations

from llm_unify.base.http import build_timeout, close_all_clients, get_httpx_client
from llm_unify.base.timeouts import get_timeout_config


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="prices")
    assert c1 is not c2  # nosec B101 - pytest assert in tests


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.other.com", purpose="chat")
    assert c1 is not c2  # nosec B101 - pytest assert in tests


def test_closed_client_is_recreated():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c1.close()
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c2 is not c1 and not c2.is_closed  # nosec B101 - pytest assert in tests


def test_build_timeout_uses_env(monkeypatch):
    monkeypatch.setenv("LLM_UNIFY_HTTP_TIMEOUT_SECONDS", "7")
    monkeypatch.setenv("LLM_UNIFY_STREAM_TIMEOUT_SECONDS", "70")
    monkeypatch.setenv("LLM_UNIFY_CONNECT_TIMEOUT_SECONDS", "3")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 7.0  # nosec B101 - pytest assert in tests
    assert build_timeout().read == 7.0  # nosec B101 - pytest assert in tests
    assert build_timeout(streaming=True).read == 70.0  # nosec B101 - pytest assert in tests
    assert build_timeout().connect == 3.0  # nosec B101 - pytest assert in tests
