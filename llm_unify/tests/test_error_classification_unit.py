from __future__ import annotations

import types

import httpx

from llm_unify.base.errors import (
    AbortError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    ProviderError,
    TransportError,
    UnknownModelError,
    classify_exception,
    classify_status,
    is_retryable,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests


def test_classify_status_codes():
    assert classify_status(401) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests
    assert classify_status(429) is ErrorCode.RATE_LIMIT  # nosec B101 - assert is appropriate in unit tests
    assert classify_status(599) is ErrorCode.SERVER_ERROR  # nosec B101 - assert is appropriate in unit tests
    assert classify_status(418) is ErrorCode.UNKNOWN  # nosec B101 - assert is appropriate in unit tests


def test_classify_httpx_exceptions():
    req = httpx.Request("GET", "http://localhost")
    assert classify_exception(httpx.ReadTimeout("slow", request=req)) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpx.ConnectError("refused", request=req)) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101 - assert is appropriate in unit tests


def test_retryable_codes():
    assert is_retryable(ErrorCode.RATE_LIMIT)  # nosec B101 - assert is appropriate in unit tests
    assert not is_retryable(ErrorCode.AUTH)  # nosec B101 - assert is appropriate in unit tests


def test_error_kinds_are_provider_errors_with_codes():
    assert ConfigurationError("no key").code is ErrorCode.CONFIGURATION  # nosec B101 - assert is appropriate in unit tests
    assert AbortError().code is ErrorCode.CANCELLED  # nosec B101 - assert is appropriate in unit tests
    assert DecodeError("bad", remainder="{").remainder == "{"  # nosec B101 - assert is appropriate in unit tests
    err = TransportError("boom", provider="openai", status_code=500, code=ErrorCode.SERVER_ERROR)
    assert isinstance(err, ProviderError) and err.status_code == 500  # nosec B101 - assert is appropriate in unit tests
    assert "openai" in str(err) and "server_error" in str(err).lower()  # nosec B101 - assert is appropriate in unit tests


def test_unknown_model_error_is_lookup_error():
    err = UnknownModelError("missing", provider="openai", model="gpt-x")
    assert isinstance(err, LookupError)  # nosec B101 - assert is appropriate in unit tests
    assert err.code is ErrorCode.UNKNOWN_MODEL  # nosec B101 - assert is appropriate in unit tests
