"""Typed parameter object for provider adapter initialization.

Purpose
-------
Capture the construction parameters every adapter needs (credentials, base
URL, default model, static headers) in one validated record. The registry
builds it from the merged service configuration.

External dependencies
---------------------
- Pydantic v2 ``BaseModel``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common adapter initialization parameters.

    Attributes
    ----------
    service:
        Service key the adapter is registered under. Lets the generic
        OpenAI-compatible adapter serve custom service names.
    model:
        Default model when a request does not name one.
    api_key:
        API key or token. Local services run without one.
    base_url:
        Override for the API base URL (proxies, self-hosted gateways).
    headers:
        Static HTTP headers added to every request.
    extra:
        Free-form service-specific configuration bag.
    """

    service: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
