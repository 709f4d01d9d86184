"""Unified configuration layer.

Goals
-----
* Centralize defaults (models, base URLs).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``LLM_UNIFY_CONFIG_FILE``
    3. Environment variables (e.g. ``OPENAI_MODEL``, ``OPENAI_API_KEY``)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_service_config(service)``.

Environment Variable Conventions
--------------------------------
``<SERVICE>_MODEL``, ``<SERVICE>_API_KEY``, ``<SERVICE>_BASE_URL``, e.g.
``ANTHROPIC_MODEL``, ``OLLAMA_BASE_URL``. ``LLM_UNIFY_SERVICE`` selects the
default service. A ``.env`` file (path from ``DOTENV_FILE``, default
``.env``) is read once before the environment is consulted.

External Config File
--------------------
Structure example (YAML)::

    default_service: anthropic
    anthropic:
      model: claude-3-5-haiku-latest
    ollama:
      base_url: http://gpu-box:11434
      max_tokens: 2048

Public API
----------
* get_service_config(service, overrides=None) -> dict
* get_default_service() -> str
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    DEEPSEEK_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_MODEL,
    DEFAULT_SERVICE,
    GOOGLE_DEFAULT_BASE_URL,
    GOOGLE_DEFAULT_MODEL,
    GROQ_DEFAULT_BASE_URL,
    GROQ_DEFAULT_MODEL,
    LLAMAFILE_DEFAULT_BASE_URL,
    LLAMAFILE_DEFAULT_MODEL,
    OLLAMA_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_service_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_BASE_URL},
    "deepseek": {"model": DEEPSEEK_DEFAULT_MODEL, "base_url": DEEPSEEK_DEFAULT_BASE_URL},
    "xai": {"model": XAI_DEFAULT_MODEL, "base_url": XAI_DEFAULT_BASE_URL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "groq": {"model": GROQ_DEFAULT_MODEL, "base_url": GROQ_DEFAULT_BASE_URL},
    "google": {"model": GOOGLE_DEFAULT_MODEL, "base_url": GOOGLE_DEFAULT_BASE_URL},
    "llamafile": {"model": LLAMAFILE_DEFAULT_MODEL, "base_url": LLAMAFILE_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables win unless their value looks like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                if k.startswith("export "):
                    k = k[len("export "):].strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional JSON/YAML config file."""
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("LLM_UNIFY_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides(service: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = service.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    key, _ = resolve_service_key(service)
    if key and not is_placeholder(key):
        out["api_key"] = key
    return out


def get_service_config(service: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for ``service``.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` override values are ignored so unset call-site options never mask
    configured values.
    """
    _load_dotenv_once()
    name = (service or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_default_service() -> str:
    """Return the service used when a caller does not name one.

    Precedence: ``LLM_UNIFY_SERVICE`` env var, then ``default_service`` in the
    external config file, then the built-in default.
    """
    _load_dotenv_once()
    env_val = os.getenv("LLM_UNIFY_SERVICE")
    if env_val:
        return env_val.strip().lower()
    file_val = _load_external_config().get("default_service")
    if isinstance(file_val, str) and file_val.strip():
        return file_val.strip().lower()
    return DEFAULT_SERVICE


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_service_config",
    "get_default_service",
    "reset_config_cache",
    "DEFAULTS",
]
