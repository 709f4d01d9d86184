"""llm_unify.config.env
=====================

Centralized environment variable mapping for service credentials.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Services that accept more than
  one variable name list them in ``ENV_ALIASES`` with the canonical name first
  to establish precedence.
- Services not listed fall back to ``<SERVICE>_API_KEY`` so custom registered
  services work without extra wiring.

Failure Modes
-------------
- Helpers never raise on unknown services or unset variables; callers decide
  how to proceed (the engine raises ``ConfigurationError`` for non-local
  services without a key).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical service -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "xai": "XAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "groq": "GROQ_API_KEY",
    "google": "GEMINI_API_KEY",
}

# Service -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "xai": ("XAI_API_KEY", "GROK_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(service: str) -> str:
    """Return the canonical environment variable name for ``service``."""
    s = (service or "").lower()
    return ENV_MAP.get(s) or f"{s.upper()}_API_KEY"


def get_env_var_candidates(service: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a service, canonical first."""
    canonical = get_env_var_name(service)
    yield canonical
    for alias in ENV_ALIASES.get((service or "").lower(), ()):
        if alias != canonical:
            yield alias


def resolve_service_key(service: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``service`` from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(service):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_service_key",
]
