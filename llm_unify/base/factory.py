"""Adapter registry.

Purpose
-------
Map service names to :class:`ProviderAdapter` implementations. Built-in
adapters are imported lazily with ``importlib`` so creating an engine for one
service never imports the others. Callers add services with
:func:`register` and remove them with :func:`unregister`.

Resolution order
----------------
1. A registered adapter class for the service name.
2. A built-in adapter (``openai``, ``anthropic``, ``ollama``, ``deepseek``,
   ``xai``, ``openrouter``, ``groq``, ``google``, ``llamafile``).
3. The generic OpenAI-compatible adapter, when a ``base_url`` is configured
   for an otherwise unknown service.

Failure modes
-------------
- ``ConfigurationError`` for an unknown service without ``base_url``, an
  import failure, or a constructor error.
"""

from __future__ import annotations

import threading
from importlib import import_module
from typing import Dict, Optional, Tuple, Type

from .adapter import ProviderAdapter
from .dto.adapter_params import AdapterParams
from .errors import ConfigurationError
from .openai_style import OpenAIStyleAdapter

# Map canonical service names to import paths and class names
_BUILTIN: Dict[str, Tuple[str, str]] = {
    "openai": ("llm_unify.openai.client", "OpenAIAdapter"),
    "anthropic": ("llm_unify.anthropic.client", "AnthropicAdapter"),
    "ollama": ("llm_unify.ollama.client", "OllamaAdapter"),
    "deepseek": ("llm_unify.deepseek.client", "DeepSeekAdapter"),
    "xai": ("llm_unify.xai.client", "XAIAdapter"),
    "openrouter": ("llm_unify.openrouter.client", "OpenRouterAdapter"),
    "groq": ("llm_unify.groq.client", "GroqAdapter"),
    "google": ("llm_unify.google.client", "GoogleAdapter"),
    "llamafile": ("llm_unify.llamafile.client", "LlamafileAdapter"),
}


class AdapterRegistry:
    """Service name to adapter class map with lazy built-ins."""

    def __init__(self) -> None:
        self._registered: Dict[str, Type[ProviderAdapter]] = {}
        self._lock = threading.Lock()

    def register(self, adapter_cls: Type[ProviderAdapter], name: Optional[str] = None) -> str:
        """Register ``adapter_cls`` under ``name`` (default: its ``service``)."""
        key = (name or adapter_cls.service or "").lower().strip()
        if not key:
            raise ConfigurationError("adapter registration requires a service name")
        with self._lock:
            self._registered[key] = adapter_cls
        return key

    def unregister(self, name: str) -> bool:
        with self._lock:
            return self._registered.pop(name.lower().strip(), None) is not None

    def resolve(self, service: str, *, base_url: Optional[str] = None) -> Type[ProviderAdapter]:
        """Return the adapter class serving ``service``."""
        name = (service or "").lower().strip()
        registered = self._registered.get(name)
        if registered is not None:
            return registered
        spec = _BUILTIN.get(name)
        if spec is not None:
            module_path, class_name = spec
            try:
                return getattr(import_module(module_path), class_name)
            except (ImportError, AttributeError) as exc:  # pragma: no cover - packaging error
                raise ConfigurationError(
                    f"failed to load adapter '{class_name}' from '{module_path}': {exc}",
                    provider=name,
                ) from exc
        if base_url:
            return OpenAIStyleAdapter
        raise ConfigurationError(f"unknown service '{service}' (register an adapter or set base_url)", provider=name)

    def create(self, service: str, params: Optional[AdapterParams] = None) -> ProviderAdapter:
        """Instantiate the adapter for ``service``."""
        params = params or AdapterParams()
        adapter_cls = self.resolve(service, base_url=params.base_url)
        if params.service is None:
            params = params.model_copy(update={"service": (service or "").lower().strip()})
        try:
            return adapter_cls(params)
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(f"failed to initialize adapter for '{service}': {exc}", provider=service) from exc

    def supported(self) -> Tuple[str, ...]:
        """Built-in and registered service names in deterministic order."""
        names = list(_BUILTIN)
        names.extend(n for n in self._registered if n not in _BUILTIN)
        return tuple(names)

    def is_local(self, service: str, *, base_url: Optional[str] = None) -> bool:
        return bool(self.resolve(service, base_url=base_url).is_local)


REGISTRY = AdapterRegistry()


def register(adapter_cls: Type[ProviderAdapter], name: Optional[str] = None) -> str:
    """Register a custom adapter on the process-wide registry."""
    return REGISTRY.register(adapter_cls, name)


def unregister(name: str) -> bool:
    return REGISTRY.unregister(name)


def create_adapter(service: str, params: Optional[AdapterParams] = None) -> ProviderAdapter:
    return REGISTRY.create(service, params)


__all__ = ["AdapterRegistry", "REGISTRY", "register", "unregister", "create_adapter"]
