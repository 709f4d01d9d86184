"""
Base package

Provider-agnostic building blocks shared by the engine and the adapters:

- Adapter contract: ``adapter.ProviderAdapter`` and the OpenAI-compatible
  base in ``openai_style``
- Models (DTOs): messages, conversations, usage, price entries, catalogs
- Streaming: byte decoding, canonical events, stream lifecycle
- Repositories: the process-wide price table
- Factory: the service name to adapter registry

Submodules are imported explicitly by callers; this package module stays
empty of imports so adapter modules can load without pulling in the engine.
"""
