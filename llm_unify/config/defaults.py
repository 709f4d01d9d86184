"""llm_unify.config.defaults
=========================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables, an external
config file, or call-site options, but provide sensible fallbacks for local
development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Engine defaults ----
# Service used when neither options nor config name one.
DEFAULT_SERVICE = "ollama"
# Output token ceiling applied when a request does not set max_tokens.
DEFAULT_MAX_TOKENS = 1024

# ---- Price table ----
# Remote snapshot in litellm's model_prices_and_context_window.json format.
PRICE_TABLE_URL = (
    "https://raw.githubusercontent.com/BerriAI/litellm/refs/heads/main/"
    "model_prices_and_context_window.json"
)
# Bundled snapshot resource (package, file name).
PRICE_TABLE_RESOURCE = ("llm_unify.data", "model_prices.json")
# Modes visible through the public price lookup.
PRICE_TABLE_CHAT_MODES = ("chat", "responses")
# Services whose price table entries live under a different provider key.
PRICE_SERVICE_ALIASES = {"google": "gemini"}

# ---- Quality filter ----
# Keywords that mark catalog entries unsuitable for general text chat.
QUALITY_DENYLIST = (
    "audio",
    "vision",
    "embedding",
    "embed",
    "tts",
    "whisper",
    "image",
    "moderation",
    "realtime",
    "transcribe",
    "search",
    "dall-e",
    "davinci",
    "babbage",
    "instruct",
    "guard",
)

# ---- Service defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-opus-4-20250514"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"

OLLAMA_DEFAULT_MODEL = "gemma3:4b"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"

DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1/"

XAI_DEFAULT_MODEL = "grok-3"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1/"

OPENROUTER_DEFAULT_MODEL = "google/gemini-2.5-flash"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

GROQ_DEFAULT_MODEL = "deepseek-r1-distill-llama-70b"
GROQ_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1/"

GOOGLE_DEFAULT_MODEL = "gemini-2.0-flash"
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

LLAMAFILE_DEFAULT_MODEL = "llamafile"
LLAMAFILE_DEFAULT_BASE_URL = "http://localhost:8080/v1/"


__all__ = [
    "DEFAULT_SERVICE",
    "DEFAULT_MAX_TOKENS",
    "PRICE_TABLE_URL",
    "PRICE_TABLE_RESOURCE",
    "PRICE_TABLE_CHAT_MODES",
    "PRICE_SERVICE_ALIASES",
    "QUALITY_DENYLIST",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "XAI_DEFAULT_MODEL",
    "XAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "GROQ_DEFAULT_MODEL",
    "GROQ_DEFAULT_BASE_URL",
    "GOOGLE_DEFAULT_MODEL",
    "GOOGLE_DEFAULT_BASE_URL",
    "LLAMAFILE_DEFAULT_MODEL",
    "LLAMAFILE_DEFAULT_BASE_URL",
]
