"""Completion engine package: request orchestration, transport and catalogs."""

from .catalog import enrich, fetch_models, quality_models
from .completion import CompletionEngine
from .transport import Transport

__all__ = ["CompletionEngine", "Transport", "enrich", "fetch_models", "quality_models"]
