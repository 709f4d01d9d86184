"""Llamafile adapter (local, OpenAI-compatible chat/completions).

Llamafile should run with ``--v2`` for chat/completions compatibility. Tools
are not supported and are dropped; ``max_tokens`` becomes ``n_predict``.
There is no models endpoint: the catalog is the single loaded model.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional

from ..base.models import ModelInfo
from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import LLAMAFILE_DEFAULT_BASE_URL, LLAMAFILE_DEFAULT_MODEL


class LlamafileAdapter(OpenAIStyleAdapter):
    service: ClassVar[str] = "llamafile"
    DEFAULT_BASE_URL: ClassVar[str] = LLAMAFILE_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = LLAMAFILE_DEFAULT_MODEL
    is_local: ClassVar[bool] = True

    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        options.pop("tools", None)
        options = super().parse_options(options)
        if "max_tokens" in options:
            options["n_predict"] = options.pop("max_tokens")
        return options

    def static_models(self) -> Optional[List[ModelInfo]]:
        return [
            ModelInfo(
                service=self.service_name,
                model=self.default_model,
                name=self.default_model,
                created=datetime.now(timezone.utc),
            )
        ]


__all__ = ["LlamafileAdapter"]
