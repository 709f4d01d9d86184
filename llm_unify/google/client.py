"""Google Gemini adapter (OpenAI-compatible endpoint).

Prices for this service are listed under the ``gemini`` provider key.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, ClassVar

from ..base.models import ModelInfo
from ..base.openai_style import OpenAIStyleAdapter
from ..config.defaults import GOOGLE_DEFAULT_BASE_URL, GOOGLE_DEFAULT_MODEL

_MODEL_PREFIX = "models/"


class GoogleAdapter(OpenAIStyleAdapter):
    service: ClassVar[str] = "google"
    DEFAULT_BASE_URL: ClassVar[str] = GOOGLE_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = GOOGLE_DEFAULT_MODEL

    def parse_model(self, raw: Any) -> ModelInfo:
        info = super().parse_model(raw)
        # catalog ids come back as "models/<id>"
        if info.model.startswith(_MODEL_PREFIX):
            model_id = info.model[len(_MODEL_PREFIX):]
            name = info.name if info.name != info.model else model_id
            info = replace(info, model=model_id, name=name)
        return info


__all__ = ["GoogleAdapter"]
