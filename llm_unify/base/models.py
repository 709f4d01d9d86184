"""
Provider-agnostic domain models public surface.

Re-exports the one-class-per-file implementations under
``llm_unify.base.models_parts``.
"""

from .models_parts.attachment import Attachment
from .models_parts.chat_response import ChatResponse
from .models_parts.conversation import Conversation
from .models_parts.message import ROLES, Message, MessageContent, Role
from .models_parts.model_info import ModelInfo
from .models_parts.price_entry import PriceEntry
from .models_parts.usage import TokenUsage, Usage

__all__ = [
    "Attachment",
    "ChatResponse",
    "Conversation",
    "Message",
    "MessageContent",
    "Role",
    "ROLES",
    "ModelInfo",
    "PriceEntry",
    "TokenUsage",
    "Usage",
]
