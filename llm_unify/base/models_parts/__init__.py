"""Models parts package public surface.

Re-exports individual DTOs; `llm_unify.base.models` remains the primary
stable import path.
"""

from .attachment import Attachment
from .chat_response import ChatResponse
from .conversation import Conversation
from .message import ROLES, Message, MessageContent, Role
from .model_info import ModelInfo
from .price_entry import PriceEntry
from .usage import TokenUsage, Usage

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
