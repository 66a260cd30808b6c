"""Provider implementations."""

from .base import Provider
from .gemini import GeminiProvider
from .mock import MockProvider
from .models import ConversationTurn, GenerationRequest, GenerationResult

__all__ = [
    "ConversationTurn",
    "GeminiProvider",
    "GenerationRequest",
    "GenerationResult",
    "MockProvider",
    "Provider",
]
