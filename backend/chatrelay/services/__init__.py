"""
Services Module

- Identity store and message log (Tortoise-backed persistence)
- Responder selection
- Generation gateway (Ollama-compatible HTTP backend)
- Conversation relay (orchestrates all of the above)
"""

from .identity_store import IdentityStore
from .message_log import MessageLog
from .responder_selector import ResponderSelector
from .generation_base import (
    GenerationReply,
    GenerationService,
    build_prompt,
)
from .generation_factory import get_generation_service
from .generation_ollama import OllamaGenerationService, ollama_generation_service
from .relay import (
    ConversationRelay,
    RelayOutcome,
    RelayResult,
)

__all__ = [
    # Persistence
    "IdentityStore",
    "MessageLog",
    # Selection
    "ResponderSelector",
    # Generation
    "GenerationReply",
    "GenerationService",
    "build_prompt",
    "get_generation_service",
    "OllamaGenerationService",
    "ollama_generation_service",
    # Relay
    "ConversationRelay",
    "RelayOutcome",
    "RelayResult",
]
