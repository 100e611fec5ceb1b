"""
LLM Providers Package.

Provides the Groq chat-completion backend behind a swappable interface.
"""
from mockprep.providers.llm.base import (
    BaseLLMProvider,
    LLMProvider,
    Message,
    GenerationConfig,
    LLMResponse,
    system_message,
    user_message,
)
from mockprep.providers.llm.groq_provider import GroqProvider
from mockprep.providers.llm.factory import (
    LLMProviderFactory,
    get_llm_provider_sync,
    close_llm_provider,
)

__all__ = [
    # Base classes
    "BaseLLMProvider",
    "LLMProvider",
    "Message",
    "GenerationConfig",
    "LLMResponse",
    # Message helpers
    "system_message",
    "user_message",
    # Providers
    "GroqProvider",
    # Factory
    "LLMProviderFactory",
    "get_llm_provider_sync",
    "close_llm_provider",
]
