"""
LLM Provider Factory.

Creates the LLM provider described by the YAML model config and settings.
"""
import logging
from typing import Optional

from mockprep.core.config import get_model_config, get_settings
from mockprep.providers.llm.base import BaseLLMProvider, LLMProvider
from mockprep.providers.llm.groq_provider import GroqProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.1-8b-instant"


class LLMProviderFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create(
        provider_type: Optional[str] = None,
        model: Optional[str] = None,
        **kwargs
    ) -> BaseLLMProvider:
        """
        Create an LLM provider instance.

        Args:
            provider_type: Provider type (groq, openai-compatible). If None, reads from config.
            model: Model name. If None, reads from config.
            **kwargs: Additional provider-specific arguments.

        Returns:
            Configured LLM provider instance.
        """
        settings = get_settings()
        llm_config = get_model_config().get("providers", {}).get("llm", {})

        provider_type = provider_type or llm_config.get("provider", LLMProvider.GROQ.value)
        model = model or llm_config.get("model", DEFAULT_MODEL)

        logger.info(f"Creating LLM provider: {provider_type} with model: {model}")

        if provider_type in (LLMProvider.GROQ.value, LLMProvider.OPENAI_COMPATIBLE.value):
            return GroqProvider(
                model=model,
                api_url=kwargs.pop("api_url", settings.groq_api_url),
                api_key=kwargs.pop("api_key", settings.groq_api_key),
                timeout=kwargs.pop("timeout", llm_config.get("timeout", 30.0)),
                **kwargs
            )

        raise ValueError(f"Unsupported LLM provider: {provider_type}")


# Global provider instance (lazy loaded)
_llm_provider: Optional[BaseLLMProvider] = None


def get_llm_provider_sync() -> BaseLLMProvider:
    """
    Get or create the global LLM provider instance.

    No health check is made; failures surface on first use.
    """
    global _llm_provider
    if _llm_provider is None:
        _llm_provider = LLMProviderFactory.create()
    return _llm_provider


async def close_llm_provider() -> None:
    """Close and forget the global provider instance."""
    global _llm_provider
    if _llm_provider is not None:
        await _llm_provider.close()
        _llm_provider = None
