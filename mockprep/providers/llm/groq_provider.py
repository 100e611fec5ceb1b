"""
Groq Provider Implementation.

Connects to Groq's hosted Llama models through its OpenAI-compatible
chat completions API.
"""
import time
import logging
from typing import List, Optional

import httpx

from mockprep.core.exceptions import LLMResponseError
from mockprep.providers.llm.base import (
    BaseLLMProvider,
    Message,
    GenerationConfig,
    LLMResponse,
)

logger = logging.getLogger(__name__)


class GroqProvider(BaseLLMProvider):
    """
    Groq provider using the OpenAI-compatible API.

    Any server speaking the same protocol can be used by pointing
    ``api_url`` at it.
    """

    def __init__(
        self,
        model: str,
        api_url: str = "https://api.groq.com/openai/v1",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        **kwargs
    ):
        """
        Initialize Groq provider.

        Args:
            model: Model name (e.g., "llama-3.1-8b-instant")
            api_url: Base URL of the OpenAI-compatible API
            api_key: Groq API key (``gsk_...``)
            timeout: Socket-level request timeout in seconds
        """
        super().__init__(model, **kwargs)
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

        # HTTP client with connection pooling
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=self._build_headers(),
        )

    def _build_headers(self) -> dict:
        """Build request headers."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def generate(
        self,
        messages: List[Message],
        config: Optional[GenerationConfig] = None,
    ) -> LLMResponse:
        """
        Generate a response using the chat completions API.
        """
        config = config or GenerationConfig()
        start_time = time.time()

        payload = {
            "model": self.model,
            "messages": [msg.to_dict() for msg in messages],
            "stream": False,
            **config.to_dict(),
        }

        try:
            response = await self._client.post(
                f"{self.api_url}/chat/completions",
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Groq API error: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Groq connection error: {e}")
            raise
        except ValueError as e:
            raise LLMResponseError(f"Groq API returned a non-JSON body: {e}")

        try:
            choice = data["choices"][0]
            content = choice["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseError(f"Unexpected Groq response shape: {e!r}")

        if not isinstance(content, str):
            raise LLMResponseError("Groq response content is not text")

        latency_ms = (time.time() - start_time) * 1000
        logger.debug(f"Groq response received in {latency_ms:.0f}ms")

        return LLMResponse(
            content=content,
            model=data.get("model", self.model),
            finish_reason=choice.get("finish_reason"),
            usage=data.get("usage"),
            latency_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        """Check if the Groq API is reachable with the configured key."""
        try:
            response = await self._client.get(f"{self.api_url}/models")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()
