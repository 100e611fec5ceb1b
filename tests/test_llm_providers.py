"""
LLM Provider Unit Tests.

Tests the Groq provider and factory with mocked HTTP responses.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from mockprep.core.exceptions import LLMResponseError
from mockprep.providers.llm.base import (
    Message,
    GenerationConfig,
    LLMResponse,
    system_message,
    user_message,
)
from mockprep.providers.llm.groq_provider import GroqProvider
from mockprep.providers.llm.factory import LLMProviderFactory, get_llm_provider_sync


class TestMessages:
    """Tests for message helpers and generation config."""

    def test_message_helpers(self):
        assert system_message("be brief").to_dict() == {"role": "system", "content": "be brief"}
        assert user_message("hi") == Message(role="user", content="hi")

    def test_config_without_json_mode(self):
        payload = GenerationConfig(max_tokens=100, temperature=0.2).to_dict()

        assert payload["max_tokens"] == 100
        assert payload["temperature"] == 0.2
        assert "response_format" not in payload

    def test_config_with_json_mode(self):
        payload = GenerationConfig(json_mode=True).to_dict()

        assert payload["response_format"] == {"type": "json_object"}

    def test_tokens_used(self):
        response = LLMResponse(content="", model="m", usage={"total_tokens": 42})
        assert response.tokens_used == 42
        assert LLMResponse(content="", model="m").tokens_used == 0


class TestGroqProvider:
    """Test GroqProvider with mocked HTTP."""

    @pytest.fixture
    def provider(self):
        """Create GroqProvider instance."""
        return GroqProvider(
            model="llama-3.1-8b-instant",
            api_url="https://api.groq.com/openai/v1/",
            api_key="gsk_test",
        )

    @pytest.fixture
    def sample_messages(self):
        return [
            system_message("You are an expert technical interviewer."),
            user_message("Generate EXACTLY 5 interview questions."),
        ]

    @pytest.fixture
    def chat_completion(self):
        """Sample OpenAI-compatible chat completion body."""
        return {
            "id": "chatcmpl-123",
            "model": "llama-3.1-8b-instant",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": '{"questions": []}'},
                    "finish_reason": "stop",
                }
            ],
            "usage": {"prompt_tokens": 30, "completion_tokens": 5, "total_tokens": 35},
        }

    def _mock_response(self, body=None, json_error=None):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.raise_for_status = MagicMock()
        if json_error is not None:
            mock_response.json.side_effect = json_error
        else:
            mock_response.json.return_value = body
        return mock_response

    def test_initialization(self, provider):
        assert provider.model == "llama-3.1-8b-instant"
        assert provider.api_url == "https://api.groq.com/openai/v1"  # Trailing slash removed
        assert provider._client.headers["Authorization"] == "Bearer gsk_test"

    @pytest.mark.asyncio
    async def test_generate_success(self, provider, sample_messages, chat_completion):
        with patch.object(provider._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = self._mock_response(chat_completion)

            result = await provider.generate(
                sample_messages, GenerationConfig(max_tokens=1500, temperature=0.8, json_mode=True)
            )

            assert isinstance(result, LLMResponse)
            assert result.content == '{"questions": []}'
            assert result.finish_reason == "stop"
            assert result.tokens_used == 35
            assert result.latency_ms is not None

            url = mock_post.call_args[0][0]
            payload = mock_post.call_args.kwargs["json"]
            assert url == "https://api.groq.com/openai/v1/chat/completions"
            assert payload["model"] == "llama-3.1-8b-instant"
            assert payload["max_tokens"] == 1500
            assert payload["temperature"] == 0.8
            assert payload["response_format"] == {"type": "json_object"}
            assert payload["messages"][0]["role"] == "system"
            assert payload["stream"] is False

    @pytest.mark.asyncio
    async def test_generate_http_error(self, provider, sample_messages):
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.text = '{"error": "internal"}'
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server Error", request=MagicMock(), response=mock_response
        )

        with patch.object(provider._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = mock_response

            with pytest.raises(httpx.HTTPStatusError):
                await provider.generate(sample_messages)

    @pytest.mark.asyncio
    async def test_generate_connection_error(self, provider, sample_messages):
        with patch.object(provider._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ConnectError("Connection refused")

            with pytest.raises(httpx.ConnectError):
                await provider.generate(sample_messages)

    @pytest.mark.asyncio
    async def test_generate_non_json_body(self, provider, sample_messages):
        with patch.object(provider._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = self._mock_response(json_error=ValueError("Expecting value"))

            with pytest.raises(LLMResponseError):
                await provider.generate(sample_messages)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
    ])
    async def test_generate_malformed_body(self, provider, sample_messages, body):
        with patch.object(provider._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = self._mock_response(body)

            with pytest.raises(LLMResponseError):
                await provider.generate(sample_messages)

    @pytest.mark.asyncio
    async def test_health_check(self, provider):
        with patch.object(provider._client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = MagicMock(status_code=200)
            assert await provider.health_check() is True

            mock_get.side_effect = httpx.ConnectError("down")
            assert await provider.health_check() is False

    @pytest.mark.asyncio
    async def test_close(self, provider):
        await provider.close()
        assert provider._client.is_closed


class TestLLMProviderFactory:
    """Tests for provider creation from config."""

    def test_create_groq_from_config(self):
        provider = LLMProviderFactory.create()

        assert isinstance(provider, GroqProvider)
        assert provider.model == "llama-3.1-8b-instant"

    def test_create_with_overrides(self):
        provider = LLMProviderFactory.create(
            "openai-compatible",
            model="llama-3.3-70b-versatile",
            api_url="http://localhost:8001/v1",
            api_key="gsk_other",
        )

        assert provider.model == "llama-3.3-70b-versatile"
        assert provider.api_url == "http://localhost:8001/v1"
        assert provider.api_key == "gsk_other"

    def test_unsupported_provider(self):
        with pytest.raises(ValueError):
            LLMProviderFactory.create("carrier-pigeon")

    def test_get_llm_provider_sync_singleton(self):
        import mockprep.providers.llm.factory as factory
        factory._llm_provider = None

        first = get_llm_provider_sync()
        assert get_llm_provider_sync() is first

        factory._llm_provider = None
