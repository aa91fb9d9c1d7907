"""Tests for the LLM gateway."""

import json
import httpx
import pytest

from agent_squad.errors import ProviderError, ProviderUnavailable
from agent_squad.llm import LLMGateway


def _gateway(handler, **kwargs) -> LLMGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return LLMGateway(api_key=kwargs.pop("api_key", "sk-test"), client=client, **kwargs)


def _ok(content="done"):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class TestLLMGateway:
    """SUT: LLMGateway.generate"""

    async def test_returns_completion_text(self):
        """Should return choices[0].message.content."""
        gateway = _gateway(lambda request: _ok("hello there"))
        assert await gateway.generate("system", "user") == "hello there"

    async def test_request_shape(self):
        """Should send system and user messages with model settings and bearer auth."""
        seen = {}

        def handler(request: httpx.Request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return _ok()

        gateway = _gateway(handler, model="gpt-4o-mini", api_base="https://llm.example/v1/")
        await gateway.generate("be helpful", "build a todo app")

        assert seen["url"] == "https://llm.example/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["model"] == "gpt-4o-mini"
        assert seen["body"]["temperature"] == 0.7
        assert seen["body"]["max_tokens"] == 2000
        assert seen["body"]["messages"] == [
            {"role": "system", "content": "be helpful"},
            {"role": "user", "content": "build a todo app"},
        ]

    async def test_missing_key_fails_before_network(self):
        """Without a key, ProviderUnavailable is raised and nothing is sent."""
        calls = []

        def handler(request):
            calls.append(request)
            return _ok()

        gateway = _gateway(handler, api_key=None)
        with pytest.raises(ProviderUnavailable):
            await gateway.generate("system", "user")
        assert calls == []

    async def test_non_success_status(self):
        """A non-2xx response raises ProviderError."""
        gateway = _gateway(lambda request: httpx.Response(429, json={"error": "rate limited"}))
        with pytest.raises(ProviderError, match="429"):
            await gateway.generate("system", "user")

    @pytest.mark.parametrize("payload", [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {"content": None}}]},
    ])
    async def test_malformed_payload(self, payload):
        """A payload without choices[0].message.content raises ProviderError."""
        gateway = _gateway(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(ProviderError):
            await gateway.generate("system", "user")

    async def test_non_json_body(self):
        """A body that is not JSON raises ProviderError."""
        gateway = _gateway(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(ProviderError):
            await gateway.generate("system", "user")

    async def test_timeout(self):
        """A timeout surfaces as ProviderError."""
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        gateway = _gateway(handler, timeout=0.5)
        with pytest.raises(ProviderError, match="timed out"):
            await gateway.generate("system", "user")

    async def test_transport_error(self):
        """A connection failure surfaces as ProviderError."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        gateway = _gateway(handler)
        with pytest.raises(ProviderError):
            await gateway.generate("system", "user")

    def test_from_settings(self):
        """from_settings should copy provider settings."""
        from agent_squad.config import Settings

        settings = Settings(openai_api_key="sk-abc", openai_model="gpt-test", llm_timeout=5)
        gateway = LLMGateway.from_settings(settings)
        assert gateway.api_key == "sk-abc"
        assert gateway.model == "gpt-test"
        assert gateway.timeout == 5
