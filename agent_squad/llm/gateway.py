"""LLM Gateway - one chat completion per persona turn."""

from typing import Optional

import httpx

from ..errors import ProviderError, ProviderUnavailable
from ..utils.logger import get_app_logger


class LLMGateway:
    """Calls an OpenAI-compatible chat completion endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        api_base: str = "https://api.openai.com/v1",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the gateway.

        Args:
            api_key: Provider credential; checked on every call
            model: Chat completion model name
            api_base: Base URL, without the /chat/completions suffix
            temperature: Sampling temperature
            max_tokens: Maximum completion tokens
            timeout: Per-call timeout in seconds
            client: Optional shared httpx client (tests inject a MockTransport here)
        """
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client = client
        self.logger = get_app_logger()

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.AsyncClient] = None) -> "LLMGateway":
        """Build a gateway from application settings."""
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            api_base=settings.openai_api_base,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout,
            client=client
        )

    async def generate(self, system_instructions: str, user_prompt: str) -> str:
        """
        Generate a completion.

        Args:
            system_instructions: Persona instruction text
            user_prompt: Utterance or transcript context

        Returns:
            Raw completion text

        Raises:
            ProviderUnavailable: If no API key is configured
            ProviderError: On transport failure, timeout, non-2xx status or malformed payload
        """
        if not self.api_key:
            raise ProviderUnavailable("LLM API key not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instructions},
                {"role": "user", "content": user_prompt}
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        url = f"{self.api_base}/chat/completions"

        self.logger.debug(f"[LLM] POST {url} model={self.model} prompt_chars={len(user_prompt)}")

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ProviderError(f"LLM call timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"LLM request failed: {e}") from e

        if not response.is_success:
            raise ProviderError(
                f"LLM call returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Invalid LLM response format: {e}") from e

        if not isinstance(content, str):
            raise ProviderError("Invalid LLM response format: content is not text")

        return content
