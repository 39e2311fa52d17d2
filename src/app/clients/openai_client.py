"""OpenAI chat completions client."""

import structlog
from openai import AsyncOpenAI, OpenAIError

from app.clients.base import ClientNotConfiguredError
from app.clients.llm import LLMError, LLMResponse
from app.config import settings


logger = structlog.get_logger()


class OpenAIClient:
    provider = "openai"

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        self._api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
    ) -> LLMResponse:
        """Ask for a JSON object (``response_format=json_object``)."""
        if not self._api_key:
            raise ClientNotConfiguredError("OpenAI")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        client = AsyncOpenAI(api_key=self._api_key, timeout=settings.http_timeout_seconds)
        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            raise LLMError("OPENAI_ERROR", str(e)) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise LLMError("EMPTY_RESPONSE", "OpenAI returned no content")

        logger.info("openai_response_received", model=self.model)
        return LLMResponse(text=content, provider=self.provider, model=self.model)
