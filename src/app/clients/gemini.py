"""Google Gemini client built on the google-genai SDK."""

import httpx
import structlog
from google import genai
from google.genai import errors, types

from app.clients.base import ClientNotConfiguredError
from app.clients.llm import LLMError, LLMResponse
from app.config import settings


logger = structlog.get_logger()


class GeminiClient:
    """Thin wrapper over ``genai.Client().aio``.

    With ``grounded=True`` the model may run Google Search while answering;
    the search queries and source URLs it used are returned on the response.
    """

    provider = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        self._api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def generate(
        self,
        prompt: str,
        temperature: float = 0.3,
        json_output: bool = True,
        grounded: bool = False,
    ) -> LLMResponse:
        if not self._api_key:
            raise ClientNotConfiguredError("Gemini")

        if grounded:
            # JSON mime type cannot be combined with tools
            config = types.GenerateContentConfig(
                temperature=temperature,
                tools=[types.Tool(google_search=types.GoogleSearch())],
            )
        elif json_output:
            config = types.GenerateContentConfig(
                temperature=temperature,
                response_mime_type="application/json",
            )
        else:
            config = types.GenerateContentConfig(temperature=temperature)

        client = genai.Client(api_key=self._api_key)
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise LLMError("GEMINI_ERROR", str(e)) from e

        if not response.text:
            raise LLMError("EMPTY_RESPONSE", "Gemini returned no text")

        result = LLMResponse(text=response.text, provider=self.provider, model=self.model)
        if grounded:
            _attach_grounding(result, response)

        logger.info("gemini_response_received", model=self.model, grounded=grounded)
        return result


def _attach_grounding(result: LLMResponse, response: types.GenerateContentResponse) -> None:
    candidates = response.candidates or []
    metadata = candidates[0].grounding_metadata if candidates else None
    if not metadata:
        return
    result.search_queries = list(metadata.web_search_queries or [])
    result.sources = [
        chunk.web.uri
        for chunk in (metadata.grounding_chunks or [])
        if chunk.web and chunk.web.uri
    ][:5]
