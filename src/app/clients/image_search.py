"""Google Custom Search image lookup."""

from typing import Any

import httpx
import structlog

from app.clients.base import ClientError, ClientNotConfiguredError
from app.config import settings


logger = structlog.get_logger()

SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
RESULTS_PER_QUERY = 10


class ImageSearchError(ClientError):
    """Custom Search request failed."""


class ImageSearchClient:
    def __init__(
        self,
        api_key: str | None = None,
        engine_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or settings.google_search_api_key
        self._engine_id = engine_id or settings.google_search_engine_id
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._engine_id)

    async def search_images(self, query: str, num: int = RESULTS_PER_QUERY) -> list[str]:
        """Image URLs for ``query``, in ranking order.

        Raises:
            ClientNotConfiguredError: If the API key or engine id is missing
            ImageSearchError: If the request fails
        """
        if not self.is_configured:
            raise ClientNotConfiguredError("Google Custom Search")

        params: dict[str, Any] = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query,
            "searchType": "image",
            "num": num,
            "safe": "active",
        }

        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout_seconds, transport=self._transport
            ) as client:
                response = await client.get(SEARCH_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ImageSearchError(
                "API_ERROR",
                f"Custom Search returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ImageSearchError("CONNECTION_ERROR", str(e)) from e

        links = [item.get("link") for item in data.get("items") or []]
        links = [link for link in links if isinstance(link, str) and link]
        logger.info("image_search_completed", query=query, count=len(links))
        return links
