"""Fetch a product page and read its title and OpenGraph metadata."""

from dataclasses import asdict, dataclass
from html.parser import HTMLParser
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import unquote, urlparse

import httpx
import structlog

from app.clients.base import ClientError
from app.config import settings


logger = structlog.get_logger()

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
OG_PROPERTIES = ("og:title", "og:description", "og:image", "og:site_name")


class WebFetchError(ClientError):
    """The page could not be fetched."""


@dataclass
class PageMetadata:
    url: str
    title: str | None = None
    description: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    og_site_name: str | None = None

    @property
    def best_title(self) -> str | None:
        return self.og_title or self.title

    @property
    def best_description(self) -> str | None:
        return self.og_description or self.description

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class _MetaParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.title: str | None = None
        self.meta: dict[str, str] = {}
        self._in_title = False
        self._title_parts: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "title" and self.title is None:
            self._in_title = True
        elif tag == "meta":
            attributes = {k.lower(): v for k, v in attrs if v is not None}
            key = attributes.get("property") or attributes.get("name")
            content = attributes.get("content")
            if key and content and key.lower() not in self.meta:
                self.meta[key.lower()] = content.strip()

    def handle_endtag(self, tag: str) -> None:
        if tag == "title" and self._in_title:
            self._in_title = False
            self.title = "".join(self._title_parts).strip() or None

    def handle_data(self, data: str) -> None:
        if self._in_title:
            self._title_parts.append(data)


def parse_page_metadata(url: str, html: str) -> PageMetadata:
    parser = _MetaParser()
    parser.feed(html)
    parser.close()
    return PageMetadata(
        url=url,
        title=parser.title,
        description=parser.meta.get("description"),
        og_title=parser.meta.get("og:title"),
        og_description=parser.meta.get("og:description"),
        og_image=parser.meta.get("og:image"),
        og_site_name=parser.meta.get("og:site_name"),
    )


def name_from_url(url: str) -> str | None:
    """Guess a product name from the last path segment.

    ``/productos/muffin-de-zanahoria.html`` gives ``muffin de zanahoria``.
    """
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        return None
    stem = PurePosixPath(unquote(segments[-1])).stem
    name = stem.replace("-", " ").replace("_", " ").strip()
    return name or None


async def fetch_page_metadata(
    url: str, transport: httpx.AsyncBaseTransport | None = None
) -> PageMetadata:
    """Download ``url`` with a browser User-Agent and parse its metadata.

    Raises:
        WebFetchError: On network errors or non-2xx responses
    """
    try:
        async with httpx.AsyncClient(
            timeout=settings.http_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": BROWSER_USER_AGENT},
            transport=transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise WebFetchError(
            "HTTP_ERROR",
            f"{url} returned {e.response.status_code}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise WebFetchError("CONNECTION_ERROR", str(e)) from e

    metadata = parse_page_metadata(url, response.text)
    logger.info("web_page_fetched", url=url, has_title=bool(metadata.best_title))
    return metadata
