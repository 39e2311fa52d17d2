"""Tests for product page fetching."""

import httpx
import pytest

from app.clients.web_fetch import (
    BROWSER_USER_AGENT,
    WebFetchError,
    fetch_page_metadata,
    name_from_url,
    parse_page_metadata,
)


PAGE = """
<html><head>
  <title> Queque de naranja | Pastelería </title>
  <meta name="description" content="Queque casero">
  <meta property="og:title" content="Queque de Naranja 500 g">
  <meta property="og:image" content="https://img.cl/queque.jpg">
</head><body><title>ignored</title></body></html>
"""


def test_parse_page_metadata():
    metadata = parse_page_metadata("https://tienda.cl/queque", PAGE)

    assert metadata.title == "Queque de naranja | Pastelería"
    assert metadata.description == "Queque casero"
    assert metadata.og_image == "https://img.cl/queque.jpg"
    assert metadata.best_title == "Queque de Naranja 500 g"
    assert metadata.best_description == "Queque casero"


def test_parse_page_without_metadata():
    metadata = parse_page_metadata("https://tienda.cl", "<p>hola</p>")

    assert metadata.best_title is None
    assert metadata.to_dict()["url"] == "https://tienda.cl"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://tienda.cl/productos/muffin-de-zanahoria.html", "muffin de zanahoria"),
        ("https://tienda.cl/p/pan_amasado/", "pan amasado"),
        ("https://tienda.cl/p/caf%C3%A9-molido", "café molido"),
        ("https://tienda.cl/", None),
    ],
)
def test_name_from_url(url, expected):
    assert name_from_url(url) == expected


async def test_fetch_sends_browser_user_agent():
    agents: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        agents.append(request.headers["user-agent"])
        return httpx.Response(200, text=PAGE)

    metadata = await fetch_page_metadata(
        "https://tienda.cl/queque", transport=httpx.MockTransport(handler)
    )

    assert agents == [BROWSER_USER_AGENT]
    assert metadata.og_title == "Queque de Naranja 500 g"


async def test_fetch_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(403))

    with pytest.raises(WebFetchError) as exc_info:
        await fetch_page_metadata("https://tienda.cl/x", transport=transport)

    assert exc_info.value.error_code == "HTTP_ERROR"
    assert exc_info.value.status_code == 403
