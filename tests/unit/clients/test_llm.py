"""Tests for the LLM clients and their shared helpers."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import OpenAIError

from app.clients.base import ClientNotConfiguredError
from app.clients.gemini import GeminiClient
from app.clients.llm import LLMError, parse_json_response, strip_code_fences
from app.clients.openai_client import OpenAIClient


@pytest.mark.parametrize(
    "text",
    ['```json\n{"a": 1}\n```', '```\n{"a": 1}\n```', '  {"a": 1}  ', '```JSON{"a": 1}```'],
)
def test_strip_code_fences(text):
    assert strip_code_fences(text) == '{"a": 1}'


def test_parse_json_response():
    assert parse_json_response('```json\n{"name": "Queque"}\n```', "gemini") == {"name": "Queque"}


@pytest.mark.parametrize("text", ["not json", "[1, 2]"])
def test_parse_json_response_rejects(text):
    with pytest.raises(LLMError) as exc_info:
        parse_json_response(text, "openai")

    assert exc_info.value.error_code == "INVALID_JSON"


# ============================================================
# OpenAI
# ============================================================


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def openai_sdk():
    sdk = MagicMock()
    sdk.chat.completions.create = AsyncMock(return_value=completion('{"ok": true}'))
    with patch("app.clients.openai_client.AsyncOpenAI", return_value=sdk):
        yield sdk


async def test_openai_requests_json_object(openai_sdk):
    client = OpenAIClient(api_key="sk-test", model="gpt-4o-mini")

    response = await client.generate("describe", system_prompt="be brief")

    kwargs = openai_sdk.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0] == {"role": "system", "content": "be brief"}
    assert kwargs["messages"][1]["role"] == "user"
    assert response.text == '{"ok": true}'
    assert response.provider == "openai"


async def test_openai_empty_content(openai_sdk):
    openai_sdk.chat.completions.create.return_value = completion(None)

    with pytest.raises(LLMError) as exc_info:
        await OpenAIClient(api_key="sk-test").generate("x")

    assert exc_info.value.error_code == "EMPTY_RESPONSE"


async def test_openai_sdk_error(openai_sdk):
    openai_sdk.chat.completions.create.side_effect = OpenAIError("boom")

    with pytest.raises(LLMError) as exc_info:
        await OpenAIClient(api_key="sk-test").generate("x")

    assert exc_info.value.error_code == "OPENAI_ERROR"


async def test_openai_not_configured(monkeypatch):
    monkeypatch.setattr("app.clients.openai_client.settings.openai_api_key", None)

    with pytest.raises(ClientNotConfiguredError):
        await OpenAIClient().generate("x")


# ============================================================
# Gemini
# ============================================================


def gemini_response(text, grounding=None):
    candidate = SimpleNamespace(grounding_metadata=grounding)
    return SimpleNamespace(text=text, candidates=[candidate])


@pytest.fixture
def genai_sdk():
    sdk = MagicMock()
    sdk.aio.models.generate_content = AsyncMock(return_value=gemini_response('{"a": 1}'))
    with patch("app.clients.gemini.genai.Client", return_value=sdk):
        yield sdk


async def test_gemini_json_mode(genai_sdk):
    response = await GeminiClient(api_key="g-key", model="gemini-test").generate("x")

    config = genai_sdk.aio.models.generate_content.call_args.kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert not config.tools
    assert response.model == "gemini-test"
    assert response.search_queries == []


async def test_gemini_grounded_collects_sources(genai_sdk):
    grounding = SimpleNamespace(
        web_search_queries=["queque naranja"],
        grounding_chunks=[
            SimpleNamespace(web=SimpleNamespace(uri="https://a.cl")),
            SimpleNamespace(web=None),
            SimpleNamespace(web=SimpleNamespace(uri="https://b.cl")),
        ],
    )
    genai_sdk.aio.models.generate_content.return_value = gemini_response("{}", grounding)

    response = await GeminiClient(api_key="g-key").generate("x", grounded=True)

    config = genai_sdk.aio.models.generate_content.call_args.kwargs["config"]
    assert config.tools
    assert config.response_mime_type is None
    assert response.search_queries == ["queque naranja"]
    assert response.sources == ["https://a.cl", "https://b.cl"]


async def test_gemini_empty_text(genai_sdk):
    genai_sdk.aio.models.generate_content.return_value = gemini_response(None)

    with pytest.raises(LLMError) as exc_info:
        await GeminiClient(api_key="g-key").generate("x")

    assert exc_info.value.error_code == "EMPTY_RESPONSE"


async def test_gemini_not_configured(monkeypatch):
    monkeypatch.setattr("app.clients.gemini.settings.gemini_api_key", None)

    with pytest.raises(ClientNotConfiguredError):
        await GeminiClient().generate("x")
