"""Types shared by the LLM clients."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

from app.clients.base import ClientError


_FENCE_START = re.compile(r"^\s*```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_END = re.compile(r"\n?```\s*$")


class LLMError(ClientError):
    """An LLM provider call failed or returned something unusable."""


@dataclass
class LLMResponse:
    text: str
    provider: str
    model: str
    search_queries: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, e.g. ```json ... ```."""
    return _FENCE_END.sub("", _FENCE_START.sub("", text)).strip()


def parse_json_response(text: str, provider: str) -> dict[str, Any]:
    """Parse a model's JSON answer.

    Raises:
        LLMError: If the text is not a JSON object
    """
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise LLMError("INVALID_JSON", f"{provider} returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMError("INVALID_JSON", f"{provider} returned a non-object JSON value")
    return data
