"""Text processing utilities."""

import re
from typing import Any

from app.core.constants import MAX_SLUG_LENGTH


_PLACEHOLDER = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a name.

    Examples:
        >>> generate_slug("Café Muralla")
        'café-muralla'
        >>> generate_slug("Hello! World@2024")
        'hello-world2024'
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug[:max_length]


def render_template(text: str, variables: dict[str, Any]) -> str:
    """Replace ``{{name}}`` placeholders; unknown names are left as-is.

    Dotted names look up nested dicts: ``{{staff.first_name}}``.
    """

    def _lookup(match: re.Match[str]) -> str:
        value: Any = variables
        for part in match.group(1).split("."):
            if not isinstance(value, dict) or part not in value:
                return match.group(0)
            value = value[part]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_lookup, text)
