"""Cleanup and merging of model suggestions.

Every enrichment method passes its output through ``normalize_suggestion``
so the caller always sees the same field set and vocabulary.
"""

import re
from typing import Any

from app.core.constants import SHORT_DESCRIPTION_MAX_LENGTH
from app.modules.enrichment.schemas import Confidence
from app.modules.products.models import ProductFormat, ProductType


ALLOWED_TAGS = (
    "vegano",
    "vegetariano",
    "sin azúcar añadido",
    "sin gluten",
    "sin procesar",
)
MERGED_FIELDS = (
    "name",
    "description",
    "short_description",
    "category",
    "brand",
    "ean",
    "type",
    "format",
    "tags",
)
TEXT_FIELDS = ("name", "description", "short_description", "category", "brand")

_PRODUCT_TYPES = {t.value for t in ProductType}
_PRODUCT_FORMATS = {f.value for f in ProductFormat}
_KEY_ALIASES = {"shortDescription": "short_description"}

_SOURCE_ANNOTATIONS = (
    re.compile(r"\s*\(\s*(?:fuente|source)\s*:[^)]*\)", re.IGNORECASE),
    re.compile(r"\s*\[\s*(?:fuente|source)\s*:[^\]]*\]", re.IGNORECASE),
)
_SPACES = re.compile(r"\s+")


def strip_source_annotations(text: str | None) -> str | None:
    """Drop ``(fuente: ...)``, ``[source: ...]`` and similar citations."""
    if not text:
        return None
    for pattern in _SOURCE_ANNOTATIONS:
        text = pattern.sub("", text)
    text = _SPACES.sub(" ", text).strip()
    return text or None


def _normalize_tags(tags: Any) -> list[str]:
    if not isinstance(tags, list):
        return []
    result: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        tag = tag.strip().lower()
        if tag in ALLOWED_TAGS and tag not in result:
            result.append(tag)
    return result


def _normalize_images(images: Any) -> list[str]:
    if not isinstance(images, list):
        return []
    result: list[str] = []
    for image in images:
        if isinstance(image, str) and image.startswith("http") and image not in result:
            result.append(image)
    return result


def normalize_suggestion(raw: dict[str, Any], apply_defaults: bool = True) -> dict[str, Any]:
    """Coerce a model answer into the product field vocabulary.

    With ``apply_defaults`` an unknown or missing ``type`` becomes
    READY_PRODUCT; without it the type is dropped so that merging can tell
    the providers apart.
    """
    data = {_KEY_ALIASES.get(k, k): v for k, v in raw.items()}
    result: dict[str, Any] = {}

    for field in TEXT_FIELDS:
        value = data.get(field)
        result[field] = strip_source_annotations(value) if isinstance(value, str) else None

    if result["short_description"]:
        result["short_description"] = result["short_description"][:SHORT_DESCRIPTION_MAX_LENGTH]

    ean = data.get("ean")
    result["ean"] = str(ean).strip() or None if isinstance(ean, (str, int)) else None

    product_type = data.get("type")
    if isinstance(product_type, str) and product_type.upper() in _PRODUCT_TYPES:
        result["type"] = product_type.upper()
    else:
        result["type"] = ProductType.READY_PRODUCT.value if apply_defaults else None

    product_format = data.get("format")
    if isinstance(product_format, str) and product_format.upper() in _PRODUCT_FORMATS:
        result["format"] = product_format.upper()
    else:
        result["format"] = None

    result["tags"] = _normalize_tags(data.get("tags"))
    result["images"] = _normalize_images(data.get("images"))
    return result


def _is_present(value: Any) -> bool:
    return value not in (None, "", [])


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        return _SPACES.sub(" ", value).strip().casefold()
    if isinstance(value, list):
        return sorted({_comparable(v) for v in value if isinstance(v, str)})
    return value


def values_agree(first: Any, second: Any) -> bool:
    """Case, whitespace and (for lists) order insensitive equality."""
    return _comparable(first) == _comparable(second)


def merge_provider_results(
    gemini: dict[str, Any] | None,
    openai: dict[str, Any] | None,
) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
    """Merge two normalised answers field by field. Gemini wins ties.

    Returns:
        Tuple of (merged data, per-field ``{value, source, confidence}``)
    """
    gemini = gemini or {}
    openai = openai or {}
    merged: dict[str, Any] = {}
    fields: dict[str, dict[str, Any]] = {}

    for field in MERGED_FIELDS:
        g_value, o_value = gemini.get(field), openai.get(field)
        confidence: Confidence
        if _is_present(g_value):
            value, source = g_value, "gemini"
            both = _is_present(o_value) and values_agree(g_value, o_value)
            confidence = "high" if both else "medium"
        elif _is_present(o_value):
            value, source, confidence = o_value, "openai", "medium"
        else:
            value, source, confidence = None, None, "low"

        merged[field] = value
        fields[field] = {"value": value, "source": source, "confidence": confidence}

    return merged, fields
