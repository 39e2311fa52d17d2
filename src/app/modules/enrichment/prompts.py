"""Prompt text for the enrichment models. Answers are expected in Spanish."""

from typing import Any

from app.modules.enrichment.normalize import ALLOWED_TAGS
from app.modules.products.models import ProductFormat, ProductType


SYSTEM_PROMPT = (
    "Eres un asistente experto en productos chilenos y latinoamericanos. "
    "Respondes en ESPAÑOL con información verificable. Responde SOLO con JSON válido."
)

_RESPONSE_SHAPE = f"""{{
  "name": "Nombre mejorado del producto",
  "description": "Descripción de 2-3 oraciones, sin citas ni URLs",
  "short_description": "Descripción breve de máximo 80 caracteres",
  "category": "Categoría del producto",
  "brand": "Marca oficial",
  "ean": "Código EAN si lo encuentras, o null",
  "type": "Uno de: {", ".join(t.value for t in ProductType)}",
  "format": "Uno de: {", ".join(f.value for f in ProductFormat)}, o null",
  "tags": ["Solo de: {", ".join(ALLOWED_TAGS)}"]
}}"""


def _describe_product(current: dict[str, Any]) -> str:
    labels = (
        ("name", "Nombre"),
        ("ean", "Código EAN"),
        ("brand", "Marca"),
        ("category", "Categoría actual"),
        ("description", "Descripción actual"),
        ("source_url", "URL del producto"),
    )
    lines = [f"- {label}: {current[key]}" for key, label in labels if current.get(key)]
    return "\n".join(lines)


def build_enrichment_prompt(current: dict[str, Any]) -> str:
    return f"""Busca información REAL del siguiente producto.

PRODUCTO:
{_describe_product(current)}

INSTRUCCIONES:
1. Prioriza el sitio oficial de la marca y e-commerce chilenos.
2. Todas las respuestas en español.
3. No incluyas "(Fuente: ...)", URLs ni citas en los textos.
4. No inventes etiquetas fuera de la lista permitida.

Devuelve SOLO este objeto JSON:
{_RESPONSE_SHAPE}"""


def build_grounded_prompt(current: dict[str, Any]) -> str:
    return f"""Usa Google Search para verificar el siguiente producto en fuentes oficiales
(sitio de la marca, redes sociales oficiales, retailers chilenos).

PRODUCTO:
{_describe_product(current)}

Devuelve SOLO un objeto JSON con esta forma, más el campo
"verified": true si encontraste el producto en fuentes verificables:
{_RESPONSE_SHAPE}"""
