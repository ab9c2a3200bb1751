# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""JSON-LD synthesis from detected entities.

Each DetectedEntity becomes one ``@graph`` member with ``@id`` =
``{page_url}#{type}``. A WebPage wrapper is prepended whenever the graph
has entities but no WebPage. Every value placed in the graph is a plain
str/int/float/list/dict, so serialize() → parse() reproduces it exactly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from . import SCHEMA_CONTEXT, DetectedEntity, EntityType, GeneratedSchema, SchemaEntity
from .entity_detector import detect_entities
from .errors import PageSchemaError
from .extractors import DEFAULT_CURRENCY, IN_STOCK
from .howto import steps_to_schema
from .serializer import serialize

logger = logging.getLogger(__name__)


# --- Per-type field population ---


def _product_fields(entity: SchemaEntity, props: dict[str, Any], page_url: str | None) -> None:
    if props.get("price"):
        entity["offers"] = {
            "@type": "Offer",
            "price": props["price"],
            "priceCurrency": props.get("priceCurrency") or DEFAULT_CURRENCY,
            "availability": props.get("availability") or IN_STOCK,
        }


def _article_fields(entity: SchemaEntity, props: dict[str, Any], page_url: str | None) -> None:
    if props.get("datePublished"):
        entity["datePublished"] = props["datePublished"]
    if props.get("author"):
        entity["author"] = {"@type": "Person", "name": props["author"]}
    entity["headline"] = entity["name"]


def _organization_fields(entity: SchemaEntity, props: dict[str, Any], page_url: str | None) -> None:
    if props.get("foundingDate"):
        entity["foundingDate"] = props["foundingDate"]
    if page_url:
        entity["url"] = page_url


def _faq_fields(entity: SchemaEntity, props: dict[str, Any], page_url: str | None) -> None:
    pairs = props.get("mainEntity")
    if pairs:
        entity["mainEntity"] = [
            {
                "@type": "Question",
                "name": qa["question"],
                "acceptedAnswer": {"@type": "Answer", "text": qa["answer"]},
            }
            for qa in pairs
        ]


def _howto_fields(entity: SchemaEntity, props: dict[str, Any], page_url: str | None) -> None:
    steps = props.get("step")
    if steps:
        entity["step"] = steps_to_schema(steps)


def _breadcrumb_fields(entity: SchemaEntity, props: dict[str, Any], page_url: str | None) -> None:
    names = props.get("itemListElement")
    if names:
        entity["itemListElement"] = [
            {"@type": "ListItem", "position": position, "name": name}
            for position, name in enumerate(names, start=1)
        ]


_FIELD_BUILDERS: dict[EntityType, Callable[[SchemaEntity, dict[str, Any], str | None], None]] = {
    EntityType.PRODUCT: _product_fields,
    EntityType.ARTICLE: _article_fields,
    EntityType.ORGANIZATION: _organization_fields,
    EntityType.FAQ: _faq_fields,
    EntityType.HOW_TO: _howto_fields,
    EntityType.BREADCRUMB_LIST: _breadcrumb_fields,
}


def entity_to_schema(entity: DetectedEntity, page_url: str | None = None) -> SchemaEntity:
    """Convert one DetectedEntity to a schema.org graph member."""
    type_name = entity.type.value
    slug = type_name.lower()
    result: SchemaEntity = {
        "@type": type_name,
        "@id": f"{page_url}#{slug}" if page_url else f"#{slug}",
        "name": entity.name,
    }
    if entity.description:
        result["description"] = entity.description

    builder = _FIELD_BUILDERS.get(entity.type)
    if builder is not None:
        builder(result, entity.properties, page_url)
    return result


def _web_page(entities: list[DetectedEntity], page_url: str | None) -> SchemaEntity:
    page: SchemaEntity = {
        "@type": EntityType.WEB_PAGE.value,
        "@id": page_url or "#webpage",
        "name": entities[0].name if entities else "Page",
    }
    if page_url:
        page["url"] = page_url
    return page


# --- Public API ---


def generate_schema(entities: list[DetectedEntity], page_url: str | None = None) -> GeneratedSchema:
    """Build a JSON-LD document from detected entities.

    Args:
        entities: ranked entities (typically from detect_entities)
        page_url: canonical page URL; empty string is treated as absent

    Returns:
        ``{"@context": "https://schema.org", "@graph": [...]}``; the graph is
        empty only when ``entities`` is empty.
    """
    page_url = page_url or None
    graph = [entity_to_schema(e, page_url) for e in entities]

    if graph and not any(node["@type"] == EntityType.WEB_PAGE.value for node in graph):
        graph.insert(0, _web_page(entities, page_url))

    return {"@context": SCHEMA_CONTEXT, "@graph": graph}


def generate_from_content(content: str, page_url: str | None = None) -> GeneratedSchema:
    """detect_entities() followed by generate_schema()."""
    schema = generate_schema(detect_entities(content), page_url)
    logger.debug("generated schema: types=%s", [node["@type"] for node in schema["@graph"]])
    return schema


def try_generate_from_content(content: str, page_url: str | None = None) -> GeneratedSchema | None:
    """Best-effort generate_from_content() for pipelines where schema is optional.

    Returns None (and logs a warning) instead of raising, e.g. for non-text content.
    """
    try:
        return generate_from_content(content, page_url)
    except (PageSchemaError, TypeError, ValueError) as e:
        logger.warning("schema generation failed for %s: %s", page_url or "<no url>", e)
        return None


def to_script_tag(schema: GeneratedSchema) -> str:
    """Wrap serialized JSON-LD in a ``<script type="application/ld+json">`` tag."""
    return f'<script type="application/ld+json">\n{serialize(schema)}\n</script>'
