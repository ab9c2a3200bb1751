# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Schema: entity detection and JSON-LD synthesis for page content.

Turns HTML-ish or Markdown-ish page text into schema.org structured data:
- detected entities: ranked Product/Article/FAQ/HowTo/... hypotheses
- generated schema: a ``{"@context", "@graph"}`` JSON-LD document
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

SCHEMA_CONTEXT = "https://schema.org"

# JSON-LD values are plain dicts/lists so they survive a json round trip unchanged.
SchemaEntity = dict[str, Any]
GeneratedSchema = dict[str, Any]


class EntityType(StrEnum):
    """schema.org types the detector can report."""

    PRODUCT = "Product"
    ARTICLE = "Article"
    ORGANIZATION = "Organization"
    PERSON = "Person"
    FAQ = "FAQ"
    WEB_PAGE = "WebPage"
    BREADCRUMB_LIST = "BreadcrumbList"
    HOW_TO = "HowTo"


@dataclass(frozen=True, slots=True)
class DetectedEntity:
    """A single entity hypothesis extracted from page content."""

    type: EntityType
    name: str
    description: str
    properties: dict[str, Any] = field(default_factory=dict)  # type-specific extracted values
    confidence: float = 0.0  # 0.0–1.0, after exclusion adjustments

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "properties": self.properties,
            "confidence": round(self.confidence, 4),
        }


from .eeat import EEATSignals, add_eeat_signals, create_person_schema  # noqa: E402
from .entity_detector import detect_entities  # noqa: E402
from .errors import PageSchemaError, SchemaParseError  # noqa: E402
from .howto import extract_howto_steps, generate_howto_schema  # noqa: E402
from .schema_generator import generate_from_content, generate_schema, to_script_tag  # noqa: E402
from .serializer import parse, round_trip, serialize, validate_round_trip  # noqa: E402
from .validator import validate_schema  # noqa: E402

__all__ = [
    "SCHEMA_CONTEXT",
    "DetectedEntity",
    "EEATSignals",
    "EntityType",
    "GeneratedSchema",
    "PageSchemaError",
    "SchemaEntity",
    "SchemaParseError",
    "add_eeat_signals",
    "create_person_schema",
    "detect_entities",
    "extract_howto_steps",
    "generate_from_content",
    "generate_howto_schema",
    "generate_schema",
    "parse",
    "round_trip",
    "serialize",
    "to_script_tag",
    "validate_round_trip",
    "validate_schema",
]
