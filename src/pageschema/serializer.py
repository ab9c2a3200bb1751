# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""JSON-LD serialization and round-trip checks.

serialize() emits pretty-printed JSON (2-space indent, UTF-8 kept as-is).
parse() is strict about the document envelope: ``@context`` must be
``https://schema.org`` and ``@graph`` must be a list. Graph members are
not validated here; see validator.validate_schema().
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from . import SCHEMA_CONTEXT, GeneratedSchema
from .errors import PageSchemaError, SchemaParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoundTripResult:
    """Outcome of serialize() → parse() on one schema."""

    original: GeneratedSchema
    serialized: str
    parsed: GeneratedSchema
    is_equal: bool


def serialize(schema: GeneratedSchema, indent: int = 2) -> str:
    """Serialize a schema to a JSON-LD string.

    Args:
        schema: GeneratedSchema to serialize
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return json.dumps(schema, ensure_ascii=False, indent=indent)


def parse(json_ld: str) -> GeneratedSchema:
    """Parse a JSON-LD string back into a schema.

    Raises:
        SchemaParseError: invalid JSON, non-object document, wrong ``@context``
            or non-list ``@graph``.
    """
    try:
        data = json.loads(json_ld)
    except (json.JSONDecodeError, TypeError) as e:
        logger.debug("parse: invalid JSON: %s", e)
        raise SchemaParseError(f"Invalid JSON: {e}", field="json") from e

    if not isinstance(data, dict):
        logger.debug("parse: document is %s, not an object", type(data).__name__)
        raise SchemaParseError("JSON-LD document must be an object", field="json")

    if data.get("@context") != SCHEMA_CONTEXT:
        logger.debug("parse: bad @context %r", data.get("@context"))
        raise SchemaParseError(f'Invalid @context: expected "{SCHEMA_CONTEXT}"', field="@context")

    if not isinstance(data.get("@graph"), list):
        logger.debug("parse: @graph is %s", type(data.get("@graph")).__name__)
        raise SchemaParseError("Invalid @graph: expected a list", field="@graph")

    return data


def round_trip(schema: GeneratedSchema) -> RoundTripResult:
    """serialize() then parse(), returning every intermediate. Parse errors propagate."""
    serialized = serialize(schema)
    parsed = parse(serialized)
    return RoundTripResult(
        original=schema,
        serialized=serialized,
        parsed=parsed,
        is_equal=parsed == schema,
    )


def validate_round_trip(schema: GeneratedSchema) -> bool:
    """True if parse(serialize(schema)) deep-equals schema."""
    try:
        return round_trip(schema).is_equal
    except (PageSchemaError, TypeError, ValueError) as e:
        logger.debug("round trip failed: %s", e)
        return False
