# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Required-property validation for generated schemas.

Not a schema.org ontology validator: it checks the document envelope and a
fixed per-type checklist of required properties (signals.REQUIRED_PROPERTIES).
Problems are returned as values; only severity "error" makes a schema invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from . import SCHEMA_CONTEXT, GeneratedSchema
from .signals import REQUIRED_PROPERTIES

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single validation finding."""

    entity_type: str  # "Schema" for document-level issues
    property: str
    message: str
    severity: Severity = "error"

    def to_dict(self) -> dict[str, str]:
        return {
            "entityType": self.entity_type,
            "property": self.property,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    errors: tuple[ValidationIssue, ...]


def _validate_node(index: int, node: Any) -> list[ValidationIssue]:
    if not isinstance(node, dict):
        return [ValidationIssue("Schema", "@graph", f"@graph[{index}] must be an object")]

    entity_type = node.get("@type")
    if not entity_type:
        return [ValidationIssue("Schema", "@type", f"@graph[{index}] is missing @type")]

    required = REQUIRED_PROPERTIES.get(entity_type) if isinstance(entity_type, str) else None
    if required is None:
        return [ValidationIssue(str(entity_type), "@type", f"Unknown entity type: {entity_type}", "warning")]

    return [
        ValidationIssue(entity_type, prop, f"Missing required property: {prop}")
        for prop in required
        if node.get(prop) is None
    ]


def validate_schema(schema: GeneratedSchema) -> ValidationResult:
    """Check ``@context``, a non-empty ``@graph`` and each member's required properties."""
    issues: list[ValidationIssue] = []

    if schema.get("@context") != SCHEMA_CONTEXT:
        issues.append(ValidationIssue("Schema", "@context", f'@context must be "{SCHEMA_CONTEXT}"'))

    graph = schema.get("@graph")
    if not isinstance(graph, list) or not graph:
        issues.append(ValidationIssue("Schema", "@graph", "@graph must be a non-empty array"))
        graph = graph if isinstance(graph, list) else []

    for index, node in enumerate(graph):
        issues.extend(_validate_node(index, node))

    return ValidationResult(
        valid=not any(i.severity == "error" for i in issues),
        errors=tuple(issues),
    )
