# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for required-property validation."""

from __future__ import annotations

import pytest

from pageschema import SCHEMA_CONTEXT
from pageschema.schema_generator import generate_from_content, generate_schema
from pageschema.validator import ValidationIssue, validate_schema
from tests._pages import ORGANIZATION_PAGE


def _doc(*nodes) -> dict:
    return {"@context": SCHEMA_CONTEXT, "@graph": list(nodes)}


def _props(result) -> list[tuple[str, str]]:
    return [(i.entity_type, i.property) for i in result.errors]


class TestEnvelope:
    def test_empty_graph_is_invalid(self):
        result = validate_schema(generate_schema([]))
        assert not result.valid
        assert any(i.property == "@graph" for i in result.errors)

    @pytest.mark.parametrize("graph", [None, "nodes", {"@type": "WebPage"}])
    def test_graph_must_be_list(self, graph):
        result = validate_schema({"@context": SCHEMA_CONTEXT, "@graph": graph})
        assert not result.valid
        assert _props(result) == [("Schema", "@graph")]

    def test_wrong_context(self):
        result = validate_schema({"@context": "http://schema.org", "@graph": [{"@type": "Person", "name": "A"}]})
        assert not result.valid
        assert _props(result) == [("Schema", "@context")]

    def test_generated_schema_is_valid(self, article_schema):
        result = validate_schema(article_schema)
        assert result.valid
        assert result.errors == ()


class TestNodes:
    def test_missing_required_properties(self):
        result = validate_schema(_doc({"@type": "Product", "name": "Mouse"}))
        assert not result.valid
        assert _props(result) == [("Product", "description"), ("Product", "offers")]
        assert result.errors[0].message == "Missing required property: description"

    def test_none_counts_as_missing(self):
        result = validate_schema(_doc({"@type": "Person", "name": None}))
        assert _props(result) == [("Person", "name")]

    def test_falsy_values_are_present(self):
        assert validate_schema(_doc({"@type": "BreadcrumbList", "itemListElement": []})).valid

    def test_unknown_type_is_a_warning(self):
        result = validate_schema(_doc({"@type": "Recipe", "name": "Soup"}))
        assert result.valid
        (issue,) = result.errors
        assert issue.severity == "warning"
        assert issue.property == "@type"

    def test_missing_type(self):
        result = validate_schema(_doc({"name": "Anonymous"}))
        assert not result.valid
        assert _props(result) == [("Schema", "@type")]

    def test_non_object_member(self):
        result = validate_schema(_doc("just a string"))
        assert not result.valid
        assert "@graph[0]" in result.errors[0].message

    def test_organization_needs_url(self):
        assert not validate_schema(generate_from_content(ORGANIZATION_PAGE)).valid
        assert validate_schema(generate_from_content(ORGANIZATION_PAGE, "https://acme.example")).valid


class TestValidationIssue:
    def test_to_dict(self):
        issue = ValidationIssue("Article", "author", "Missing required property: author")
        assert issue.to_dict() == {
            "entityType": "Article",
            "property": "author",
            "message": "Missing required property: author",
            "severity": "error",
        }
