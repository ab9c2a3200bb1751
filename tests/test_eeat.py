# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for E-E-A-T augmentation and Person schema creation."""

from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from pageschema.eeat import EEATSignals, add_eeat_signals, create_person_schema
from pageschema.schema_generator import generate_from_content
from tests._pages import PRODUCT_PAGE


def _node(schema: dict, type_name: str) -> dict:
    return next(n for n in schema["@graph"] if n["@type"] == type_name)


class TestAddEEATSignals:
    def test_dates_copied_verbatim(self, article_schema):
        enhanced = add_eeat_signals(article_schema, {"datePublished": "2024-01-15", "dateModified": "2024-06-20"})
        for type_name in ("Article", "WebPage"):
            node = _node(enhanced, type_name)
            assert node["datePublished"] == "2024-01-15"
            assert node["dateModified"] == "2024-06-20"

    def test_input_not_mutated(self, article_schema):
        before = copy.deepcopy(article_schema)
        enhanced = add_eeat_signals(
            article_schema,
            {"author": {"name": "A B"}, "dateModified": "2024-06-20", "citations": ["https://x.example"]},
        )
        assert article_schema == before
        assert enhanced != before

    def test_author(self, article_schema):
        enhanced = add_eeat_signals(
            article_schema,
            {
                "author": {
                    "name": "Dr. Ada Lovelace",
                    "credentials": ["PhD Mathematics", "Analyst"],
                    "linkedInUrl": "https://linkedin.com/in/ada",
                    "sameAs": ["https://ada.example"],
                }
            },
        )
        assert _node(enhanced, "Article")["author"] == {
            "@type": "Person",
            "name": "Dr. Ada Lovelace",
            "jobTitle": "PhD Mathematics",
            "sameAs": ["https://linkedin.com/in/ada", "https://ada.example"],
        }
        assert "author" not in _node(enhanced, "WebPage")

    def test_author_without_links(self, article_schema):
        enhanced = add_eeat_signals(article_schema, {"author": {"name": "Jane Smith"}})
        assert _node(enhanced, "Article")["author"] == {"@type": "Person", "name": "Jane Smith"}

    def test_publisher_reviewer_citations(self, article_schema):
        enhanced = add_eeat_signals(
            article_schema,
            {
                "publisher": {"name": "Acme Media", "url": "https://acme.example", "logo": "https://acme.example/l.png"},
                "reviewer": {"name": "Sam Lee", "credentials": ["Medical Reviewer"]},
                "citations": ["https://a.example", "https://b.example"],
            },
        )
        article = _node(enhanced, "Article")
        assert article["publisher"] == {
            "@type": "Organization",
            "name": "Acme Media",
            "url": "https://acme.example",
            "logo": {"@type": "ImageObject", "url": "https://acme.example/l.png"},
        }
        assert article["reviewedBy"] == {"@type": "Person", "name": "Sam Lee", "jobTitle": "Medical Reviewer"}
        assert article["citation"] == [
            {"@type": "WebPage", "url": "https://a.example"},
            {"@type": "WebPage", "url": "https://b.example"},
        ]
        webpage = _node(enhanced, "WebPage")
        assert "publisher" not in webpage
        assert "citation" not in webpage

    def test_publisher_without_logo(self, article_schema):
        enhanced = add_eeat_signals(article_schema, {"publisher": {"name": "Acme", "url": "https://acme.example"}})
        assert "logo" not in _node(enhanced, "Article")["publisher"]

    def test_non_article_entities_untouched(self):
        schema = generate_from_content(PRODUCT_PAGE, "https://shop.example/mouse")
        enhanced = add_eeat_signals(
            schema,
            {"author": {"name": "Jane Smith"}, "datePublished": "2024-01-15", "citations": ["https://x.example"]},
        )
        assert _node(enhanced, "Product") == _node(schema, "Product")
        assert _node(enhanced, "WebPage")["datePublished"] == "2024-01-15"

    def test_empty_signals_is_a_copy(self, article_schema):
        enhanced = add_eeat_signals(article_schema, {})
        assert enhanced == article_schema
        assert enhanced is not article_schema

    def test_model_input(self, article_schema):
        signals = EEATSignals(date_published="2024-01-15")
        assert _node(add_eeat_signals(article_schema, signals), "Article")["datePublished"] == "2024-01-15"

    def test_invalid_signals(self, article_schema):
        with pytest.raises(ValidationError):
            add_eeat_signals(article_schema, {"author": {"credentials": ["PhD"]}})


class TestCreatePersonSchema:
    def test_minimal(self):
        assert create_person_schema("Jane Smith") == {"@type": "Person", "name": "Jane Smith"}

    def test_full(self):
        person = create_person_schema(
            "Jane Smith",
            {
                "sameAs": ["https://github.com/jane"],
                "websiteUrl": "https://jane.example",
                "twitterUrl": "https://twitter.com/jane",
                "linkedInUrl": "https://linkedin.com/in/jane",
                "credentials": ["CTO", "Distributed Systems", "Databases"],
            },
        )
        assert person["sameAs"] == [
            "https://linkedin.com/in/jane",
            "https://twitter.com/jane",
            "https://jane.example",
            "https://github.com/jane",
        ]
        assert person["jobTitle"] == "CTO"
        assert person["knowsAbout"] == ["Distributed Systems", "Databases"]

    def test_single_credential_has_no_knows_about(self):
        person = create_person_schema("Jane Smith", {"credentials": ["CTO"]})
        assert person["jobTitle"] == "CTO"
        assert "knowsAbout" not in person
