# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for keyword negation / comparison windows and sentence context."""

from __future__ import annotations

import pytest

from pageschema.context_analyzer import (
    get_sentence_context,
    is_keyword_in_comparison_context,
    is_keyword_negated,
)


class TestNegation:
    @pytest.mark.parametrize(
        "content",
        [
            "This is not a product page.",
            "There is no product here.",
            "We never product-test on animals.",
            "A page without a product listing.",
            "It isn't a product, it's a story.",
            "Unlike product pages, this one tells a story.",
            "A story rather than product marketing.",
            "Read this instead of product docs.",
        ],
    )
    def test_negated(self, content: str):
        assert is_keyword_negated(content, "product")

    def test_plain_occurrence(self):
        assert not is_keyword_negated("Our best product ships today.", "product")

    def test_case_insensitive(self):
        assert is_keyword_negated("THIS IS NOT A PRODUCT", "Product")

    def test_window_is_fifty_chars(self):
        content = "not " + "x" * 60 + " product"
        assert not is_keyword_negated(content, "product")

    def test_any_occurrence_counts(self):
        assert is_keyword_negated("A great product. This is not a product.", "product")

    def test_missing_or_empty_keyword(self):
        assert not is_keyword_negated("not a product", "article")
        assert not is_keyword_negated("not a product", "")


class TestComparison:
    @pytest.mark.parametrize(
        "content",
        [
            "Compared to other products, it is cheap.",
            "Similar to products you know.",
            "Tools such as product analytics help.",
            "Phones vs. products of the past.",
            "A short note about product design.",
            "We are discussing product strategy.",
        ],
    )
    def test_comparison(self, content: str):
        assert is_keyword_in_comparison_context(content, "product")

    def test_plain_occurrence(self):
        assert not is_keyword_in_comparison_context("Our product ships today.", "product")

    def test_window_is_thirty_chars(self):
        content = "compared to " + "y" * 40 + " product"
        assert not is_keyword_in_comparison_context(content, "product")


class TestSentenceContext:
    def test_sentences_containing_keyword(self):
        content = "Buy now. The product is great! Is it a PRODUCT? No."
        assert get_sentence_context(content, "product") == ["The product is great", "Is it a PRODUCT"]

    def test_no_match(self):
        assert get_sentence_context("Nothing here.", "product") == []
