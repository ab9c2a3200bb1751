# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for pageschema.signals — pattern tables, exclusivity and very strong combinations."""

from __future__ import annotations

import pytest

from pageschema import EntityType
from pageschema.signals import (
    DETECTABLE_TYPES,
    ENTITY_SIGNALS,
    EXCLUSIVE_TYPES,
    REQUIRED_PROPERTIES,
    STRUCTURE_INDICATORS,
    SignalTier,
    has_very_strong_article_signals,
    has_very_strong_faq_signals,
    has_very_strong_product_signals,
    has_very_strong_signals,
)


class TestRegistry:
    def test_every_entity_type_has_signals(self):
        assert set(ENTITY_SIGNALS) == set(EntityType)

    def test_webpage_is_not_detectable(self):
        assert EntityType.WEB_PAGE not in DETECTABLE_TYPES
        assert DETECTABLE_TYPES[0] is EntityType.PRODUCT

    def test_tables_are_ordered_tuples(self):
        for signals in ENTITY_SIGNALS.values():
            for table in (signals.keywords, signals.strong, signals.medium, signals.negative):
                assert isinstance(table, tuple)

    def test_patterns_tagged_with_owner_and_tier(self):
        for entity_type, signals in ENTITY_SIGNALS.items():
            for tier, table in (
                (SignalTier.STRONG, signals.strong),
                (SignalTier.MEDIUM, signals.medium),
                (SignalTier.NEGATIVE, signals.negative),
            ):
                assert all(p.entity_type is entity_type and p.tier is tier for p in table)

    def test_expected_structures_exist(self):
        for signals in ENTITY_SIGNALS.values():
            assert signals.structure in STRUCTURE_INDICATORS

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            ENTITY_SIGNALS[EntityType.PRODUCT] = None  # type: ignore[index]


class TestRequiredProperties:
    @pytest.mark.parametrize(
        "type_name, required",
        [
            ("Product", ("name", "description", "offers")),
            ("Article", ("headline", "author", "datePublished")),
            ("Organization", ("name", "url")),
            ("Person", ("name",)),
            ("FAQ", ("mainEntity",)),
            ("HowTo", ("name", "step")),
            ("BreadcrumbList", ("itemListElement",)),
            ("WebPage", ("name",)),
        ],
    )
    def test_checklist(self, type_name: str, required: tuple[str, ...]):
        assert REQUIRED_PROPERTIES[type_name] == required


class TestExclusivity:
    def test_symmetric(self):
        for owner, others in EXCLUSIVE_TYPES.items():
            for other in others:
                assert owner in EXCLUSIVE_TYPES[other]

    @pytest.mark.parametrize(
        "entity_type, expected",
        [
            (EntityType.PRODUCT, {EntityType.ARTICLE, EntityType.HOW_TO, EntityType.FAQ}),
            (EntityType.ARTICLE, {EntityType.PRODUCT, EntityType.HOW_TO}),
            (EntityType.HOW_TO, {EntityType.PRODUCT, EntityType.ARTICLE, EntityType.FAQ}),
            (EntityType.FAQ, {EntityType.PRODUCT, EntityType.HOW_TO}),
            (EntityType.ORGANIZATION, {EntityType.PERSON}),
            (EntityType.PERSON, {EntityType.ORGANIZATION}),
            (EntityType.BREADCRUMB_LIST, set()),
            (EntityType.WEB_PAGE, set()),
        ],
    )
    def test_table(self, entity_type: EntityType, expected: set[EntityType]):
        assert EXCLUSIVE_TYPES[entity_type] == expected


class TestVeryStrongCombinations:
    def test_product_needs_price_and_action(self):
        assert has_very_strong_product_signals("Only $19.99 - add to cart")
        assert has_very_strong_product_signals("$5, out of stock")
        assert not has_very_strong_product_signals("Add to cart")
        assert not has_very_strong_product_signals("It costs $5")

    def test_article_needs_date_and_byline(self):
        assert has_very_strong_article_signals("Published on March 3, 2024 by Jane Smith")
        assert not has_very_strong_article_signals("Published on March 3, 2024")
        assert not has_very_strong_article_signals("by Jane Smith")

    def test_faq_needs_question_and_answer_lines(self):
        assert has_very_strong_faq_signals("Q: Why?\nA: Because.")
        assert not has_very_strong_faq_signals("Q: Why? A: Because.")

    def test_any(self):
        assert has_very_strong_signals("Q: Why?\nA: Because.")
        assert not has_very_strong_signals("Nothing to see here.")
