# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page structure classifier — corroborating signal for entity scoring.

Counts how many indicator patterns of each structure type (blog, product,
landing, faq, howto) appear in the content. The counts are evidence, not a
decision: the entity detector rewards entity types whose expected structure
fired and penalises them when a different structure clearly dominates.
"""

from __future__ import annotations

from .signals import DOMINANT_STRUCTURE_COUNT, STRUCTURE_INDICATORS

STRUCTURE_TYPES: tuple[str, ...] = tuple(STRUCTURE_INDICATORS)


def analyze_page_structure(content: str) -> dict[str, int]:
    """Return ``{structure_type: number of indicator patterns matched}``.

    Every structure type is present in the result (0 when nothing matched).
    """
    return {
        structure: sum(1 for pattern in patterns if pattern.search(content))
        for structure, patterns in STRUCTURE_INDICATORS.items()
    }


def dominant_structure(scores: dict[str, int]) -> str | None:
    """Structure type with the highest count if it reaches the dominance threshold.

    Ties go to the earlier structure type in declaration order.
    """
    if not scores:
        return None
    top = max(scores, key=scores.__getitem__)
    return top if scores[top] >= DOMINANT_STRUCTURE_COUNT else None
