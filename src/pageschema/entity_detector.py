# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Weighted multi-signal entity detector.

Every candidate entity type is scored independently from the same content:

  1. strong patterns (+8) and negative patterns (−5)
  2. mutual-exclusion pre-penalty (−10) when a conflicting type owns the page
  3. medium patterns (+4)
  4. keywords (+0.5), only once other evidence exists; negated keywords
     count against the type, comparison-context keywords barely count
  5. page-structure corroboration (+2 per indicator, −5 if another structure dominates)

The raw score is normalised by the best achievable score, then adjusted by
strong-match boosts, negative-match penalties and the Product/Article
floors/ceilings. Survivors are ranked and passed through the exclusion
resolver, which keeps at most two entities.

All functions are pure; signal tables are read-only module data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import DetectedEntity, EntityType
from .context_analyzer import is_keyword_in_comparison_context, is_keyword_negated
from .extractors import extract_description, extract_name, extract_properties
from .page_structure import analyze_page_structure, dominant_structure
from .signals import (
    COMPARISON_KEYWORD_WEIGHT,
    CONFIDENCE_THRESHOLD,
    CONTEXT_PENALTY,
    DETECTABLE_TYPES,
    ENTITY_SIGNALS,
    EXCLUSIVE_TYPES,
    HIGH_CONFIDENCE,
    KEYWORD_WEIGHT,
    MAX_ENTITIES,
    MAX_KEYWORDS_IN_DENOMINATOR,
    MEDIUM_WEIGHT,
    MIN_CONTENT_LENGTH,
    NEGATED_KEYWORD_WEIGHT,
    NEGATIVE_MATCH_PENALTIES,
    NEGATIVE_MULTIPLIERS,
    NEGATIVE_WEIGHT,
    NO_STRONG_CEILING,
    STRONG_MATCH_BOOSTS,
    STRONG_SIGNAL_MIN_MATCHES,
    STRONG_WEIGHT,
    STRUCTURE_MATCH_WEIGHT,
    STRUCTURE_MISMATCH_PENALTY,
    VERY_STRONG_FLOOR,
    EntitySignals,
    has_very_strong_article_signals,
    has_very_strong_product_signals,
    has_very_strong_signals,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EntityScore:
    """Scoring trace for one candidate entity type."""

    entity_type: EntityType
    score: float  # raw weighted sum
    max_score: float  # normalisation denominator
    confidence: float  # 0.0–1.0, after boosts/penalties/floors
    strong_matches: int
    medium_matches: int
    negative_matches: int
    keywords: tuple[str, ...]  # matched keywords; comparison hits tagged " (comparison)"
    excluded_by: EntityType | None = None  # type that triggered the pre-penalty

    @property
    def accepted(self) -> bool:
        return self.confidence >= CONFIDENCE_THRESHOLD


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _count_matches(signals, content: str) -> int:
    return sum(1 for sig in signals if sig.search(content))


def _tiered(table: tuple[tuple[int, float], ...], count: int, default: float) -> float:
    """Value of the first ``(min_count, value)`` row whose min_count <= count."""
    return next((value for min_count, value in table if count >= min_count), default)


def _max_possible_score(signals: EntitySignals) -> float:
    return (
        len(signals.strong) * STRONG_WEIGHT
        + len(signals.medium) * MEDIUM_WEIGHT
        + min(MAX_KEYWORDS_IN_DENOMINATOR, len(signals.keywords)) * KEYWORD_WEIGHT
    )


def _keyword_score(content: str, content_lower: str, keywords: tuple[str, ...]) -> tuple[float, list[str]]:
    score = 0.0
    matched: list[str] = []
    for keyword in keywords:
        if keyword.lower() not in content_lower:
            continue
        if is_keyword_negated(content, keyword):
            score += NEGATED_KEYWORD_WEIGHT
            continue
        if is_keyword_in_comparison_context(content, keyword):
            score += COMPARISON_KEYWORD_WEIGHT
            matched.append(f"{keyword} (comparison)")
            continue
        score += KEYWORD_WEIGHT
        matched.append(keyword)
    return score, matched


def _exclusion_source(entity_type: EntityType, strong_types: frozenset[EntityType]) -> EntityType | None:
    """A conflicting type that owns the page while this type does not."""
    if not strong_types or entity_type in strong_types:
        return None
    return next((t for t in DETECTABLE_TYPES if t in strong_types and t in EXCLUSIVE_TYPES[entity_type]), None)


def _adjust_confidence(
    entity_type: EntityType,
    base: float,
    strong_matches: int,
    negative_matches: int,
    content: str,
) -> float:
    confidence = min(1.0, base + _tiered(STRONG_MATCH_BOOSTS, strong_matches, 0.0))

    penalty = _tiered(NEGATIVE_MATCH_PENALTIES, negative_matches, 0.0)
    if penalty:
        multiplier = _tiered(NEGATIVE_MULTIPLIERS, strong_matches, 1.0)
        confidence = max(0.0, confidence - penalty * multiplier)

    # Hard-coded special cases: price+action forces Product, dated byline forces Article,
    # and neither type is reported on keywords/medium patterns alone.
    very_strong = {
        EntityType.PRODUCT: has_very_strong_product_signals,
        EntityType.ARTICLE: has_very_strong_article_signals,
    }.get(entity_type)
    if very_strong is not None:
        if very_strong(content):
            confidence = max(confidence, VERY_STRONG_FLOOR)
        elif strong_matches == 0:
            confidence = min(confidence, NO_STRONG_CEILING)

    return confidence


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def score_entities(content: str) -> list[EntityScore]:
    """Score every detectable entity type (accepted or not), in evaluation order.

    Returns an empty list for short content without a very strong signal combination.
    """
    if len(content) < MIN_CONTENT_LENGTH and not has_very_strong_signals(content):
        logger.debug("content too short for detection (%d chars)", len(content))
        return []

    content_lower = content.lower()
    structure = analyze_page_structure(content)
    dominant = dominant_structure(structure)

    strong_counts = {t: _count_matches(ENTITY_SIGNALS[t].strong, content) for t in DETECTABLE_TYPES}
    strong_types = frozenset(t for t, n in strong_counts.items() if n >= STRONG_SIGNAL_MIN_MATCHES)

    results: list[EntityScore] = []
    for entity_type in DETECTABLE_TYPES:
        signals = ENTITY_SIGNALS[entity_type]

        strong_matches = strong_counts[entity_type]
        negative_matches = _count_matches(signals.negative, content)
        score = strong_matches * STRONG_WEIGHT + negative_matches * NEGATIVE_WEIGHT

        excluded_by = _exclusion_source(entity_type, strong_types)
        if excluded_by is not None:
            score += CONTEXT_PENALTY

        medium_matches = _count_matches(signals.medium, content)
        score += medium_matches * MEDIUM_WEIGHT

        keywords: list[str] = []
        if strong_matches > 0 or score > 0:
            kw_score, keywords = _keyword_score(content, content_lower, signals.keywords)
            score += kw_score

        expected_count = structure.get(signals.structure, 0)
        if expected_count > 0:
            score += expected_count * STRUCTURE_MATCH_WEIGHT
        elif dominant is not None and dominant != signals.structure:
            score += STRUCTURE_MISMATCH_PENALTY

        max_score = _max_possible_score(signals)
        base = min(1.0, max(0.0, score / max_score)) if max_score > 0 else 0.0
        confidence = _adjust_confidence(entity_type, base, strong_matches, negative_matches, content)

        result = EntityScore(
            entity_type=entity_type,
            score=score,
            max_score=max_score,
            confidence=confidence,
            strong_matches=strong_matches,
            medium_matches=medium_matches,
            negative_matches=negative_matches,
            keywords=tuple(keywords),
            excluded_by=excluded_by,
        )
        logger.debug(
            "scored %s: score=%.2f/%.2f confidence=%.3f strong=%d medium=%d negative=%d keywords=%s",
            entity_type.value,
            score,
            max_score,
            confidence,
            strong_matches,
            medium_matches,
            negative_matches,
            list(keywords),
        )
        results.append(result)

    return results


# ---------------------------------------------------------------------------
# Mutual exclusion
# ---------------------------------------------------------------------------


def resolve_exclusions(entities: list[DetectedEntity]) -> list[DetectedEntity]:
    """Rank by confidence, drop types conflicting with a confident leader, keep the top two."""
    ranked = sorted(entities, key=lambda e: e.confidence, reverse=True)
    if len(ranked) > 1 and ranked[0].confidence >= HIGH_CONFIDENCE:
        top = ranked[0]
        exclusive = EXCLUSIVE_TYPES[top.type]
        kept = [top] + [e for e in ranked[1:] if e.type not in exclusive]
        if len(kept) != len(ranked):
            logger.debug(
                "exclusion: %s (%.3f) removed %s",
                top.type.value,
                top.confidence,
                [e.type.value for e in ranked if e not in kept],
            )
        ranked = kept
    return ranked[:MAX_ENTITIES]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def detect_entities(content: str) -> list[DetectedEntity]:
    """Detect schema.org entities in page content.

    Args:
        content: page text (markdown-ish or HTML-ish)

    Returns:
        At most two DetectedEntity values, sorted by confidence descending.
        Empty when nothing clears the confidence threshold.
    """
    entities = [
        DetectedEntity(
            type=s.entity_type,
            name=extract_name(content, s.entity_type),
            description=extract_description(content),
            properties=extract_properties(content, s.entity_type),
            confidence=s.confidence,
        )
        for s in score_entities(content)
        if s.accepted
    ]
    return resolve_exclusions(entities)
