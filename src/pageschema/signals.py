# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Signal library — compiled pattern tables for entity detection.

Pure data: every table here is built once at import and never mutated.
Patterns are English-only and ORDER-SENSITIVE (several extractors are
first-match-wins), so all lists are tuples, never sets.

Tiers per entity type:
  strong   – almost certainly this type            (+8 each)
  medium   – likely this type                      (+4 each)
  keyword  – plain substring, weakest signal       (+0.5 each, context-adjusted)
  negative – probably NOT this type                (−5 each)
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from . import EntityType

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class SignalTier(StrEnum):
    STRONG = "strong"
    MEDIUM = "medium"
    KEYWORD = "keyword"
    NEGATIVE = "negative"


@dataclass(frozen=True, slots=True)
class SignalPattern:
    """A compiled pattern tagged with its tier and owning entity type."""

    entity_type: EntityType
    tier: SignalTier
    pattern: re.Pattern[str]

    def search(self, content: str) -> bool:
        return self.pattern.search(content) is not None


@dataclass(frozen=True, slots=True)
class EntitySignals:
    """All detection data for one entity type."""

    entity_type: EntityType
    keywords: tuple[str, ...]
    strong: tuple[SignalPattern, ...]
    medium: tuple[SignalPattern, ...]
    negative: tuple[SignalPattern, ...]
    required_properties: tuple[str, ...]
    structure: str  # expected page structure type (see STRUCTURE_INDICATORS)


# ---------------------------------------------------------------------------
# Weights and thresholds
# ---------------------------------------------------------------------------

STRONG_WEIGHT = 8.0
MEDIUM_WEIGHT = 4.0
KEYWORD_WEIGHT = 0.5
NEGATIVE_WEIGHT = -5.0
CONTEXT_PENALTY = -10.0

NEGATED_KEYWORD_WEIGHT = NEGATIVE_WEIGHT * 0.5  # "not a product"
COMPARISON_KEYWORD_WEIGHT = KEYWORD_WEIGHT * 0.3  # "compared to products"
STRUCTURE_MATCH_WEIGHT = 2.0  # per matching structure indicator
STRUCTURE_MISMATCH_PENALTY = CONTEXT_PENALTY * 0.5
DOMINANT_STRUCTURE_COUNT = 3

# Keyword contribution to the normalisation denominator is capped so long
# keyword lists don't dilute confidence.
MAX_KEYWORDS_IN_DENOMINATOR = 3

# Number of strong matches for a type to "own" the content (mutual-exclusion pre-penalty).
STRONG_SIGNAL_MIN_MATCHES = 2

# {min strong matches: confidence boost}, checked high to low
STRONG_MATCH_BOOSTS: tuple[tuple[int, float], ...] = ((3, 0.35), (2, 0.25), (1, 0.15))

# {min negative matches: confidence penalty}, checked high to low
NEGATIVE_MATCH_PENALTIES: tuple[tuple[int, float], ...] = ((3, 0.5), (2, 0.35), (1, 0.2))

# Negative penalty multiplier by strong match count: strong evidence dominates weak negatives.
NEGATIVE_MULTIPLIERS: tuple[tuple[int, float], ...] = ((2, 0.3), (1, 0.6), (0, 1.0))

MIN_CONTENT_LENGTH = 100
CONFIDENCE_THRESHOLD = 0.45
HIGH_CONFIDENCE = 0.6  # top entity at or above this removes conflicting entities
VERY_STRONG_FLOOR = 0.6
NO_STRONG_CEILING = 0.3
MAX_ENTITIES = 2

NEGATION_WINDOW = 50
COMPARISON_WINDOW = 30

# ---------------------------------------------------------------------------
# Shared building blocks
# ---------------------------------------------------------------------------

PRICE_RE = re.compile(r"\$[\d,]+(?:\.\d{2})?")
ADD_TO_CART_RE = re.compile(r"add\s+to\s+cart", re.IGNORECASE)
BUY_NOW_RE = re.compile(r"buy\s+now", re.IGNORECASE)
STOCK_RE = re.compile(r"(?:in|out\s+of)\s+stock", re.IGNORECASE)
QUESTION_LINE_RE = re.compile(r"^Q:\s*.+$", re.MULTILINE)
ANSWER_LINE_RE = re.compile(r"^A:\s*.+$", re.MULTILINE)
PUBLISHED_DATE_RE = re.compile(r"published\s+(?:on\s+)?(?:\w+\s+\d+,?\s+\d{4})", re.IGNORECASE)
BYLINE_RE = re.compile(r"by\s+[A-Z][a-z]+\s+[A-Z][a-z]+")


def _compile(entity_type: EntityType, tier: SignalTier, *patterns: str, flags: int = 0) -> tuple[SignalPattern, ...]:
    return tuple(SignalPattern(entity_type, tier, re.compile(p, flags)) for p in patterns)


def _wrap(entity_type: EntityType, tier: SignalTier, *compiled: re.Pattern[str]) -> tuple[SignalPattern, ...]:
    return tuple(SignalPattern(entity_type, tier, c) for c in compiled)


_I = re.IGNORECASE
_M = re.MULTILINE
_STRONG = SignalTier.STRONG
_MEDIUM = SignalTier.MEDIUM
_NEGATIVE = SignalTier.NEGATIVE

# ---------------------------------------------------------------------------
# Per-type signal registry
# ---------------------------------------------------------------------------

_P = EntityType.PRODUCT
_PRODUCT = EntitySignals(
    entity_type=_P,
    keywords=("price", "buy", "add to cart", "product", "sku", "in stock", "out of stock", "shipping"),
    strong=(
        *_wrap(_P, _STRONG, ADD_TO_CART_RE, BUY_NOW_RE),
        *_compile(_P, _STRONG, r"\$[\d,]+(?:\.\d{2})?\s*(?:USD|CAD|EUR)?"),
        *_wrap(_P, _STRONG, STOCK_RE),
        *_compile(_P, _STRONG, r"sku[:\s]+[\w-]+", flags=_I),
    ),
    medium=(
        *_wrap(_P, _MEDIUM, PRICE_RE),
        *_compile(_P, _MEDIUM, r"(?:buy|purchase|order)\s+now", flags=_I),
        *_wrap(_P, _MEDIUM, ADD_TO_CART_RE, STOCK_RE),
    ),
    negative=_compile(
        _P,
        _NEGATIVE,
        r"\b(?:article|blog|post|news|story)\b",
        r"\b(?:how to|guide|tutorial|learn)\b",
        # "review" alone is fine for products; opinion pieces are not
        r"\b(?:opinion|analysis|thoughts on)\b",
        r"\b(?:published|written by|author|posted on)\b",
        r"\b(?:step \d+|first,|second,|finally,)\b",
        r"\b(?:faq|frequently asked|questions?)\b",
        r"\b(?:pricing strategy|how to price|cost of living)\b",
        flags=_I,
    ),
    required_properties=("name", "description", "offers"),
    structure="product",
)

_A = EntityType.ARTICLE
_ARTICLE = EntitySignals(
    entity_type=_A,
    keywords=("author", "published", "article", "blog", "post", "written by", "read time"),
    strong=(
        *_compile(_A, _STRONG, r"^#\s+.+", flags=_M),  # markdown H1
        *_wrap(_A, _STRONG, PUBLISHED_DATE_RE, BYLINE_RE),
        *_compile(_A, _STRONG, r"\d+\s+min(?:ute)?s?\s+read", flags=_I),
    ),
    medium=(
        *_compile(_A, _MEDIUM, r"(?:published|posted)\s+(?:on\s+)?(?:\w+\s+\d+,?\s+\d{4}|\d{4}-\d{2}-\d{2})", flags=_I),
        *_wrap(_A, _MEDIUM, BYLINE_RE),
        *_compile(_A, _MEDIUM, r"\d+\s+min(?:ute)?s?\s+read", flags=_I),
    ),
    negative=_compile(
        _A,
        _NEGATIVE,
        r"\b(?:add to cart|buy now|checkout|purchase)\b",
        r"\b(?:in stock|out of stock|shipping|delivery)\b",
        r"\b(?:\$[\d,]+(?:\.\d{2})?)\s*(?:USD|CAD|EUR)?\s*(?:each|per|/)",
        r"\b(?:sku|product code|item number)\b",
        flags=_I,
    ),
    required_properties=("headline", "author", "datePublished"),
    structure="blog",
)

_O = EntityType.ORGANIZATION
_ORGANIZATION = EntitySignals(
    entity_type=_O,
    keywords=("company", "about us", "our team", "founded", "headquarters", "employees", "mission"),
    strong=(),
    medium=_compile(
        _O,
        _MEDIUM,
        r"founded\s+(?:in\s+)?\d{4}",
        r"(?:our|the)\s+(?:company|organization|team)",
        r"headquarters?\s+(?:in|at)",
        flags=_I,
    ),
    negative=_compile(
        _O,
        _NEGATIVE,
        r"\b(?:add to cart|buy now|checkout)\b",
        r"\b(?:step \d+|how to)\b",
        r"\b(?:q:|a:|faq)\b",
        flags=_I,
    ),
    required_properties=("name", "url"),
    structure="landing",
)

_PE = EntityType.PERSON
_PERSON = EntitySignals(
    entity_type=_PE,
    keywords=("biography", "profile", "about me", "experience", "skills", "contact me"),
    strong=(),
    medium=_compile(
        _PE,
        _MEDIUM,
        r"(?:my|his|her)\s+(?:experience|background|career)",
        r"years?\s+of\s+experience",
        r"(?:contact|reach)\s+(?:me|out)",
        flags=_I,
    ),
    negative=_compile(
        _PE,
        _NEGATIVE,
        r"\b(?:add to cart|buy now|checkout)\b",
        r"\b(?:our company|our team|we are)\b",
        flags=_I,
    ),
    required_properties=("name",),
    structure="landing",
)

_F = EntityType.FAQ
_FAQ = EntitySignals(
    entity_type=_F,
    keywords=("faq", "frequently asked", "questions", "q&a", "q:", "a:"),
    strong=(
        *_wrap(_F, _STRONG, QUESTION_LINE_RE, ANSWER_LINE_RE),
        *_compile(_F, _STRONG, r"frequently\s+asked\s+questions", flags=_I),
    ),
    medium=(
        *_compile(_F, _MEDIUM, r"(?:frequently\s+asked\s+)?questions?", flags=_I),
        *_wrap(_F, _MEDIUM, QUESTION_LINE_RE),
        *_compile(_F, _MEDIUM, r"\?\s*\n+[A-Z]"),
    ),
    negative=_compile(
        _F,
        _NEGATIVE,
        r"\b(?:buy|purchase|order|cart|checkout)\b",
        r"\b(?:step \d+|how to|tutorial|guide)\b",
        flags=_I,
    ),
    required_properties=("mainEntity",),
    structure="faq",
)

_W = EntityType.WEB_PAGE
_WEB_PAGE = EntitySignals(
    entity_type=_W,
    keywords=(),
    strong=(),
    medium=(),
    negative=(),
    required_properties=("name",),
    structure="landing",
)

_B = EntityType.BREADCRUMB_LIST
_BREADCRUMB_LIST = EntitySignals(
    entity_type=_B,
    keywords=("home", "breadcrumb", ">"),
    strong=(),
    medium=_compile(_B, _MEDIUM, r"home\s*[>›»]\s*\w+", flags=_I),
    negative=(),
    required_properties=("itemListElement",),
    structure="landing",
)

_H = EntityType.HOW_TO
_HOW_TO = EntitySignals(
    entity_type=_H,
    keywords=("how to", "step by step", "tutorial", "guide", "instructions", "steps", "step 1", "step 2"),
    strong=(
        *_compile(_H, _STRONG, r"^step\s+\d+[:.]", flags=_I | _M),
        *_compile(_H, _STRONG, r"how\s+to\s+\w+", flags=_I),
        *_compile(_H, _STRONG, r"^\d+\.\s+\w+.*\n\d+\.\s+\w+", flags=_M),  # several numbered steps
    ),
    medium=(
        *_compile(_H, _MEDIUM, r"how\s+to\s+\w+", r"step\s+\d+[:.]", flags=_I),
        *_compile(_H, _MEDIUM, r"(?:first|second|third|next|then|finally)[,:]?\s+\w+", flags=_I),
        *_compile(_H, _MEDIUM, r"^\d+\.\s+\w+", flags=_M),
    ),
    negative=_compile(
        _H,
        _NEGATIVE,
        r"\b(?:add to cart|buy now|checkout)\b",
        r"\b(?:faq|frequently asked)\b",
        r"\b(?:q:|a:|question:|answer:)\b",
        flags=_I,
    ),
    required_properties=("name", "step"),
    structure="howto",
)

# Declaration order is evaluation order for detection.
ENTITY_SIGNALS: Mapping[EntityType, EntitySignals] = MappingProxyType(
    {
        s.entity_type: s
        for s in (_PRODUCT, _ARTICLE, _ORGANIZATION, _PERSON, _FAQ, _WEB_PAGE, _BREADCRUMB_LIST, _HOW_TO)
    }
)

# WebPage is synthesised as a wrapper, never detected.
DETECTABLE_TYPES: tuple[EntityType, ...] = tuple(t for t in ENTITY_SIGNALS if t is not EntityType.WEB_PAGE)

REQUIRED_PROPERTIES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {t.value: s.required_properties for t, s in ENTITY_SIGNALS.items()}
)

# ---------------------------------------------------------------------------
# Mutual exclusion
# ---------------------------------------------------------------------------

_EXCLUSIVE_PAIRS: tuple[tuple[EntityType, tuple[EntityType, ...]], ...] = (
    (EntityType.PRODUCT, (EntityType.ARTICLE, EntityType.HOW_TO, EntityType.FAQ)),
    (EntityType.ARTICLE, (EntityType.PRODUCT, EntityType.HOW_TO)),
    (EntityType.HOW_TO, (EntityType.PRODUCT, EntityType.ARTICLE, EntityType.FAQ)),
    (EntityType.ORGANIZATION, (EntityType.PERSON,)),
)


def _symmetric_exclusions() -> Mapping[EntityType, frozenset[EntityType]]:
    table: dict[EntityType, set[EntityType]] = {t: set() for t in EntityType}
    for owner, others in _EXCLUSIVE_PAIRS:
        for other in others:
            table[owner].add(other)
            table[other].add(owner)
    return MappingProxyType({t: frozenset(v) for t, v in table.items()})


EXCLUSIVE_TYPES: Mapping[EntityType, frozenset[EntityType]] = _symmetric_exclusions()

# ---------------------------------------------------------------------------
# Context patterns (matched against the text *before* a keyword)
# ---------------------------------------------------------------------------

NEGATION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bnot\s+(?:a|an|the)?\s*",
        r"\bno\s+",
        r"\bnever\s+",
        r"\bwithout\s+(?:a|an|the)?\s*",
        r"\bisn't\s+(?:a|an|the)?\s*",
        r"\baren't\s+",
        r"\bwasn't\s+",
        r"\bweren't\s+",
        r"\bdon't\s+",
        r"\bdoesn't\s+",
        r"\bdidn't\s+",
        r"\bwon't\s+",
        r"\bcan't\s+",
        r"\bcannot\s+",
        r"\bunlike\s+",
        r"\brather\s+than\s+",
        r"\binstead\s+of\s+",
    )
)

COMPARISON_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bcompared\s+to\s+",
        r"\bsimilar\s+to\s+",
        r"\blike\s+(?:a|an|other)?\s*",
        r"\bsuch\s+as\s+",
        r"\bfor\s+example\s*",
        r"\be\.g\.\s*",
        r"\bi\.e\.\s*",
        r"\bversus\s+",
        r"\bvs\.?\s+",
        r"\babout\s+",
        r"\bdiscussing\s+",
        r"\btalking\s+about\s+",
        r"\bmentioning\s+",
    )
)

# ---------------------------------------------------------------------------
# Page structure indicators
# ---------------------------------------------------------------------------

STRUCTURE_INDICATORS: Mapping[str, tuple[re.Pattern[str], ...]] = MappingProxyType(
    {
        "blog": (
            re.compile(r"\b(?:posted|published)\s+(?:on|at)\s+", _I),
            BYLINE_RE,
            re.compile(r"\b\d+\s+(?:min|minute)s?\s+read\b", _I),
            re.compile(r"\b(?:comments?|replies|responses)\s*(?:\(\d+\)|\[\d+\])?\s*$", _I | _M),
            re.compile(r"\btags?:\s*", _I),
            re.compile(r"\bcategory:\s*", _I),
            re.compile(r"\bshare\s+(?:this|on)\s+", _I),
        ),
        "product": (
            re.compile(r"\badd\s+to\s+(?:cart|bag|basket)\b", _I),
            re.compile(r"\bbuy\s+(?:now|it|this)\b", _I),
            re.compile(r"\b(?:quantity|qty)[:\s]+", _I),
            re.compile(r"\bsize[:\s]+", _I),
            re.compile(r"\bcolor[:\s]+", _I),
            re.compile(r"\brating[:\s]+[\d.]+", _I),
            re.compile(r"\b\d+\s+reviews?\b", _I),
            re.compile(r"\bfree\s+shipping\b", _I),
        ),
        "landing": (
            re.compile(r"\bget\s+started\b", _I),
            re.compile(r"\bsign\s+up\b", _I),
            re.compile(r"\bstart\s+(?:your\s+)?free\s+trial\b", _I),
            re.compile(r"\brequest\s+(?:a\s+)?demo\b", _I),
            re.compile(r"\bcontact\s+(?:us|sales)\b", _I),
            re.compile(r"\bschedule\s+(?:a\s+)?(?:call|meeting)\b", _I),
        ),
        "faq": (
            re.compile(r"^Q:\s*", _M),
            re.compile(r"^A:\s*", _M),
            re.compile(r"\bfrequently\s+asked\s+questions?\b", _I),
            re.compile(r"\bfaq\b", _I),
            re.compile(r"\?\s*\n+[A-Z]"),
        ),
        "howto": (
            re.compile(r"\bstep\s+\d+[:.]", _I),
            re.compile(r"\bhow\s+to\s+\w+", _I),
            re.compile(r"^\d+\.\s+\w+.*\n\d+\.\s+\w+", _M),
            re.compile(r"\b(?:first|second|third|finally)[,:]?\s+", _I),
        ),
    }
)

# ---------------------------------------------------------------------------
# Very strong cross-type combinations
# ---------------------------------------------------------------------------


def has_very_strong_product_signals(content: str) -> bool:
    """Price together with a purchase action or stock status."""
    if not PRICE_RE.search(content):
        return False
    return bool(ADD_TO_CART_RE.search(content) or BUY_NOW_RE.search(content) or STOCK_RE.search(content))


def has_very_strong_article_signals(content: str) -> bool:
    """Dated publication line together with a byline."""
    return bool(PUBLISHED_DATE_RE.search(content) and BYLINE_RE.search(content))


def has_very_strong_faq_signals(content: str) -> bool:
    """At least one ``Q:`` line and one ``A:`` line."""
    return bool(QUESTION_LINE_RE.search(content) and ANSWER_LINE_RE.search(content))


def has_very_strong_signals(content: str) -> bool:
    """Any combination unambiguous enough to detect on short content."""
    return (
        has_very_strong_product_signals(content)
        or has_very_strong_faq_signals(content)
        or has_very_strong_article_signals(content)
    )
