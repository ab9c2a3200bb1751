# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Keyword context analysis: negation and comparison windows.

A keyword hit is only evidence if the page is *being* that thing. These
helpers look at a short window of text immediately before each occurrence:

- "this is not a product"      → negated
- "compared to other products" → comparison/discussion
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from .signals import COMPARISON_PATTERNS, COMPARISON_WINDOW, NEGATION_PATTERNS, NEGATION_WINDOW

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def _windows_before(content: str, keyword: str, window: int) -> Iterator[str]:
    """Yield the lowercased text preceding every occurrence of keyword (overlaps included)."""
    keyword_lower = keyword.lower()
    if not keyword_lower:
        return
    content_lower = content.lower()
    index = content_lower.find(keyword_lower)
    while index != -1:
        yield content_lower[max(0, index - window) : index]
        index = content_lower.find(keyword_lower, index + 1)


def _any_window_matches(content: str, keyword: str, window: int, patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(p.search(before) for before in _windows_before(content, keyword, window) for p in patterns)


def is_keyword_negated(content: str, keyword: str) -> bool:
    """True if any occurrence of keyword is preceded by a negation within 50 chars."""
    return _any_window_matches(content, keyword, NEGATION_WINDOW, NEGATION_PATTERNS)


def is_keyword_in_comparison_context(content: str, keyword: str) -> bool:
    """True if any occurrence of keyword is preceded by comparison/discussion wording within 30 chars."""
    return _any_window_matches(content, keyword, COMPARISON_WINDOW, COMPARISON_PATTERNS)


def get_sentence_context(content: str, keyword: str) -> list[str]:
    """Sentences (split on ``.!?`` runs) that contain keyword, case-insensitive."""
    keyword_lower = keyword.lower()
    return [
        sentence.strip()
        for sentence in _SENTENCE_SPLIT_RE.split(content)
        if sentence.strip() and keyword_lower in sentence.lower()
    ]
