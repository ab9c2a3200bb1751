# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Name, description and property extraction for detected entities.

Cascade for names: markdown H1 > HTML <h1> > type-specific fallback > type name.
Uses lxml for HTML <h1> and description text so nested inline tags and entities are handled.

Missing properties are omitted, never guessed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any

from lxml import etree
from lxml.html import fromstring

from . import EntityType
from .howto import extract_howto_steps
from .sanitizer import sanitize_text, strip_markdown
from .signals import PRICE_RE

logger = logging.getLogger(__name__)

IN_STOCK = "https://schema.org/InStock"
OUT_OF_STOCK = "https://schema.org/OutOfStock"
DEFAULT_CURRENCY = "USD"

_NAME_MAX_LEN = 200
_DESCRIPTION_FALLBACK_LEN = 160

# --- Name ---

_MARKDOWN_H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_HTML_H1_RE = re.compile(r"<h1[^>]*>.*?</h1>", re.IGNORECASE | re.DOTALL)

_NAME_FALLBACKS: dict[EntityType, re.Pattern[str]] = {
    EntityType.PRODUCT: re.compile(r"(?:product|item):\s*(.+)", re.IGNORECASE),
    EntityType.PERSON: re.compile(r"(?:name|by):\s*([A-Z][a-z]+\s+[A-Z][a-z]+)"),
}


_TAG_RE = re.compile(r"<[a-zA-Z/!][^>]*>")


def _markup_text(fragment: str) -> str:
    """Visible text of an HTML fragment; plain text passes through unchanged."""
    if not _TAG_RE.search(fragment):
        return fragment
    try:
        root = fromstring(fragment)
    except (etree.LxmlError, ValueError):
        return _TAG_RE.sub(" ", fragment)
    etree.strip_elements(root, etree.Comment, "script", "style", "head", with_tail=False)
    return " ".join(root.itertext())


def _html_h1_text(content: str) -> str | None:
    for m in _HTML_H1_RE.finditer(content):
        text = sanitize_text(_markup_text(m.group(0)), max_len=_NAME_MAX_LEN)
        if text:
            return text
    return None


def extract_name(content: str, entity_type: EntityType) -> str:
    """Display name for an entity; falls back to the type name itself."""
    m = _MARKDOWN_H1_RE.search(content)
    if m:
        name = sanitize_text(m.group(1), max_len=_NAME_MAX_LEN)
        if name:
            return name

    h1 = _html_h1_text(content)
    if h1:
        return h1

    fallback = _NAME_FALLBACKS.get(entity_type)
    if fallback is not None:
        m = fallback.search(content)
        if m:
            name = sanitize_text(m.group(1), max_len=_NAME_MAX_LEN)
            if name:
                return name

    return entity_type.value


# --- Description ---

# A line that is not a heading, html heading, table row or list item, 50–200 chars long.
_PARAGRAPH_RE = re.compile(r"^(?!#)(?!<h)(?!\|)(?!-)(.{50,200})", re.MULTILINE)


def extract_description(content: str) -> str:
    """First paragraph-like line, else the first 160 chars of visible text.

    HTML markup is reduced to its text in both cases.
    """
    m = _PARAGRAPH_RE.search(content)
    if m:
        paragraph = sanitize_text(_markup_text(m.group(1)))
        if paragraph:
            return paragraph
    return sanitize_text(strip_markdown(_markup_text(content)))[:_DESCRIPTION_FALLBACK_LEN].rstrip()


# --- Properties ---

_IN_STOCK_RE = re.compile(r"in\s+stock", re.IGNORECASE)
_OUT_OF_STOCK_RE = re.compile(r"out\s+of\s+stock", re.IGNORECASE)
_DATE_PUBLISHED_RE = re.compile(
    r"(?:published|posted)\s+(?:on\s+)?(\w+\s+\d+,?\s+\d{4}|\d{4}-\d{2}-\d{2})",
    re.IGNORECASE,
)
_AUTHOR_RE = re.compile(r"by\s+([A-Z][a-z]+\s+[A-Z][a-z]+)")
_FOUNDED_RE = re.compile(r"founded\s+(?:in\s+)?(\d{4})", re.IGNORECASE)
_BREADCRUMB_START_RE = re.compile(r"\bhome\s*[>›»]", re.IGNORECASE)
_BREADCRUMB_SEP_RE = re.compile(r"\s*[>›»]\s*")
_QA_LABEL_RE = re.compile(r"\b(Q|Question|A|Answer):\s*", re.IGNORECASE)
# Blank line, markdown heading or HTML heading: closes the current answer.
_QA_BREAK_RE = re.compile(r"\s*(?:$|#|<h[1-6]\b)", re.IGNORECASE)


def _product_properties(content: str) -> dict[str, Any]:
    props: dict[str, Any] = {}
    m = PRICE_RE.search(content)
    if m:
        props["price"] = m.group(0).replace("$", "").replace(",", "")
        props["priceCurrency"] = DEFAULT_CURRENCY
    if _IN_STOCK_RE.search(content):
        props["availability"] = IN_STOCK
    elif _OUT_OF_STOCK_RE.search(content):
        props["availability"] = OUT_OF_STOCK
    return props


def _article_properties(content: str) -> dict[str, Any]:
    props: dict[str, Any] = {}
    m = _DATE_PUBLISHED_RE.search(content)
    if m:
        props["datePublished"] = m.group(1)
    m = _AUTHOR_RE.search(content)
    if m:
        props["author"] = m.group(1)
    return props


def _organization_properties(content: str) -> dict[str, Any]:
    m = _FOUNDED_RE.search(content)
    return {"foundingDate": m.group(1)} if m else {}


def _qa_segments(content: str) -> Iterator[tuple[str, str]]:
    """Yield ``(label, text)`` per labelled span, one pass over the lines.

    label is ``"q"``, ``"a"``, ``""`` for text continuing the previous span,
    or ``"break"`` for a line that closes the current answer.
    """
    for line in content.splitlines():
        if _QA_BREAK_RE.match(line):
            yield "break", ""
            continue
        label, start = "", 0
        for m in _QA_LABEL_RE.finditer(line):
            yield label, line[start : m.start()]
            label, start = m.group(1)[0].lower(), m.end()
        yield label, line[start:]


def _add_pair(pairs: list[dict[str, str]], question: list[str], answer: list[str]) -> None:
    q = sanitize_text(" ".join(question))
    a = sanitize_text(" ".join(answer))
    if q and a:
        pairs.append({"question": q, "answer": a})


def extract_qa_pairs(content: str) -> list[dict[str, str]]:
    """``Q:``/``A:`` (or ``Question:``/``Answer:``) pairs in input order.

    An answer runs until the next question, a blank line or a heading.
    Questions without an answer are dropped.
    """
    pairs: list[dict[str, str]] = []
    question: list[str] = []
    answer: list[str] = []
    current: list[str] | None = None

    for label, text in _qa_segments(content):
        if label == "q" or (label == "break" and answer):
            _add_pair(pairs, question, answer)
            question, answer = [], []
            current = question if label == "q" else None
        elif label == "break":
            current = None
        elif label == "a":
            current = answer if question else None
        if current is not None and text:
            current.append(text)

    _add_pair(pairs, question, answer)
    return pairs


def _faq_properties(content: str) -> dict[str, Any]:
    pairs = extract_qa_pairs(content)
    return {"mainEntity": pairs} if pairs else {}


def _howto_properties(content: str) -> dict[str, Any]:
    steps = extract_howto_steps(content)
    return {"step": steps} if steps else {}


def extract_breadcrumbs(content: str) -> list[str]:
    """Names along the first ``Home > A > B`` trail, in order."""
    m = _BREADCRUMB_START_RE.search(content)
    if not m:
        return []
    end = content.find("\n", m.start())
    trail = content[m.start() : end if end != -1 else len(content)]
    names = (sanitize_text(part, max_len=_NAME_MAX_LEN) for part in _BREADCRUMB_SEP_RE.split(trail))
    return [n for n in names if n]


def _breadcrumb_properties(content: str) -> dict[str, Any]:
    names = extract_breadcrumbs(content)
    return {"itemListElement": names} if len(names) >= 2 else {}


_PROPERTY_EXTRACTORS = {
    EntityType.PRODUCT: _product_properties,
    EntityType.ARTICLE: _article_properties,
    EntityType.ORGANIZATION: _organization_properties,
    EntityType.FAQ: _faq_properties,
    EntityType.HOW_TO: _howto_properties,
    EntityType.BREADCRUMB_LIST: _breadcrumb_properties,
}


def extract_properties(content: str, entity_type: EntityType) -> dict[str, Any]:
    """Type-specific structured properties; empty dict for types without extractors."""
    extractor = _PROPERTY_EXTRACTORS.get(entity_type)
    if extractor is None:
        return {}
    props = extractor(content)
    logger.debug("extracted %s properties: %s", entity_type.value, sorted(props))
    return props
