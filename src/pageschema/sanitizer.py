# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Text cleanup for values copied from page content into JSON-LD.

Extracted names, descriptions and Q&A text end up in markup that search
engines and AI agents read verbatim. Two helpers:

1. sanitize_text(): short fields (names, headlines, answers)
2. strip_markdown(): drops markdown emphasis/heading/link markers
"""

from __future__ import annotations

import re

# Zero-width chars, bidi overrides, C0/C1 controls (tab/newline handled separately)
_CONTROL_CHAR_RE = re.compile(
    r"[\u200B-\u200F\u202A-\u202E\u2060-\u2069\uFEFF\uFFF9-\uFFFB"
    r"\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]"
)

# ANSI escape sequences
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")

_WHITESPACE_RE = re.compile(r"\s+")

_MARKDOWN_MARKER_RE = re.compile(r"[#*_\[\]]")


def sanitize_text(text: str, max_len: int = 500) -> str:
    """Sanitize a short text field.

    - Removes ANSI escape sequences
    - Strips Unicode control characters (zero-width, bidi overrides)
    - Collapses all whitespace runs (including newlines) into single spaces
    - Truncates to max_len
    """
    if not text:
        return text

    text = _ANSI_ESCAPE_RE.sub("", text)
    text = _CONTROL_CHAR_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    if len(text) > max_len:
        text = text[:max_len].rstrip()

    return text


def strip_markdown(text: str) -> str:
    """Remove markdown markers (``# * _ [ ]``) and surrounding whitespace."""
    return _MARKDOWN_MARKER_RE.sub("", text).strip()
