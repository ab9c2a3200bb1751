# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for pageschema.sanitizer."""

from __future__ import annotations

import pytest

from pageschema.sanitizer import sanitize_text, strip_markdown


class TestSanitizeText:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("  Wireless\n\n  Mouse\t", "Wireless Mouse"),
            ("\x1b[31mred\x1b[0m text", "red text"),
            ("zero\u200bwidth", "zerowidth"),
            ("bidi\u202eoverride", "bidioverride"),
            ("bell\x07", "bell"),
        ],
        ids=["whitespace", "ansi", "zero-width", "bidi", "control"],
    )
    def test_cleanup(self, raw: str, expected: str):
        assert sanitize_text(raw) == expected

    def test_truncates(self):
        assert sanitize_text("word " * 50, max_len=12) == "word word wo"
        assert sanitize_text("abc   def", max_len=4) == "abc"

    def test_empty(self):
        assert sanitize_text("") == ""


class TestStripMarkdown:
    def test_markers_removed(self):
        assert strip_markdown("## **Bold** _it_ [link]") == "Bold it link"
