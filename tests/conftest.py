# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import pageschema  # noqa: F401
except ImportError:
    raise ImportError("pageschema is not installed. Run: pip install -e '.[dev]'") from None

import pytest

from tests._pages import ARTICLE_PAGE


@pytest.fixture
def article_schema() -> dict:
    """Synthesized schema for ARTICLE_PAGE: WebPage wrapper + Article."""
    from pageschema.entity_detector import detect_entities
    from pageschema.schema_generator import generate_schema

    return generate_schema(detect_entities(ARTICLE_PAGE), "https://example.com/blog/my-post")
