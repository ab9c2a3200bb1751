# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""PageSchema exception hierarchy.

All PageSchema-specific errors inherit from PageSchemaError, allowing callers
to catch the base class for any PageSchema failure or specific subclasses
for targeted handling.

Detection never raises: an empty result is a valid answer. Only malformed
serialized input is an error.
"""

from __future__ import annotations


class PageSchemaError(Exception):
    """Base exception for all PageSchema errors."""


class SchemaParseError(PageSchemaError, ValueError):
    """Serialized JSON-LD is not a well-formed schema document."""

    def __init__(self, message: str, *, field: str = "") -> None:
        super().__init__(message)
        self.field = field  # "json", "@context" or "@graph"
