# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""HowTo step extraction and HowTo schema generation.

Three strategies, tried in order; the first one that yields steps wins:

  1. numbered lines      "1. Preheat the oven"
  2. explicit step labels "Step 1: Preheat the oven"
  3. ordinal connectives  "First, preheat... Then, mix... Finally, bake..."

Steps are renumbered ``Step 1..n`` regardless of the numbers in the source,
so ``position`` is always 1-based and strictly increasing.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from . import EntityType, SchemaEntity
from .sanitizer import sanitize_text

logger = logging.getLogger(__name__)

# A blank line, markdown heading or HTML heading closes the current step.
BLOCK_END = r"\n[ \t]*(?:\n|#|<h[1-6]\b)"

_NUMBERED_RE = re.compile(r"^\s*(\d+)\.\s+(.+?)(?=\n\s*\d+\.|$)", re.MULTILINE)
_STEP_LABEL_RE = re.compile(
    rf"\bstep\s+(\d+)[:.]\s*(.+?)(?=\bstep\s+\d+|{BLOCK_END}|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_ORDINALS = r"(?:first|second|third|fourth|fifth|next|then|finally)"
_ORDINAL_RE = re.compile(
    rf"\b{_ORDINALS}[,:]?\s+(.+?)(?=\b{_ORDINALS}[,:]|{BLOCK_END}|\Z)",
    re.IGNORECASE | re.DOTALL,
)


class EstimatedCost(BaseModel):
    """schema.org MonetaryAmount input."""

    model_config = ConfigDict(frozen=True)

    value: int | float
    currency: str


class HowToOptions(BaseModel):
    """Optional HowTo fields. camelCase aliases accepted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str | None = None
    total_time: str | None = Field(None, alias="totalTime", description="ISO 8601 duration, e.g. PT30M")
    estimated_cost: EstimatedCost | None = Field(None, alias="estimatedCost")
    supply: list[str] = Field(default_factory=list)
    tool: list[str] = Field(default_factory=list)
    url: str | None = Field(None, description="Page URL used for @id/url")


def _texts(pattern: re.Pattern[str], content: str, group: int) -> list[str]:
    texts = (sanitize_text(m.group(group)) for m in pattern.finditer(content))
    return [t for t in texts if t]


def extract_howto_steps(content: str) -> list[dict[str, str]]:
    """Ordered ``{"name": "Step N", "text": ...}`` steps; empty list if none found."""
    strategies = (
        ("numbered", _NUMBERED_RE, 2),
        ("step_label", _STEP_LABEL_RE, 2),
        ("ordinal", _ORDINAL_RE, 1),
    )
    for strategy, pattern, group in strategies:
        texts = _texts(pattern, content, group)
        if texts:
            logger.debug("howto steps: strategy=%s count=%d", strategy, len(texts))
            return [{"name": f"Step {i}", "text": text} for i, text in enumerate(texts, start=1)]
    return []


def steps_to_schema(steps: list[dict[str, str]]) -> list[SchemaEntity]:
    """HowToStep entries with 1-based positions in list order."""
    return [
        {
            "@type": "HowToStep",
            "position": position,
            "name": step["name"],
            "text": step["text"],
        }
        for position, step in enumerate(steps, start=1)
    ]


def generate_howto_schema(
    title: str,
    content: str,
    options: HowToOptions | dict[str, Any] | None = None,
) -> SchemaEntity:
    """Build a standalone HowTo entity from step-by-step content."""
    opts = HowToOptions.model_validate(options or {})
    slug = EntityType.HOW_TO.value.lower()

    howto: SchemaEntity = {
        "@type": EntityType.HOW_TO.value,
        "@id": f"{opts.url}#{slug}" if opts.url else f"#{slug}",
        "name": title,
        "step": steps_to_schema(extract_howto_steps(content)),
    }
    if opts.url:
        howto["url"] = opts.url
    if opts.description:
        howto["description"] = opts.description
    if opts.total_time:
        howto["totalTime"] = opts.total_time
    if opts.estimated_cost is not None:
        howto["estimatedCost"] = {
            "@type": "MonetaryAmount",
            "value": opts.estimated_cost.value,
            "currency": opts.estimated_cost.currency,
        }
    if opts.supply:
        howto["supply"] = [{"@type": "HowToSupply", "name": s} for s in opts.supply]
    if opts.tool:
        howto["tool"] = [{"@type": "HowToTool", "name": t} for t in opts.tool]
    return howto
