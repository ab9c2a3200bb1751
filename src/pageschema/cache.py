# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Caller-owned result cache for generate_from_content().

Pure Python module. The detection engine never caches on its own; callers
that regenerate schema for unchanged content (CMS webhooks, re-crawls)
create a SchemaCache and route calls through it.

Keys are SHA-256 digests of ``(page_url, content)``. Values are stored and
returned as deep copies so callers cannot corrupt cached schemas.

NOTE: This class is NOT thread-safe. Use one instance per worker, or guard
it with a lock.
"""

from __future__ import annotations

import copy
import hashlib
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass

from . import GeneratedSchema
from .schema_generator import generate_from_content

logger = logging.getLogger("pageschema.cache")

DEFAULT_MAX_ENTRIES = 256


def content_key(content: str, page_url: str | None = None) -> str:
    """Stable cache key for a (page_url, content) pair."""
    h = hashlib.sha256()
    h.update((page_url or "").encode("utf-8"))
    h.update(b"\x00")
    h.update(content.encode("utf-8", errors="surrogatepass"))
    return h.hexdigest()


# ---------------------------------------------------------------------------
# Cache entry / stats
# ---------------------------------------------------------------------------


@dataclass
class CacheEntry:
    schema: GeneratedSchema
    created_at: float  # time.monotonic()

    def is_expired(self, ttl: float) -> bool:
        return ttl > 0 and (time.monotonic() - self.created_at) > ttl


@dataclass
class CacheStats:
    """Counters for cache behaviour."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


class SchemaCache:
    """LRU cache of generated schemas keyed by content hash."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, ttl: float = 0.0) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._ttl = ttl
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> GeneratedSchema | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._ttl):
            del self._entries[key]
            self.stats.expirations += 1
            return None
        self._entries.move_to_end(key)
        return copy.deepcopy(entry.schema)

    def put(self, key: str, schema: GeneratedSchema) -> None:
        self._entries[key] = CacheEntry(schema=copy.deepcopy(schema), created_at=time.monotonic())
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self.stats.evictions += 1
            logger.debug("evicted %s", evicted[:12])

    def invalidate(self, content: str, page_url: str | None = None) -> bool:
        """Drop the entry for this content. Returns True if one existed."""
        return self._entries.pop(content_key(content, page_url), None) is not None

    def invalidate_all(self) -> None:
        self._entries.clear()

    def generate_from_content(self, content: str, page_url: str | None = None) -> GeneratedSchema:
        """Memoized generate_from_content(); at most one computation per live key."""
        key = content_key(content, page_url)
        cached = self.get(key)
        if cached is not None:
            self.stats.hits += 1
            return cached
        self.stats.misses += 1
        schema = generate_from_content(content, page_url)
        self.put(key, schema)
        return schema
