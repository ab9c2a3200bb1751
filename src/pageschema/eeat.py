# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""E-E-A-T (Experience, Expertise, Authoritativeness, Trustworthiness) signals.

Provenance supplied by the caller (CMS author records, freshness tracking,
editorial review) is folded into a *copy* of a generated schema:

- Article: author (Person + jobTitle/sameAs), publisher, reviewedBy, citation[]
- Article and WebPage: datePublished / dateModified, copied verbatim

Dates are expected to be ISO 8601 strings already; they are never reformatted.
"""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from . import EntityType, GeneratedSchema, SchemaEntity

# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


class _Input(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AuthorInfo(_Input):
    name: str
    credentials: list[str] = Field(default_factory=list, description="First entry becomes jobTitle")
    linkedin_url: str | None = Field(None, alias="linkedInUrl")
    same_as: list[str] = Field(default_factory=list, alias="sameAs")


class PublisherInfo(_Input):
    name: str
    url: str
    logo: str | None = Field(None, description="Logo image URL")


class ReviewerInfo(_Input):
    name: str
    credentials: list[str] = Field(default_factory=list)


class EEATSignals(_Input):
    """Provenance bundle. camelCase aliases (``datePublished``, ``linkedInUrl``…) accepted."""

    author: AuthorInfo | None = None
    date_published: str | None = Field(None, alias="datePublished", description="ISO 8601 date")
    date_modified: str | None = Field(None, alias="dateModified", description="ISO 8601 date")
    publisher: PublisherInfo | None = None
    reviewer: ReviewerInfo | None = None
    citations: list[str] = Field(default_factory=list, description="Source URLs")


class PersonOptions(_Input):
    linkedin_url: str | None = Field(None, alias="linkedInUrl")
    twitter_url: str | None = Field(None, alias="twitterUrl")
    website_url: str | None = Field(None, alias="websiteUrl")
    credentials: list[str] = Field(default_factory=list)
    same_as: list[str] = Field(default_factory=list, alias="sameAs")


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _person(name: str, credentials: list[str], same_as: list[str]) -> SchemaEntity:
    person: SchemaEntity = {"@type": EntityType.PERSON.value, "name": name}
    if credentials:
        person["jobTitle"] = credentials[0]
    if same_as:
        person["sameAs"] = list(same_as)
    return person


def _author(author: AuthorInfo) -> SchemaEntity:
    same_as = [author.linkedin_url] if author.linkedin_url else []
    same_as.extend(author.same_as)
    return _person(author.name, author.credentials, same_as)


def _publisher(publisher: PublisherInfo) -> SchemaEntity:
    org: SchemaEntity = {
        "@type": EntityType.ORGANIZATION.value,
        "name": publisher.name,
        "url": publisher.url,
    }
    if publisher.logo:
        org["logo"] = {"@type": "ImageObject", "url": publisher.logo}
    return org


def add_eeat_signals(schema: GeneratedSchema, signals: EEATSignals | dict[str, Any]) -> GeneratedSchema:
    """Return a deep copy of schema with provenance signals applied.

    The input schema is never modified.
    """
    signals = EEATSignals.model_validate(signals)
    enhanced = copy.deepcopy(schema)

    for node in enhanced.get("@graph", []):
        if not isinstance(node, dict):
            continue
        entity_type = node.get("@type")
        is_article = entity_type == EntityType.ARTICLE.value

        if is_article and signals.author is not None:
            node["author"] = _author(signals.author)

        if is_article or entity_type == EntityType.WEB_PAGE.value:
            if signals.date_published:
                node["datePublished"] = signals.date_published
            if signals.date_modified:
                node["dateModified"] = signals.date_modified

        if not is_article:
            continue

        if signals.publisher is not None:
            node["publisher"] = _publisher(signals.publisher)
        if signals.reviewer is not None:
            node["reviewedBy"] = _person(signals.reviewer.name, signals.reviewer.credentials, [])
        if signals.citations:
            node["citation"] = [{"@type": EntityType.WEB_PAGE.value, "url": url} for url in signals.citations]

    return enhanced


def create_person_schema(name: str, options: PersonOptions | dict[str, Any] | None = None) -> SchemaEntity:
    """Person entity with ``sameAs`` profile links and credentials.

    sameAs order: LinkedIn, Twitter, website, then any extra ``sameAs`` URLs.
    The first credential is the jobTitle; the rest become ``knowsAbout``.
    """
    opts = PersonOptions.model_validate(options or {})

    same_as = [u for u in (opts.linkedin_url, opts.twitter_url, opts.website_url) if u]
    same_as.extend(opts.same_as)

    person = _person(name, opts.credentials, same_as)
    if len(opts.credentials) > 1:
        person["knowsAbout"] = list(opts.credentials[1:])
    return person
