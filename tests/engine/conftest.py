"""Shared fixtures for anchor engine tests."""

from __future__ import annotations

from typing import Iterable

import pytest

from anchor_engine.config import AnchorConfig
from anchor_engine.engine import AnchorEngine
from anchor_engine.types import PageContext

SEO_PARAGRAPH = (
    "Implementing modern SEO strategies requires careful keyword research "
    "and consistent content optimization efforts."
)


@pytest.fixture()
def anchor_config():
    """Default configuration with the quality floor lowered for short fixtures."""

    return AnchorConfig(min_quality_score=60)


@pytest.fixture()
def engine(anchor_config):
    return AnchorEngine(anchor_config)


@pytest.fixture()
def seo_page():
    return make_page("SEO Strategy Guide", primary_keyword="SEO strategies")


def make_page(
    title: str,
    slug: str | None = None,
    *,
    description: str | None = None,
    primary_keyword: str | None = None,
    secondary_keywords: Iterable[str] | None = None,
    category: str | None = None,
    topics: Iterable[str] | None = None,
) -> PageContext:
    return PageContext(
        title=title,
        slug=slug or "-".join(title.lower().split()),
        description=description,
        primary_keyword=primary_keyword,
        secondary_keywords=tuple(secondary_keywords or ()),
        category=category,
        topics=tuple(topics or ()),
    )
