"""Page record parsing tests."""

from __future__ import annotations

import pytest

from anchor_engine.pages import (
    UnrecognizedSchemaError,
    parse_page_record,
    parse_page_records,
    slug_from_url,
    title_from_slug,
)


def test_wordpress_post_record():
    page = parse_page_record(
        {
            "id": 7,
            "title": {"rendered": "SEO &amp; Content <em>Guide</em>"},
            "slug": "seo-content-guide",
            "link": "https://example.com/seo-content-guide/",
            "excerpt": {"rendered": "<p>All about SEO.</p>"},
        }
    )

    assert page.title == "SEO & Content Guide"
    assert page.slug == "seo-content-guide"
    assert page.description == "All about SEO."


def test_sitemap_entry_derives_slug_and_title():
    page = parse_page_record({"loc": "https://example.com/blog/seo-strategy-guide/"})

    assert page.slug == "seo-strategy-guide"
    assert page.title == "Seo Strategy Guide"
    assert page.description is None


def test_flat_record_with_keywords():
    page = parse_page_record(
        {
            "title": "Keyword Research Handbook",
            "url": "https://example.com/keyword-research-handbook",
            "primary_keyword": "keyword research",
            "secondary_keywords": "search intent, long tail keywords",
            "topics": ["seo", "research"],
            "category": "SEO",
        }
    )

    assert page.slug == "keyword-research-handbook"
    assert page.primary_keyword == "keyword research"
    assert page.secondary_keywords == ("search intent", "long tail keywords")
    assert page.topics == ("seo", "research")
    assert page.category == "SEO"


@pytest.mark.parametrize("payload", [{"id": 3, "name": "mystery"}, ["not", "a", "mapping"], None])
def test_unknown_shapes_are_refused(payload):
    with pytest.raises(UnrecognizedSchemaError):
        parse_page_record(payload)


def test_parse_page_records_preserves_order():
    pages = parse_page_records([{"slug": "b-page"}, {"slug": "a-page"}])
    assert [page.slug for page in pages] == ["b-page", "a-page"]
    assert [page.title for page in pages] == ["B Page", "A Page"]


def test_slug_helpers():
    assert slug_from_url("https://example.com/blog/seo-guide/") == "seo-guide"
    assert slug_from_url("seo-guide") == "seo-guide"
    assert slug_from_url("https://example.com/") == ""
    assert title_from_slug("seo_strategy-guide") == "Seo Strategy Guide"
