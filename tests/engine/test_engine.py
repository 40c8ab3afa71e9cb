"""Anchor selection, injection and session bookkeeping tests."""

from __future__ import annotations

from bs4 import BeautifulSoup

from anchor_engine.config import AnchorConfig
from anchor_engine.engine import AnchorEngine, heading_overlap

from .conftest import SEO_PARAGRAPH

TARGET = "https://example.com/seo-strategy-guide/"


def test_rich_anchor_is_selected_and_injected(engine, seo_page):
    candidate = engine.find_best_anchor(SEO_PARAGRAPH, seo_page)

    assert candidate is not None
    assert candidate.text == "Implementing modern SEO strategies"
    assert candidate.word_count == 4

    outcome = engine.inject_link(f"<p>{SEO_PARAGRAPH}</p>", candidate, TARGET)

    assert outcome.result.success
    assert outcome.result.position == 0
    assert outcome.result.word_count == 4
    assert outcome.result.quality_metrics.overall == candidate.quality_score
    assert "keyword:seo strategies" in outcome.result.power_patterns
    assert outcome.result.reasoning == (
        "Injected 4-word contextual anchor (strong SEO value; strong naturalness)"
    )
    assert outcome.html.startswith(
        f'<p><a href="{TARGET}" title="Implementing modern SEO strategies">'
        "Implementing modern SEO strategies</a> requires careful"
    )
    assert engine.session.is_anchor_used("implementing modern seo strategies")
    assert engine.session.is_target_used(TARGET)


def test_used_anchor_is_not_returned_again(engine, seo_page):
    first = engine.find_best_anchor(SEO_PARAGRAPH, seo_page)
    engine.inject_link(f"<p>{SEO_PARAGRAPH}</p>", first, TARGET)

    second = engine.find_best_anchor(SEO_PARAGRAPH, seo_page)

    assert second is not None
    assert second.normalized_text != first.normalized_text


def test_default_floor_rejects_moderate_anchors(seo_page):
    # best anchor here scores about 65, below the default floor of 75
    engine = AnchorEngine()
    assert engine.find_best_anchor(SEO_PARAGRAPH, seo_page) is None


def test_short_paragraph_returns_none(engine, seo_page):
    assert engine.find_best_anchor("Too short.", seo_page) is None


def test_default_link_title_is_the_anchor_text():
    config = AnchorConfig()
    title = config.link_title_template.format(anchor="Implementing modern SEO strategies")

    assert title == "Implementing modern SEO strategies"
    assert not any(toxic in title.lower() for toxic in config.toxic_patterns)


def test_heading_overlap_prefers_distinct_anchor(engine, seo_page):
    heading = "Modern SEO Strategies Explained"

    candidate = engine.find_best_anchor(SEO_PARAGRAPH, seo_page, nearby_heading=heading)

    assert candidate is not None
    assert candidate.text != "Implementing modern SEO strategies"
    assert heading_overlap(candidate.normalized_text, heading) <= 0.4


def test_heading_overlap_falls_back_to_top_candidate(engine, seo_page):
    candidate = engine.find_best_anchor(SEO_PARAGRAPH, seo_page, nearby_heading=SEO_PARAGRAPH)

    assert candidate is not None
    assert candidate.text == "Implementing modern SEO strategies"


def test_toxic_anchor_is_rejected_without_touching_html(engine):
    html = "<p>Please click here for more details on pricing.</p>"

    outcome = engine.inject_link(html, "click here for more", TARGET)

    assert outcome.html == html
    assert not outcome.result.success
    assert outcome.result.reasoning.startswith("Validation failed:")
    assert engine.session.used_anchors == set()
    assert len(engine.session.injection_history) == 1


def test_missing_phrase_reports_failure(engine):
    html = "<p>Nothing relevant lives in this paragraph at all.</p>"

    outcome = engine.inject_link(html, "Implementing modern SEO strategies", TARGET)

    assert outcome.html == html
    assert not outcome.result.success
    assert outcome.result.position == -1
    assert outcome.result.reasoning == 'Failed to find injection point for "Implementing modern SEO strategies"'
    assert engine.session.used_targets == set()


def test_only_first_occurrence_is_linked(engine):
    html = (
        "<p>Implementing modern SEO strategies today. "
        "Implementing modern SEO strategies tomorrow.</p>"
    )

    outcome = engine.inject_link(html, "implementing modern seo strategies", TARGET)

    assert outcome.html.count("<a ") == 1
    assert outcome.html.startswith("<p><a ")
    assert ">Implementing modern SEO strategies</a> today." in outcome.html


def test_existing_links_are_never_nested(engine):
    html = (
        '<p><a href="/x">Implementing modern SEO strategies</a> and later '
        "implementing modern SEO strategies again.</p>"
    )

    outcome = engine.inject_link(html, "Implementing modern SEO strategies", TARGET)

    assert outcome.result.success
    assert outcome.result.position == 45
    soup = BeautifulSoup(outcome.html, "html.parser")
    links = soup.find_all("a")
    assert [link["href"] for link in links] == ["/x", TARGET]
    assert all(link.find("a") is None for link in links)


def test_phrase_must_match_whole_words(engine):
    html = "<p>Our postmodern SEO strategies today are different.</p>"

    outcome = engine.inject_link(html, "modern SEO strategies today", TARGET)

    assert not outcome.result.success
    assert outcome.html == html


def test_string_anchor_reports_patterns_without_metrics(engine):
    outcome = engine.inject_link(f"<p>{SEO_PARAGRAPH}</p>", "Implementing modern SEO strategies", TARGET)

    assert outcome.result.success
    assert outcome.result.quality_metrics.overall == 0.0
    assert "ideal_length" in outcome.result.power_patterns
    assert outcome.result.reasoning == "Injected 4-word contextual anchor"


def test_stats_and_reset(engine):
    html = f"<p>{SEO_PARAGRAPH}</p>"
    html = engine.inject_link(html, "Implementing modern SEO strategies", TARGET).html
    html = engine.inject_link(
        html, "careful keyword research and consistent", "https://example.com/keyword-research/"
    ).html
    engine.inject_link(html, "click here for more", TARGET)

    stats = engine.get_stats()

    assert stats.total_injections == 2
    assert stats.unique_anchors == 2
    assert stats.unique_targets == 2
    assert stats.average_word_count == 4.5
    assert len(stats.history) == 3
    assert html.count("<a ") == 2

    engine.reset()
    stats = engine.get_stats()
    assert stats.total_injections == 0
    assert stats.average_word_count == 0.0
    assert stats.history == ()


def test_unique_targets_can_be_enforced():
    engine = AnchorEngine(AnchorConfig(enforce_unique_targets=True))
    html = (
        "<p>Implementing modern SEO strategies requires careful keyword research "
        "and consistent content optimization efforts.</p>"
    )

    first = engine.inject_link(html, "Implementing modern SEO strategies", TARGET)
    second = engine.inject_link(first.html, "careful keyword research and consistent", TARGET)

    assert first.result.success
    assert not second.result.success
    assert second.result.reasoning == f"Target already linked: {TARGET}"
    assert second.html == first.html


def test_candidate_cache_is_reused_and_cleared(seo_page):
    engine = AnchorEngine.with_cache(AnchorConfig(min_quality_score=60))

    first = engine.find_best_anchor(SEO_PARAGRAPH, seo_page)
    second = engine.find_best_anchor(SEO_PARAGRAPH, seo_page)

    assert first == second
    assert len(engine.cache) == 1

    engine.reset()
    assert len(engine.cache) == 0
