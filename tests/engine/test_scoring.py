"""Scoring tests."""

from __future__ import annotations

import pytest

from anchor_engine.config import AnchorConfig
from anchor_engine.scoring import naturalness_score, quality_score, semantic_score, seo_score

from .conftest import make_page


def test_semantic_score_combines_overlap_and_keywords():
    page = make_page(
        "SEO Strategy Guide",
        description="Keyword research and planning",
        primary_keyword="SEO strategies",
        secondary_keywords=["keyword research"],
    )
    # title 40 * 1/4, description 25 * 2/4, primary 15, secondary 5
    assert semantic_score("keyword research for SEO strategies", page, "") == pytest.approx(42.5)


def test_semantic_score_is_capped():
    page = make_page(
        "SEO Strategy Guide Basics",
        description="SEO strategy guide basics",
        primary_keyword="seo strategy",
        secondary_keywords=["guide", "basics"],
    )
    paragraph = "SEO strategy guide basics"
    assert semantic_score("SEO strategy guide basics", page, paragraph) == 100.0


def test_naturalness_rewards_verbs_and_outcomes():
    sentence = "We started implementing content optimization results last quarter for clients"
    assert naturalness_score("implementing content optimization results", sentence) == 95.0


def test_naturalness_penalises_sentence_start():
    sentence = "Modern keyword research workflows help every editorial team"
    assert naturalness_score("Modern keyword research workflows", sentence) == 62.0


def test_naturalness_length_bands():
    assert naturalness_score("alpha beta gamma delta epsilon zeta eta", "unrelated") == 62.0
    assert naturalness_score("SEO tips", "") == 20.0


def test_seo_score_zero_for_toxic_anchor():
    result = seo_score("read more about SEO tools", make_page("SEO Tools"))
    assert result.score == 0.0
    assert result.matched_patterns == ()


def test_seo_score_reports_matched_patterns():
    page = make_page("Content Team Handbook", primary_keyword="content teams")
    result = seo_score("best practices for content teams", page)

    assert result.score == 100.0
    assert result.matched_patterns == (
        "best_practices",
        "keyword:content teams",
        "highly_descriptive",
        "ideal_length",
    )


def test_seo_score_partial_keyword_bonus():
    page = make_page("Keyword Planning", primary_keyword="keyword planning")
    result = seo_score("modern keyword research workflows", page)

    assert result.score == pytest.approx(65.0)
    assert result.matched_patterns == ("highly_descriptive", "ideal_length")


def test_quality_score_is_weighted_average():
    assert quality_score(80, 60, 40) == pytest.approx(47 / 0.75)


def test_quality_score_respects_custom_weights():
    config = AnchorConfig(weights={"semantic": 1.0, "naturalness": 0.0, "seo": 0.0})
    assert quality_score(80, 60, 40, config) == pytest.approx(80.0)
