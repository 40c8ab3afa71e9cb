"""Anchor validation and normalisation tests."""

from __future__ import annotations

import pytest

from anchor_engine.config import AnchorConfig
from anchor_engine.validation import normalize_anchor_text, validate_anchor_text


@pytest.mark.parametrize(
    "anchor, status",
    [
        ("SEO tips", "too_short"),
        ("click here now", "too_short"),
        ("one two three four five six seven eight", "too_long"),
        ("click here for more", "toxic"),
        ("Read More About Keyword Research", "toxic"),
        ("the best SEO strategies guide", "stopword_boundary"),
        ("best SEO strategies for", "stopword_boundary"),
        ("proven content marketing strategies", "valid"),
    ],
)
def test_validation_statuses(anchor, status):
    result = validate_anchor_text(anchor)
    assert result.status == status
    assert result.valid is (status == "valid")
    assert result.reason


def test_boundary_check_ignores_punctuation():
    result = validate_anchor_text('"The" keyword research workflow guide')
    assert result.status == "stopword_boundary"
    assert '"the"' in result.reason


def test_custom_word_bounds():
    config = AnchorConfig(min_words=2, max_words=3, ideal_word_range=(2, 3))
    assert validate_anchor_text("keyword research", config).valid
    assert validate_anchor_text("keyword research workflow guide", config).status == "too_long"


def test_normalize_strips_edges_and_stopwords():
    assert normalize_anchor_text("  ...the complete guide to modern SEO!!  ") == "complete guide to modern SEO"


def test_normalize_truncates_long_phrases():
    phrase = "complete guide to modern SEO content marketing strategies for small teams"
    assert normalize_anchor_text(phrase) == "complete guide to modern SEO content"


def test_normalize_retrims_after_truncation():
    phrase = "simple habits that help with the daily writing routine"
    assert normalize_anchor_text(phrase) == "simple habits that help"


def test_normalize_returns_none_when_too_short():
    assert normalize_anchor_text("of the best") is None
    assert normalize_anchor_text("") is None


@pytest.mark.parametrize(
    "phrase",
    [
        "  ...the complete guide to modern SEO!!  ",
        '"the" quick reliable keyword research tools',
        "simple habits that help with the daily writing routine",
        "and then the proven methods for scaling content teams quickly and",
        "Implementing modern SEO strategies",
    ],
)
def test_normalize_is_idempotent(phrase):
    once = normalize_anchor_text(phrase)
    assert once is not None
    assert normalize_anchor_text(once) == once
