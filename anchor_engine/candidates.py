"""Anchor candidate generation and ranking."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .config import AnchorConfig
from .scoring import contextual_fit, naturalness_score, quality_score, semantic_score, seo_score
from .text import anchor_key, paragraph_theme, split_sentences, split_words, strip_edge_punctuation, strip_html
from .types import AnchorCandidate, ContextWindow, PageContext
from .validation import validate_anchor_text

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnchorConfig()
_CONTEXT_WORDS = 5


def extract_candidates(
    paragraph: str,
    page: PageContext,
    config: AnchorConfig | None = None,
) -> List[AnchorCandidate]:
    """Return ranked anchor candidates for ``page`` found in ``paragraph``."""

    config = config or _DEFAULT_CONFIG
    text = strip_html(paragraph)
    words = split_words(text)
    if len(words) < config.min_words:
        return []

    sentences = split_sentences(text)
    theme = paragraph_theme(text, config.boundary_stopwords)
    total = len(words)
    candidates: List[AnchorCandidate] = []

    for length in range(config.min_words, config.max_words + 1):
        for start in range(0, total - length + 1):
            phrase = strip_edge_punctuation(" ".join(words[start : start + length]))
            phrase_words = split_words(phrase)
            if len(phrase_words) < config.min_words:
                continue
            if not validate_anchor_text(phrase, config).valid:
                continue

            seo = seo_score(phrase, page, config)
            if seo.score == 0:
                continue

            lowered = phrase.lower()
            sentence = next((item for item in sentences if lowered in item.lower()), text)
            semantic = semantic_score(phrase, page, text, config)
            natural = naturalness_score(phrase, sentence)
            quality = quality_score(semantic, natural, seo.score, config)
            if quality < config.min_quality_score:
                continue

            candidates.append(
                AnchorCandidate(
                    text=phrase,
                    normalized_text=lowered,
                    word_count=len(phrase_words),
                    quality_score=quality,
                    semantic_score=semantic,
                    naturalness=natural,
                    seo_value=seo.score,
                    contextual_fit=contextual_fit(semantic, natural),
                    position=_position(start, total),
                    context_window=ContextWindow(
                        before=" ".join(words[max(0, start - _CONTEXT_WORDS) : start]),
                        target=phrase,
                        after=" ".join(words[start + length : start + length + _CONTEXT_WORDS]),
                        sentence=sentence.strip(),
                        paragraph_theme=theme,
                        document_topics=tuple(page.topics),
                    ),
                    power_pattern_matches=seo.matched_patterns,
                )
            )

    ranked = rank_candidates(candidates, config.max_candidates)
    logger.debug(
        "Extracted %d candidates (%d after ranking) for %s", len(candidates), len(ranked), page.slug
    )
    return ranked


def rank_candidates(candidates: Sequence[AnchorCandidate], limit: int = 15) -> List[AnchorCandidate]:
    """Sort by quality, drop near-duplicates and keep the top ``limit``."""

    ordered = sorted(candidates, key=lambda candidate: candidate.quality_score, reverse=True)
    seen: set[str] = set()
    ranked: List[AnchorCandidate] = []
    for candidate in ordered:
        key = anchor_key(candidate.normalized_text)
        if key in seen:
            continue
        seen.add(key)
        ranked.append(candidate)
        if len(ranked) >= limit:
            break
    return ranked


def _position(start: int, total: int) -> str:
    ratio = start / total
    if ratio < 0.3:
        return "early"
    if ratio > 0.7:
        return "late"
    return "middle"
