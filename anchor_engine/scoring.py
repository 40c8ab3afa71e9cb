"""Multi-factor anchor scoring.

Three independent scorers, each returning a value in ``[0, 100]``:

* ``semantic_score`` - lexical overlap between the anchor and the target
  page (title, description, surrounding paragraph) plus keyword bonuses.
* ``naturalness_score`` - how well the phrase reads as link text inside its
  sentence (length, position, leading verb, outcome vocabulary).
* ``seo_score`` - base value plus boosts for SEO power patterns, keyword
  presence, descriptiveness and ideal length. Toxic anchors score zero.

``quality_score`` folds them into one weighted average.
"""

from __future__ import annotations

from typing import List, Tuple

from .config import AnchorConfig
from .lexicon import DESCRIPTIVE_ACTION_VERBS, OUTCOME_WORDS, SEO_POWER_PATTERNS
from .text import content_words, split_words
from .types import AnchorCandidate, PageContext, SeoScore

_DEFAULT_CONFIG = AnchorConfig()


def _clamp(value: float, minimum: float = 0.0, maximum: float = 100.0) -> float:
    return max(min(value, maximum), minimum)


def semantic_score(
    anchor: str,
    page: PageContext,
    paragraph: str,
    config: AnchorConfig | None = None,
) -> float:
    """Score topical overlap of ``anchor`` with the target page."""

    config = config or _DEFAULT_CONFIG
    stopwords = config.boundary_stopwords
    anchor_words = content_words(anchor, stopwords)
    title_words = content_words(page.title, stopwords)
    description_words = content_words(page.description or "", stopwords)
    context_words = content_words(paragraph, stopwords)

    score = 0.0
    if anchor_words:
        size = len(anchor_words)
        score += 40 * len(anchor_words & title_words) / size
        score += 25 * len(anchor_words & description_words) / size
        score += 20 * len(anchor_words & context_words) / size

    lowered = anchor.lower()
    if page.primary_keyword and page.primary_keyword.lower() in lowered:
        score += 15
    for keyword in page.secondary_keywords:
        if keyword and keyword.lower() in lowered:
            score += 5

    return min(100.0, score)


def naturalness_score(anchor: str, sentence: str) -> float:
    """Score how naturally ``anchor`` sits inside ``sentence``."""

    score = 50.0
    words = split_words(anchor)
    count = len(words)

    if 4 <= count <= 6:
        score += 20
    elif count == 7:
        score += 12
    elif count < 4:
        score -= 30

    sentence_lower = sentence.lower()
    offset = sentence_lower.find(anchor.lower())
    if offset > -1 and sentence_lower:
        ratio = offset / len(sentence_lower)
        if 0.2 <= ratio <= 0.8:
            score += 10
        if ratio < 0.1:
            score -= 8

    if words and words[0].lower() in DESCRIPTIVE_ACTION_VERBS:
        score += 15
    if any(word.lower() in OUTCOME_WORDS for word in words):
        score += 10

    return _clamp(score)


def seo_score(anchor: str, page: PageContext, config: AnchorConfig | None = None) -> SeoScore:
    """Score SEO value of ``anchor`` and list the patterns that matched."""

    config = config or _DEFAULT_CONFIG
    lowered = anchor.lower()
    for toxic in config.toxic_patterns:
        if toxic in lowered:
            return SeoScore(0.0, ())

    score = 40.0
    matched: List[str] = []

    for power in SEO_POWER_PATTERNS:
        if power.pattern.search(anchor):
            score += power.boost
            matched.append(power.name)

    if page.primary_keyword:
        keyword = page.primary_keyword.lower()
        if keyword in lowered:
            score += 20
            matched.append(f"keyword:{keyword}")
        else:
            keyword_words = keyword.split()
            if keyword_words:
                hits = sum(1 for word in keyword_words if word in lowered)
                score += hits / len(keyword_words) * 10

    words = split_words(anchor)
    meaningful = [
        word for word in words if word.lower() not in config.boundary_stopwords and len(word) > 3
    ]
    if len(meaningful) >= 3:
        score += 10
        matched.append("highly_descriptive")

    if 4 <= len(words) <= 6:
        score += 10
        matched.append("ideal_length")

    return SeoScore(min(100.0, score), tuple(matched))


def contextual_fit(semantic: float, naturalness: float) -> float:
    return semantic * 0.7 + naturalness * 0.3


def quality_score(
    semantic: float,
    naturalness: float,
    seo: float,
    config: AnchorConfig | None = None,
) -> float:
    """Weighted average of the three sub-scores, still in ``[0, 100]``."""

    config = config or _DEFAULT_CONFIG
    weighted = (
        semantic * config.weight("semantic")
        + naturalness * config.weight("naturalness")
        + seo * config.weight("seo")
    )
    return weighted / config.weight_total


def score_reason(candidate: AnchorCandidate, top_k: int = 2) -> str:
    """Return a human-friendly reason summary based on the strongest scores."""

    scored: List[Tuple[float, str]] = [
        (candidate.semantic_score, "semantic match"),
        (candidate.naturalness, "naturalness"),
        (candidate.seo_value, "SEO value"),
    ]
    scored.sort(key=lambda item: item[0], reverse=True)
    return "; ".join(_reason_fragment(descriptor, value) for value, descriptor in scored[:top_k])


def _reason_fragment(descriptor: str, value: float) -> str:
    if value >= 85:
        qualifier = "excellent"
    elif value >= 60:
        qualifier = "strong"
    else:
        qualifier = "modest"
    return f"{qualifier} {descriptor}"
