"""Anchor selection and link injection over an explicit session."""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from .cache import TTLCache
from .candidates import extract_candidates
from .config import AnchorConfig
from .injection import insert_link
from .scoring import score_reason, seo_score
from .session import AnchorSession
from .text import anchor_key, split_words
from .types import (
    AnchorCandidate,
    EngineStats,
    InjectionOutcome,
    InjectionResult,
    PageContext,
    QualityMetrics,
)
from .validation import validate_anchor_text

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnchorConfig()
_EMPTY_PAGE = PageContext(title="", slug="")

AnchorLike = Union[str, AnchorCandidate]


def find_best_anchor(
    session: AnchorSession,
    paragraph: str,
    page: PageContext,
    config: AnchorConfig | None = None,
    nearby_heading: str | None = None,
    cache: TTLCache | None = None,
) -> Optional[AnchorCandidate]:
    """Pick the best unused anchor for ``page`` inside ``paragraph``.

    Returns ``None`` when no candidate survives. A nearby heading only
    reorders the choice: the first candidate with low heading overlap wins,
    otherwise the top candidate is returned regardless.
    """

    config = config or _DEFAULT_CONFIG
    if cache is not None:
        candidates = cache.get_or_set(
            (paragraph, page), lambda: extract_candidates(paragraph, page, config)
        )
    else:
        candidates = extract_candidates(paragraph, page, config)

    available = [
        candidate
        for candidate in candidates
        if anchor_key(candidate.normalized_text) not in session.used_anchors
    ]
    if not available:
        logger.debug("No valid %d-%d word anchors found for %s", config.min_words, config.max_words, page.slug)
        return None

    selected = available[0]
    if nearby_heading and config.max_overlap_with_heading < 1:
        preferred = _first_low_overlap(available, nearby_heading, config.max_overlap_with_heading)
        if preferred is not None:
            selected = preferred

    logger.debug(
        'Selected "%s" (%d words, score %.1f) for %s',
        selected.text,
        selected.word_count,
        selected.quality_score,
        page.slug,
    )
    return selected


def heading_overlap(anchor: str, heading: str) -> float:
    """Share of the anchor's longer words that also appear in ``heading``."""

    heading_words = {word for word in heading.lower().split() if len(word) > 3}
    anchor_words = [word for word in anchor.lower().split() if len(word) > 3]
    overlap = sum(1 for word in anchor_words if word in heading_words)
    return overlap / max(len(anchor_words), 1)


def _first_low_overlap(
    candidates: List[AnchorCandidate], heading: str, limit: float
) -> Optional[AnchorCandidate]:
    for candidate in candidates:
        if heading_overlap(candidate.normalized_text, heading) <= limit:
            return candidate
    return None


def inject_link(
    session: AnchorSession,
    html: str,
    anchor: AnchorLike,
    target_url: str,
    config: AnchorConfig | None = None,
) -> InjectionOutcome:
    """Link the first occurrence of ``anchor`` in ``html`` to ``target_url``.

    Never raises for a bad anchor or a missing phrase; both come back as an
    unsuccessful result with the original HTML.
    """

    config = config or _DEFAULT_CONFIG
    candidate = anchor if isinstance(anchor, AnchorCandidate) else None
    text = candidate.text if candidate else str(anchor)
    word_count = len(split_words(text))

    validation = validate_anchor_text(text, config)
    if not validation.valid:
        logger.warning('Rejected anchor "%s": %s', text, validation.reason)
        result = InjectionResult(
            success=False,
            anchor=text,
            target_url=target_url,
            quality_metrics=QualityMetrics(),
            position=-1,
            reasoning=f"Validation failed: {validation.reason}",
            word_count=word_count,
        )
        session.record(result)
        return InjectionOutcome(html=html, result=result)

    if config.enforce_unique_targets and session.is_target_used(target_url):
        logger.info("Skipping %s: target already linked in this session", target_url)
        result = InjectionResult(
            success=False,
            anchor=text,
            target_url=target_url,
            quality_metrics=QualityMetrics(),
            position=-1,
            reasoning=f"Target already linked: {target_url}",
            word_count=word_count,
        )
        session.record(result)
        return InjectionOutcome(html=html, result=result)

    title = config.link_title_template.format(anchor=text)
    new_html, position = insert_link(html, text, target_url, title)
    injected = position >= 0

    if candidate is not None:
        metrics = candidate.metrics
        patterns = candidate.power_pattern_matches
    else:
        metrics = QualityMetrics()
        patterns = seo_score(text, _EMPTY_PAGE, config).matched_patterns

    if injected:
        reasoning = f"Injected {word_count}-word contextual anchor"
        if candidate is not None:
            reasoning = f"{reasoning} ({score_reason(candidate)})"
    else:
        reasoning = f'Failed to find injection point for "{text}"'

    result = InjectionResult(
        success=injected,
        anchor=text,
        target_url=target_url,
        quality_metrics=metrics,
        position=position,
        reasoning=reasoning,
        word_count=word_count,
        power_patterns=tuple(patterns),
    )
    session.record(result)

    if injected:
        logger.info('Linked "%s" (%d words) -> %s', text, word_count, target_url)
    else:
        logger.warning('No injection point for "%s" -> %s', text, target_url)
    return InjectionOutcome(html=new_html, result=result)


def get_stats(session: AnchorSession) -> EngineStats:
    """Aggregate counts over the session; purely informational."""

    successes = [result for result in session.injection_history if result.success]
    average = sum(result.word_count for result in successes) / len(successes) if successes else 0.0
    return EngineStats(
        total_injections=len(successes),
        unique_anchors=len(session.used_anchors),
        unique_targets=len(session.used_targets),
        average_word_count=round(average, 1),
        history=tuple(session.injection_history),
    )


class AnchorEngine:
    """Holds one config, one session and an optional candidate cache."""

    def __init__(
        self,
        config: AnchorConfig | None = None,
        session: AnchorSession | None = None,
        cache: TTLCache | None = None,
    ) -> None:
        self.config = config or AnchorConfig()
        self.session = session if session is not None else AnchorSession()
        self.cache = cache
        logger.debug(
            "Anchor engine initialised with %d-%d word enforcement",
            self.config.min_words,
            self.config.max_words,
        )

    @classmethod
    def with_cache(cls, config: AnchorConfig | None = None) -> "AnchorEngine":
        config = config or AnchorConfig()
        return cls(config=config, cache=TTLCache(config.candidate_cache_ttl))

    def find_best_anchor(
        self,
        paragraph: str,
        page: PageContext,
        nearby_heading: str | None = None,
    ) -> Optional[AnchorCandidate]:
        return find_best_anchor(self.session, paragraph, page, self.config, nearby_heading, self.cache)

    def inject_link(self, html: str, anchor: AnchorLike, target_url: str) -> InjectionOutcome:
        return inject_link(self.session, html, anchor, target_url, self.config)

    def get_stats(self) -> EngineStats:
        return get_stats(self.session)

    def reset(self) -> None:
        self.session.reset()
        if self.cache is not None:
            self.cache.clear()
