"""Typed data structures used by the anchor engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

VALID = "valid"
TOO_SHORT = "too_short"
TOO_LONG = "too_long"
TOXIC = "toxic"
STOPWORD_BOUNDARY = "stopword_boundary"


@dataclass(frozen=True)
class PageContext:
    """Target page an anchor may link to."""

    title: str
    slug: str
    description: Optional[str] = None
    primary_keyword: Optional[str] = None
    secondary_keywords: Tuple[str, ...] = ()
    category: Optional[str] = None
    topics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    status: str
    reason: str


@dataclass(frozen=True)
class SeoScore:
    score: float
    matched_patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ContextWindow:
    """Text surrounding a candidate inside its paragraph."""

    before: str
    target: str
    after: str
    sentence: str
    paragraph_theme: str
    document_topics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class QualityMetrics:
    overall: float = 0.0
    semantic: float = 0.0
    contextual: float = 0.0
    natural: float = 0.0
    seo: float = 0.0


@dataclass(frozen=True)
class AnchorCandidate:
    """A contiguous, validated word span extracted from a paragraph."""

    text: str
    normalized_text: str
    word_count: int
    quality_score: float
    semantic_score: float
    naturalness: float
    seo_value: float
    contextual_fit: float
    position: str
    context_window: ContextWindow
    power_pattern_matches: Tuple[str, ...] = ()
    validation_status: str = VALID

    @property
    def metrics(self) -> QualityMetrics:
        return QualityMetrics(
            overall=self.quality_score,
            semantic=self.semantic_score,
            contextual=self.contextual_fit,
            natural=self.naturalness,
            seo=self.seo_value,
        )


@dataclass(frozen=True)
class InjectionResult:
    """Outcome of a single link injection attempt."""

    success: bool
    anchor: str
    target_url: str
    quality_metrics: QualityMetrics
    position: int
    reasoning: str
    word_count: int
    power_patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class InjectionOutcome:
    html: str
    result: InjectionResult


@dataclass(frozen=True)
class EngineStats:
    total_injections: int
    unique_anchors: int
    unique_targets: int
    average_word_count: float
    history: Tuple[InjectionResult, ...] = ()


@dataclass
class LinkingReport:
    """Summary of a document-level linking pass."""

    html: str
    injected_count: int = 0
    rejected_count: int = 0
    accepted_anchors: List[str] = field(default_factory=list)
    rejected_anchors: List[str] = field(default_factory=list)
    results: List[InjectionResult] = field(default_factory=list)
