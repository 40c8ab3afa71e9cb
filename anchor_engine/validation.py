"""Anchor text validation and normalisation."""

from __future__ import annotations

from typing import List, Optional

from .config import AnchorConfig
from .text import letters_only, split_words, strip_edge_punctuation
from .types import STOPWORD_BOUNDARY, TOO_LONG, TOO_SHORT, TOXIC, VALID, ValidationResult

_DEFAULT_CONFIG = AnchorConfig()


def validate_anchor_text(anchor: str, config: AnchorConfig | None = None) -> ValidationResult:
    """Classify ``anchor`` against the word-count, toxic and boundary rules.

    Rules are checked in order and the first failure wins, so an anchor that
    is both too short and toxic reports ``too_short``.
    """

    config = config or _DEFAULT_CONFIG
    words = split_words(anchor or "")

    if len(words) < config.min_words:
        return ValidationResult(
            False, TOO_SHORT, f"Anchor has {len(words)} words, minimum is {config.min_words}"
        )
    if len(words) > config.max_words:
        return ValidationResult(
            False, TOO_LONG, f"Anchor has {len(words)} words, maximum is {config.max_words}"
        )

    lowered = anchor.lower()
    for toxic in config.toxic_patterns:
        if toxic in lowered:
            return ValidationResult(False, TOXIC, f'Contains toxic anchor pattern: "{toxic}"')

    first = letters_only(words[0])
    if first in config.boundary_stopwords:
        return ValidationResult(False, STOPWORD_BOUNDARY, f'Cannot start with stopword: "{first}"')
    last = letters_only(words[-1])
    if last in config.boundary_stopwords:
        return ValidationResult(False, STOPWORD_BOUNDARY, f'Cannot end with stopword: "{last}"')

    return ValidationResult(True, VALID, "Passes all validation checks")


def normalize_anchor_text(phrase: str, config: AnchorConfig | None = None) -> Optional[str]:
    """Trim ``phrase`` into an anchor-shaped string, or ``None`` if impossible.

    The single pass can expose new edge punctuation (dropping a leading
    stopword may leave a quote at the front), so passes repeat until the text
    stops changing. The result is therefore a fixed point.
    """

    config = config or _DEFAULT_CONFIG
    current = phrase or ""
    while True:
        trimmed = _normalize_once(current, config)
        if trimmed is None or trimmed == current:
            return trimmed
        current = trimmed


def _normalize_once(phrase: str, config: AnchorConfig) -> Optional[str]:
    words = split_words(strip_edge_punctuation(phrase))

    _trim_leading(words, config)
    _trim_trailing(words, config)

    if len(words) > config.max_words:
        words = words[: config.ideal_word_range[1]]
        _trim_trailing(words, config)

    if len(words) < config.min_words:
        return None
    return " ".join(words)


def _is_stopword(word: str, config: AnchorConfig) -> bool:
    return letters_only(word) in config.boundary_stopwords


def _trim_leading(words: List[str], config: AnchorConfig) -> None:
    while len(words) > config.min_words and _is_stopword(words[0], config):
        words.pop(0)


def _trim_trailing(words: List[str], config: AnchorConfig) -> None:
    while len(words) > config.min_words and _is_stopword(words[-1], config):
        words.pop()
