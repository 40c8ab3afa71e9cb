"""Shared text utilities for anchor extraction and matching."""

from __future__ import annotations

import html
import re
from collections import Counter
from typing import Iterable, List, Set

_TOKEN_RE = re.compile(r"[\w']+")
_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_EDGE_RE = re.compile(r"^[^A-Za-z0-9]+|[^A-Za-z0-9]+$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_NON_ALPHA_RE = re.compile(r"[^a-z]")

# Word boundary regex template used when compiling matchers for phrases
WORD_BOUNDARY = r"(?<![A-Za-z0-9_]){term}(?![A-Za-z0-9_])"


def strip_html(text: str) -> str:
    """Replace tags with spaces and decode entities."""

    return html.unescape(_TAG_RE.sub(" ", text or "")).strip()


def split_words(text: str) -> List[str]:
    return [word for word in _SPACE_RE.split(text.strip()) if word]


def split_sentences(text: str, min_length: int = 20) -> List[str]:
    """Split on sentence punctuation, keeping only substantial sentences."""

    return [part for part in _SENTENCE_SPLIT_RE.split(text) if len(part.strip()) > min_length]


def tokenize(text: str) -> List[str]:
    """Return lower-cased word tokens from the provided text."""

    return [token.lower() for token in _TOKEN_RE.findall(text)]


def content_words(text: str, stopwords: Iterable[str]) -> Set[str]:
    """Tokens longer than two characters that are not stopwords."""

    stops = set(stopwords)
    return {token for token in tokenize(text) if len(token) > 2 and token not in stops}


def letters_only(word: str) -> str:
    return _NON_ALPHA_RE.sub("", word.lower())


def anchor_key(text: str) -> str:
    """Uniqueness key for an anchor: lower-case alphanumerics only."""

    return _NON_ALNUM_RE.sub("", text.lower())


def collapse_whitespace(text: str) -> str:
    return _SPACE_RE.sub(" ", text).strip()


def strip_edge_punctuation(text: str) -> str:
    """Drop leading/trailing non-alphanumerics and collapse whitespace."""

    return collapse_whitespace(_EDGE_RE.sub("", text.strip()))


def paragraph_theme(text: str, stopwords: Iterable[str], size: int = 3) -> str:
    """Return the most frequent longer words of the paragraph."""

    stops = set(stopwords)
    counts = Counter(
        word for word in text.lower().split() if len(word) > 4 and word not in stops
    )
    return " ".join(word for word, _ in counts.most_common(size))


def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Case-insensitive, word-bounded matcher tolerant of line breaks."""

    term = r"\s+".join(re.escape(word) for word in split_words(phrase))
    return re.compile(WORD_BOUNDARY.format(term=term), flags=re.IGNORECASE)
