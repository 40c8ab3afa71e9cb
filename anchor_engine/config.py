"""Configuration helpers for the anchor engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Tuple

import yaml

from .lexicon import BOUNDARY_STOPWORDS, TOXIC_PATTERNS


class ConfigurationError(ValueError):
    """Raised when the engine configuration is internally inconsistent."""


DEFAULTS: Dict[str, Any] = {
    "min_words": 4,
    "max_words": 7,
    "ideal_word_range": [4, 6],
    "min_quality_score": 75.0,
    "max_candidates": 15,
    "max_overlap_with_heading": 0.4,
    "enforce_unique_targets": False,
    "max_links_per_document": 12,
    "link_title_template": "{anchor}",
    "candidate_cache_ttl": 300.0,
    "weights": {
        "semantic": 0.30,
        "naturalness": 0.25,
        "seo": 0.20,
    },
}


@dataclass(frozen=True)
class AnchorConfig:
    """Typed, validated engine configuration.

    Quality scores are a weighted mean on the same 0-100 scale as the three
    sub-scores, so ``min_quality_score`` is a real filter: at the default 75 a
    short anchor with modest title overlap (around 65) is dropped. Lower it
    when moderate anchors should still be linked.
    """

    min_words: int = 4
    max_words: int = 7
    ideal_word_range: Tuple[int, int] = (4, 6)
    min_quality_score: float = 75.0
    max_candidates: int = 15
    max_overlap_with_heading: float = 0.4
    enforce_unique_targets: bool = False
    max_links_per_document: int = 12
    link_title_template: str = "{anchor}"
    candidate_cache_ttl: float = 300.0
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULTS["weights"]))
    toxic_patterns: Tuple[str, ...] = TOXIC_PATTERNS
    boundary_stopwords: FrozenSet[str] = BOUNDARY_STOPWORDS

    def __post_init__(self) -> None:
        if self.min_words < 1:
            raise ConfigurationError(f"min_words must be at least 1, got {self.min_words}")
        if self.min_words > self.max_words:
            raise ConfigurationError(
                f"min_words ({self.min_words}) cannot exceed max_words ({self.max_words})"
            )
        low, high = self.ideal_word_range
        if not self.min_words <= low <= high <= self.max_words:
            raise ConfigurationError(
                f"ideal_word_range {self.ideal_word_range} must lie within "
                f"[{self.min_words}, {self.max_words}]"
            )
        if not 0.0 <= self.max_overlap_with_heading <= 1.0:
            raise ConfigurationError("max_overlap_with_heading must be between 0 and 1")
        if self.max_candidates < 1:
            raise ConfigurationError("max_candidates must be positive")
        if self.max_links_per_document < 0:
            raise ConfigurationError("max_links_per_document cannot be negative")
        for name in ("semantic", "naturalness", "seo"):
            if self.weights.get(name, 0.0) < 0:
                raise ConfigurationError(f"weight {name!r} cannot be negative")
        if self.weight_total <= 0:
            raise ConfigurationError("scoring weights must sum to a positive value")

    @property
    def weight_total(self) -> float:
        return sum(self.weights.get(name, 0.0) for name in ("semantic", "naturalness", "seo"))

    def weight(self, name: str) -> float:
        return self.weights.get(name, 0.0)

    def with_overrides(self, **changes: Any) -> "AnchorConfig":
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "AnchorConfig":
        """Build a config from a plain mapping, ignoring unknown keys."""

        known = {item.name for item in fields(cls)}
        kwargs: Dict[str, Any] = {key: value for key, value in data.items() if key in known}
        if "ideal_word_range" in kwargs:
            kwargs["ideal_word_range"] = tuple(kwargs["ideal_word_range"])
        if "toxic_patterns" in kwargs:
            kwargs["toxic_patterns"] = tuple(str(item).lower() for item in kwargs["toxic_patterns"])
        if "boundary_stopwords" in kwargs:
            kwargs["boundary_stopwords"] = frozenset(str(item).lower() for item in kwargs["boundary_stopwords"])
        if "weights" in kwargs:
            kwargs["weights"] = {key: float(value) for key, value in kwargs["weights"].items()}
        return cls(**kwargs)


def load_config(path: str | Path | None = None) -> AnchorConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        if not isinstance(user, dict):
            raise ConfigurationError(f"{path}: expected a mapping at the top level")
        merge_into(data, user)

    return AnchorConfig.from_mapping(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
