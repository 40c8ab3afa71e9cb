"""Per-run state for the anchor selection engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

from .text import anchor_key
from .types import InjectionResult


@dataclass
class AnchorSession:
    """Anchors, targets and injection attempts for one generation run.

    A session belongs to exactly one article. It has no locking, so
    concurrent articles each need their own session.
    """

    used_anchors: Set[str] = field(default_factory=set)
    used_targets: Set[str] = field(default_factory=set)
    injection_history: List[InjectionResult] = field(default_factory=list)

    def is_anchor_used(self, anchor: str) -> bool:
        return anchor_key(anchor) in self.used_anchors

    def is_target_used(self, target_url: str) -> bool:
        return target_url in self.used_targets

    def record(self, result: InjectionResult) -> None:
        """Append ``result`` to the history; successes also claim anchor and target."""

        self.injection_history.append(result)
        if result.success:
            self.used_anchors.add(anchor_key(result.anchor))
            self.used_targets.add(result.target_url)

    def reset(self) -> None:
        self.used_anchors.clear()
        self.used_targets.clear()
        self.injection_history.clear()
