"""Word lists and pattern tables shared by the validator and the scorers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Tuple

# Stored letters-only because boundary checks strip everything but a-z.
BOUNDARY_STOPWORDS: FrozenSet[str] = frozenset(
    {
        # articles
        "the", "a", "an",
        # conjunctions
        "and", "or", "but", "nor", "so", "yet", "for",
        # prepositions
        "in", "on", "at", "to", "of", "with", "by", "from", "as", "into",
        "through", "during", "before", "after", "above", "below", "between",
        "under", "again", "further", "then", "once", "about", "over",
        # be
        "is", "was", "are", "were", "been", "be", "being", "am",
        "isnt", "arent", "wasnt", "werent",
        # have
        "have", "has", "had", "hasnt", "havent", "hadnt",
        # do
        "do", "does", "did", "dont", "doesnt", "didnt",
        # modals
        "will", "would", "could", "should", "may", "might", "must", "shall",
        "can", "wont", "wouldnt", "couldnt", "shouldnt", "cant", "cannot",
        # pronouns
        "this", "that", "these", "those", "it", "its", "they", "their", "them",
        "he", "she", "him", "her", "his", "hers", "we", "us", "our", "ours",
        "you", "your", "yours", "i", "me", "my", "mine", "who", "whom", "whose",
        # question words
        "what", "which", "when", "where", "why", "how",
        # quantifiers
        "all", "each", "every", "both", "few", "more", "most", "other", "some",
        "such", "no", "any", "many", "much", "several",
        # adverbs
        "not", "only", "very", "just", "also", "now", "here", "there", "too",
        "really", "quite", "extremely", "highly", "already", "still",
        # other
        "own", "same", "than", "if", "unless", "although", "because", "since",
        "while",
    }
)

# Multi-word phrases only: matching is by substring, so single words such as
# "here" or "site" would reject "where" and "website".
TOXIC_PATTERNS: Tuple[str, ...] = (
    "click here",
    "click this",
    "read more",
    "learn more",
    "find out more",
    "check out",
    "check it out",
    "this article",
    "this guide",
    "this post",
    "this page",
    "this link",
    "this resource",
    "more info",
    "more information",
    "tap here",
    "go here",
    "see more",
    "view more",
    "continue reading",
    "read this",
    "see this",
    "visit here",
)

DESCRIPTIVE_ACTION_VERBS: FrozenSet[str] = frozenset(
    {
        "implementing", "optimizing", "building", "creating", "developing",
        "mastering", "understanding", "leveraging", "scaling", "automating",
        "streamlining", "maximizing", "improving", "enhancing", "accelerating",
        "transforming", "discovering", "unlocking", "deploying", "executing",
        "launching", "crafting", "designing", "establishing", "generating",
        "measuring",
    }
)

OUTCOME_WORDS: FrozenSet[str] = frozenset(
    {
        "results", "roi", "conversion", "revenue", "profit", "growth",
        "success", "performance", "efficiency", "productivity", "impact",
        "outcome", "returns", "gains", "improvement", "optimization",
    }
)


@dataclass(frozen=True)
class PowerPattern:
    """Named SEO pattern and the score boost it grants when matched."""

    name: str
    pattern: re.Pattern[str]
    boost: float


def _pattern(name: str, regex: str, boost: float) -> PowerPattern:
    return PowerPattern(name=name, pattern=re.compile(regex, re.IGNORECASE), boost=boost)


SEO_POWER_PATTERNS: Tuple[PowerPattern, ...] = (
    _pattern("comprehensive_guide", r"\b(complete|comprehensive|ultimate|definitive)\s+\w+\s+guide\b", 25),
    _pattern("step_by_step", r"\b(step[- ]by[- ]step|how[- ]to)\s+\w+", 20),
    _pattern("best_practices", r"\b(best|top|proven|effective)\s+(practices|strategies|techniques|methods|tips)\b", 22),
    _pattern("skill_level_guide", r"\b(beginner|advanced|expert|professional)\s+\w+\s+(guide|tips|tutorial)\b", 18),
    _pattern("essential_tips", r"\b(essential|critical|important)\s+\w+\s+(tips|strategies|guide)\b", 15),
    _pattern("audience_qualifier", r"\bfor\s+(beginners|professionals|experts|small business(es)?|startups)\b", 12),
    _pattern(
        "outcome_focus",
        r"\b(increase|increasing|boost|boosting|improve|improving|maximi[sz]e|maximi[sz]ing)\s+(\w+\s+)?"
        r"(roi|revenue|conversions?|traffic|sales|growth)\b",
        14,
    ),
)
