"""Internal link placement with rich 4-7 word anchor text."""

from .cache import TTLCache
from .candidates import extract_candidates, rank_candidates
from .config import AnchorConfig, ConfigurationError, load_config
from .engine import AnchorEngine, find_best_anchor, get_stats, inject_link
from .log import configure_logging
from .pages import UnrecognizedSchemaError, parse_page_record, parse_page_records
from .pipeline import link_document, process_internal_links, process_link_candidates
from .session import AnchorSession
from .types import AnchorCandidate, EngineStats, InjectionResult, LinkingReport, PageContext
from .validation import normalize_anchor_text, validate_anchor_text

__all__ = [
    "AnchorCandidate",
    "AnchorConfig",
    "AnchorEngine",
    "AnchorSession",
    "ConfigurationError",
    "EngineStats",
    "InjectionResult",
    "LinkingReport",
    "PageContext",
    "TTLCache",
    "UnrecognizedSchemaError",
    "configure_logging",
    "extract_candidates",
    "find_best_anchor",
    "get_stats",
    "inject_link",
    "link_document",
    "load_config",
    "normalize_anchor_text",
    "parse_page_record",
    "parse_page_records",
    "process_internal_links",
    "process_link_candidates",
    "rank_candidates",
    "validate_anchor_text",
]
