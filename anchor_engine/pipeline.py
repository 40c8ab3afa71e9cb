"""Coordinator for document-level internal linking.

Two passes share one :class:`AnchorEngine` session:

1. ``process_link_candidates`` resolves ``[LINK_CANDIDATE: anchor]`` markers
   left in generated content, rejecting anchors that fail validation.
2. ``link_document`` scans paragraphs and list items for rich anchors and
   links each one to the best remaining target page.

``process_internal_links`` runs both with a shared link budget. Linking fewer
pages than requested is reported, never raised.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Set, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag  # type: ignore

from .engine import AnchorEngine
from .injection import existing_link_slugs, parse_fragment, should_skip, text_nodes
from .text import collapse_whitespace
from .types import AnchorCandidate, InjectionResult, LinkingReport, PageContext, QualityMetrics
from .validation import validate_anchor_text

logger = logging.getLogger(__name__)

LINK_CANDIDATE_RE = re.compile(r"\[LINK_CANDIDATE:\s*([^\]]+)\]", re.IGNORECASE)

BLOCK_TAGS = ["p", "li"]
HEADING_TAGS = ["h2", "h3", "h4"]
MIN_BLOCK_CHARS = 80
MAX_LINKS_PER_BLOCK = 2

# FAQ, reference and verification sections never receive contextual links
EXCLUDED_CONTAINER_CLASS_RE = re.compile(r"faq|reference|verification-footer-sota")


def build_target_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/{slug.strip('/')}/"


def process_link_candidates(
    content: str,
    pages: Sequence[PageContext],
    base_url: str,
    engine: AnchorEngine | None = None,
) -> LinkingReport:
    """Replace ``[LINK_CANDIDATE: ...]`` markers with validated links.

    Markers are resolved per text node. A marker under a link, heading or
    code block is unwrapped to its plain anchor text and reported as
    rejected, so no link is ever nested.
    """

    engine = engine or AnchorEngine()
    report = LinkingReport(html=content)
    if not content or not LINK_CANDIDATE_RE.search(content):
        return report

    used_slugs = existing_link_slugs(content)
    ordered = sorted(pages, key=lambda page: len(page.title), reverse=True)
    soup = parse_fragment(content)
    consumed = 0

    for node in text_nodes(soup):
        original = str(node)
        if not LINK_CANDIDATE_RE.search(original):
            consumed += len(original)
            continue

        skipped = should_skip(node)
        pieces: List[Union[str, Tag]] = []
        cursor = 0
        for match in LINK_CANDIDATE_RE.finditer(original):
            pieces.append(original[cursor : match.start()])
            cursor = match.end()
            anchor = collapse_whitespace(match.group(1))
            if skipped:
                _reject(report, anchor, "Marker sits inside a link, heading or code block")
                pieces.append(anchor)
                continue
            link = _resolve_marker(
                soup, anchor, consumed + match.start(), ordered, used_slugs, base_url, engine, report
            )
            pieces.append(link if link is not None else anchor)
        pieces.append(original[cursor:])
        consumed += len(original)
        _replace_node(node, pieces)

    report.html = str(soup)
    logger.info(
        "Link candidate markers: %d injected, %d rejected", report.injected_count, report.rejected_count
    )
    return report


def _resolve_marker(
    soup: BeautifulSoup,
    anchor: str,
    position: int,
    pages: Sequence[PageContext],
    used_slugs: Set[str],
    base_url: str,
    engine: AnchorEngine,
    report: LinkingReport,
) -> Optional[Tag]:
    validation = validate_anchor_text(anchor, engine.config)
    if not validation.valid:
        _reject(report, anchor, validation.reason)
        return None
    if engine.session.is_anchor_used(anchor):
        _reject(report, anchor, "Anchor already used in this article")
        return None

    page = _match_page(anchor, pages, used_slugs, base_url, engine)
    if page is None:
        _reject(report, anchor, "No available target page")
        return None

    url = build_target_url(base_url, page.slug)
    used_slugs.add(page.slug)
    result = InjectionResult(
        success=True,
        anchor=anchor,
        target_url=url,
        quality_metrics=QualityMetrics(),
        position=position,
        reasoning=f"Resolved link candidate marker to {page.slug}",
        word_count=len(anchor.split()),
    )
    engine.session.record(result)
    report.results.append(result)
    report.accepted_anchors.append(anchor)
    report.injected_count += 1
    logger.info('Resolved marker "%s" -> %s', anchor, page.slug)

    link = soup.new_tag("a", attrs={"href": url, "title": page.title})
    link.string = anchor
    return link


def _replace_node(node: NavigableString, pieces: Sequence[Union[str, Tag]]) -> None:
    cursor = node
    for piece in pieces:
        if isinstance(piece, str):
            if not piece:
                continue
            piece = NavigableString(piece)
        cursor.insert_after(piece)
        cursor = piece
    node.extract()


def _reject(report: LinkingReport, anchor: str, reason: str) -> None:
    logger.warning('Rejected marker anchor "%s": %s', anchor, reason)
    report.rejected_anchors.append(f'"{anchor}" - {reason}')
    report.rejected_count += 1


def _match_page(
    anchor: str,
    pages: Sequence[PageContext],
    used_slugs: Set[str],
    base_url: str,
    engine: AnchorEngine,
) -> Optional[PageContext]:
    """Longest-titled unused page sharing a word with ``anchor``, else the first unused one."""

    available = [
        page
        for page in pages
        if page.slug not in used_slugs
        and not engine.session.is_target_used(build_target_url(base_url, page.slug))
    ]
    anchor_words = [word for word in anchor.lower().split() if len(word) > 3]
    for page in available:
        title_words = [word for word in page.title.lower().split() if len(word) > 3]
        if any(word in title or title in word for word in anchor_words for title in title_words):
            return page
    return available[0] if available else None


def link_document(
    html: str,
    pages: Sequence[PageContext],
    base_url: str,
    engine: AnchorEngine | None = None,
    max_links: int | None = None,
) -> LinkingReport:
    """Inject rich contextual anchors into the paragraphs of ``html``.

    Each eligible block receives at most one new link, each target page is
    linked at most once per document, and pages already linked in the input
    are skipped.
    """

    engine = engine or AnchorEngine()
    limit = engine.config.max_links_per_document if max_links is None else max_links
    report = LinkingReport(html=html)
    if not html or not pages or limit <= 0:
        return report

    linked_slugs = existing_link_slugs(html)
    soup = parse_fragment(html)

    for block, heading in _eligible_blocks(soup):
        if report.injected_count >= limit:
            break

        choice = _best_choice(block.get_text(), heading, pages, base_url, linked_slugs, engine)
        if choice is None:
            continue
        candidate, page, url = choice

        outcome = engine.inject_link(str(block), candidate, url)
        report.results.append(outcome.result)
        if not outcome.result.success:
            report.rejected_count += 1
            report.rejected_anchors.append(f'"{candidate.text}" - {outcome.result.reasoning}')
            continue

        replacement = parse_fragment(outcome.html).find(block.name)
        block.replace_with(replacement)
        linked_slugs.add(page.slug)
        report.injected_count += 1
        report.accepted_anchors.append(candidate.text)

    if report.injected_count:
        report.html = str(soup)
    if report.injected_count < limit:
        logger.info("Injected %d/%d contextual links", report.injected_count, limit)
    return report


def _eligible_blocks(soup: BeautifulSoup) -> List[Tuple[Tag, Optional[str]]]:
    blocks: List[Tuple[Tag, Optional[str]]] = []
    for block in soup.find_all(BLOCK_TAGS):
        if block.find(BLOCK_TAGS) is not None:
            continue
        if len(block.find_all("a")) >= MAX_LINKS_PER_BLOCK:
            continue
        if _in_excluded_container(block):
            continue
        if len(block.get_text(strip=True)) <= MIN_BLOCK_CHARS:
            continue
        heading = block.find_previous(HEADING_TAGS)
        blocks.append((block, heading.get_text(" ", strip=True) if heading is not None else None))
    return blocks


def _in_excluded_container(block: Tag) -> bool:
    """True when ``block`` or an ancestor carries an excluded section class."""

    for element in [block, *block.parents]:
        classes = element.get("class") if isinstance(element, Tag) else None
        if classes and EXCLUDED_CONTAINER_CLASS_RE.search(" ".join(classes)):
            return True
    return False


def _best_choice(
    text: str,
    heading: Optional[str],
    pages: Sequence[PageContext],
    base_url: str,
    linked_slugs: Set[str],
    engine: AnchorEngine,
) -> Optional[Tuple[AnchorCandidate, PageContext, str]]:
    best: Optional[Tuple[AnchorCandidate, PageContext, str]] = None
    for page in pages:
        url = build_target_url(base_url, page.slug)
        if page.slug in linked_slugs or engine.session.is_target_used(url):
            continue
        candidate = engine.find_best_anchor(text, page, heading)
        if candidate is None:
            continue
        if best is None or candidate.quality_score > best[0].quality_score:
            best = (candidate, page, url)
    return best


def process_internal_links(
    content: str,
    pages: Sequence[PageContext],
    base_url: str,
    engine: AnchorEngine | None = None,
    max_links: int | None = None,
) -> LinkingReport:
    """Resolve markers, then fill the remaining budget with contextual links."""

    engine = engine or AnchorEngine()
    limit = engine.config.max_links_per_document if max_links is None else max_links

    markers = process_link_candidates(content, pages, base_url, engine)
    linked = existing_link_slugs(markers.html)
    remaining_pages = [page for page in pages if page.slug not in linked]
    remaining = max(0, limit - len(linked))

    contextual = link_document(markers.html, remaining_pages, base_url, engine, remaining)
    return LinkingReport(
        html=contextual.html,
        injected_count=markers.injected_count + contextual.injected_count,
        rejected_count=markers.rejected_count + contextual.rejected_count,
        accepted_anchors=markers.accepted_anchors + contextual.accepted_anchors,
        rejected_anchors=markers.rejected_anchors + contextual.rejected_anchors,
        results=markers.results + contextual.results,
    )
