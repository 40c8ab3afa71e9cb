"""HTML link insertion.

Text nodes are walked with BeautifulSoup rather than rewriting the raw markup
with a regex, so a phrase is never matched inside a tag attribute and never
wrapped when it already sits inside an anchor.
"""

from __future__ import annotations

from typing import List, Set, Tuple

from bs4 import BeautifulSoup, NavigableString  # type: ignore
from bs4.element import PreformattedString  # type: ignore

from .pages import slug_from_url
from .text import phrase_pattern

# Tags inside which links should never be inserted
SKIP_TAGS: set[str] = {"a", "code", "pre", "script", "style", "h1", "h2", "h3"}


def parse_fragment(html: str) -> BeautifulSoup:
    # html.parser keeps fragments as-is; lxml would wrap them in <html><body>.
    return BeautifulSoup(html, "html.parser")


def text_nodes(soup: BeautifulSoup) -> List[NavigableString]:
    """Return plain text nodes in document order."""

    return [
        node
        for node in soup.descendants
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString)
    ]


def should_skip(node: NavigableString) -> bool:
    """Return True when any ancestor of ``node`` is in ``SKIP_TAGS``."""

    parent = node.parent
    while parent is not None and getattr(parent, "name", None):
        if parent.name and parent.name.lower() in SKIP_TAGS:
            return True
        parent = parent.parent
    return False


def insert_link(html: str, anchor: str, url: str, title: str | None = None) -> Tuple[str, int]:
    """Wrap the first linkable occurrence of ``anchor`` in ``<a href=url>``.

    Returns the new HTML and the character offset of the match within the
    fragment's text content. When nothing matches the original string is
    returned untouched with offset ``-1``.
    """

    if not html or not anchor.strip():
        return html, -1

    pattern = phrase_pattern(anchor)
    soup = parse_fragment(html)
    consumed = 0

    for node in text_nodes(soup):
        original = str(node)
        if should_skip(node):
            consumed += len(original)
            continue

        match = pattern.search(original)
        if not match:
            consumed += len(original)
            continue

        after = original[match.end():]
        if after:
            node.insert_after(after)

        attrs = {"href": url}
        if title:
            attrs["title"] = title
        link = soup.new_tag("a", attrs=attrs)
        link.string = match.group(0)
        node.insert_after(link)

        before = original[: match.start()]
        if before:
            node.replace_with(before)
        else:
            node.extract()

        return str(soup), consumed + match.start()

    return html, -1


def existing_link_slugs(html: str) -> Set[str]:
    """Slugs of every link already present in ``html``."""

    if not html:
        return set()
    soup = parse_fragment(html)
    slugs = set()
    for anchor in soup.find_all("a", href=True):
        slug = slug_from_url(anchor["href"])
        if slug:
            slugs.add(slug)
    return slugs
