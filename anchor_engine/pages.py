"""Parsing of target-page records supplied by external collaborators.

Page lists arrive as loosely typed JSON: WordPress REST posts
(``{"title": {"rendered": ...}, "slug": ..., "link": ...}``), crawled sitemap
entries (``{"loc": ...}``) or already-flat records. ``parse_page_record`` maps
each known shape onto a strict :class:`PageContext` and refuses anything it
cannot recognise instead of guessing.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlparse

from .text import collapse_whitespace, strip_html
from .types import PageContext

_URL_FIELDS = ("link", "url", "loc", "permalink")


class UnrecognizedSchemaError(ValueError):
    """Raised when a page payload matches none of the known record shapes."""


def slug_from_url(url: str) -> str:
    """Return the final non-empty path segment of ``url``."""

    parsed = urlparse(url)
    path = (parsed.path if parsed.scheme or parsed.netloc else url).strip("/")
    return path.split("/")[-1] if path else ""


def title_from_slug(slug: str) -> str:
    words = slug.replace("_", "-").split("-")
    return " ".join(word.capitalize() for word in words if word)


def _rendered(value: Any) -> Optional[str]:
    """Unwrap WordPress ``{"rendered": "..."}`` objects and strip markup."""

    if isinstance(value, Mapping):
        value = value.get("rendered")
    if value is None:
        return None
    text = collapse_whitespace(strip_html(str(value)))
    return text or None


def _string_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    else:
        items = value
    return tuple(str(item).strip() for item in items if str(item).strip())


def parse_page_record(payload: Mapping[str, Any]) -> PageContext:
    """Map a loosely typed page payload onto a :class:`PageContext`.

    Raises
    ------
    UnrecognizedSchemaError
        If the payload carries neither a title nor a slug or URL field.
    """

    if not isinstance(payload, Mapping):
        raise UnrecognizedSchemaError(f"unrecognized page record schema: {type(payload).__name__}")

    title = _rendered(payload.get("title"))
    slug = str(payload.get("slug") or "").strip().strip("/")
    if not slug:
        for name in _URL_FIELDS:
            if payload.get(name):
                slug = slug_from_url(str(payload[name]))
                break

    if not title and not slug:
        raise UnrecognizedSchemaError(
            f"unrecognized page record schema: keys={sorted(str(key) for key in payload)}"
        )

    description = _rendered(payload.get("description"))
    if description is None:
        description = _rendered(payload.get("excerpt"))

    return PageContext(
        title=title or title_from_slug(slug),
        slug=slug,
        description=description,
        primary_keyword=(payload.get("primary_keyword") or None),
        secondary_keywords=_string_list(payload.get("secondary_keywords")),
        category=(payload.get("category") or None),
        topics=_string_list(payload.get("topics")),
    )


def parse_page_records(payloads: Sequence[Mapping[str, Any]]) -> List[PageContext]:
    return [parse_page_record(payload) for payload in payloads]
