"""Work out every page URI of a list response from its Link header.

GitHub paginates gist listings with a header like::

    <https://api.github.com/gists?per_page=100&page=2>; rel="next",
    <https://api.github.com/gists?per_page=100&page=5>; rel="last"

The page count is the trailing number of the ``last`` URI, and each page URI
is the ``first`` URI (or ``last`` when ``first`` is missing) with that trailing
number replaced. Anything that does not fit this shape is treated as a
single-page result.
"""

import logging
import re

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(r"<([^>]*)>")
_REL_RE = re.compile(r'rel="?([^";]+)"?')
_TRAILING_PAGE_RE = re.compile(r"\d+$")


def parse_link_header(value: str | None) -> dict[str, str]:
    """Map each rel name to its URI. Malformed parts are skipped."""
    links: dict[str, str] = {}
    if not value:
        return links
    for part in value.split(","):
        uri = _LINK_RE.search(part)
        rel = _REL_RE.search(part)
        if uri is None or rel is None:
            continue
        links[rel.group(1).strip()] = uri.group(1).strip()
    return links


def page_count(last_uri: str) -> int:
    """Trailing page index of a URI, 0 when it has none."""
    match = _TRAILING_PAGE_RE.search(last_uri)
    return int(match.group(0)) if match else 0


def resolve_pages(link: str | None) -> list[str]:
    """All page URIs from page 1 to the last page, or [] for a single page.

    Page 1 is included so list indexes match page numbers minus one; callers
    already hold its response and must not request it again.
    """
    links = parse_link_header(link)
    last = links.get("last")
    if last is None:
        return []
    template = links.get("first", last)
    if not _TRAILING_PAGE_RE.search(template):
        logger.debug("Link template %r has no trailing page index, assuming one page", template)
        return []
    count = page_count(last)
    pages = [_TRAILING_PAGE_RE.sub(str(i), template) for i in range(1, count + 1)]
    logger.debug("Resolved %d pages from Link header", len(pages))
    return pages
