"""Parse filter configuration and apply content filters to gist records.

Filters arrive as a list of single-key mappings, e.g.::

    [{"userName": "octocat"}, {"language": "Python"}, {"content": "asyncio"}]

Scope keys (userName, starred, public, since) pick the endpoint and are
consumed by the resource builder. The rest match against each record's
``files`` entries: a record is kept when at least one of its files satisfies
every content filter.
"""

import logging
from collections.abc import Iterable, Mapping

from .models import ContentField, ContentFilter, ScopeFilter, ScopeKind

logger = logging.getLogger(__name__)

SCOPE_NAMES = {kind.value: kind for kind in ScopeKind}
CONTENT_NAMES = {f.value: f for f in ContentField}


def parse_filters(filter_by) -> tuple[list[ScopeFilter], list[ContentFilter]]:
    """Split raw filter configuration into scope and content filters.

    Accepts mappings and already-built ScopeFilter/ContentFilter objects.
    Unknown field names are logged and dropped.
    """
    scopes: list[ScopeFilter] = []
    contents: list[ContentFilter] = []
    for entry in filter_by or []:
        if isinstance(entry, ScopeFilter):
            scopes.append(entry)
            continue
        if isinstance(entry, ContentFilter):
            contents.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.warning("Ignoring filter %r: expected a {field: value} mapping", entry)
            continue
        for name, value in entry.items():
            if name in SCOPE_NAMES:
                scopes.append(ScopeFilter(SCOPE_NAMES[name], value))
            elif name in CONTENT_NAMES:
                contents.append(ContentFilter(CONTENT_NAMES[name], value))
            else:
                logger.warning(
                    "Ignoring filter on unknown field %r (filterable fields: %s)",
                    name,
                    ", ".join(CONTENT_NAMES),
                )
    return scopes, contents


def file_matches(file_entry: dict, filters: Iterable[ContentFilter]) -> bool:
    """True when the file entry satisfies every filter."""
    return all(f.matches(file_entry) for f in filters)


def record_matches(record: dict, filters: list[ContentFilter]) -> bool:
    """True when any file of the record satisfies every filter."""
    files = record.get("files")
    if not isinstance(files, Mapping):
        return False
    return any(
        isinstance(entry, Mapping) and file_matches(entry, filters)
        for entry in files.values()
    )


def filter_records(records: list[dict], filter_by) -> list[dict]:
    """Keep records with at least one file matching all content filters.

    With no content filters left after dropping scope and unknown names, the
    input is returned unchanged.
    """
    _, contents = parse_filters(filter_by)
    if not contents:
        return records
    return [record for record in records if record_matches(record, contents)]
