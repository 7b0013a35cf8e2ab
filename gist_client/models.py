"""Data models and constants for the gist client."""

import json
import re
from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigurationError

@dataclass
class ApiResponse:
    """One response from the gist API: a page of records or a single record."""

    status: int
    body: dict | list
    etag: str | None = None
    link: str | None = None

    @property
    def records(self) -> list[dict]:
        """Body as a list; a single object counts as a one-record page."""
        if isinstance(self.body, list):
            return self.body
        return [self.body] if self.body else []


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue one request."""

    method: str
    url: str
    params: dict = field(default_factory=dict)
    headers: dict = field(default_factory=dict)


class ScopeKind(str, Enum):
    """Filters that choose which collection endpoint is queried."""

    USER_NAME = "userName"
    STARRED = "starred"
    PUBLIC = "public"
    SINCE = "since"


class ContentField(str, Enum):
    """File-metadata fields that content filters can match against."""

    SIZE = "size"
    RAW_URL = "raw_url"
    FILENAME = "filename"
    TYPE = "type"
    LANGUAGE = "language"
    TRUNCATED = "truncated"
    CONTENT = "content"


def as_text(value) -> str:
    """Text form used for matching: strings as is, anything else as canonical JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


# Scope kinds that select an endpoint; at most one may be set
EXCLUSIVE_SCOPES = (ScopeKind.USER_NAME, ScopeKind.STARRED, ScopeKind.PUBLIC)


@dataclass(frozen=True)
class ScopeFilter:
    kind: ScopeKind
    value: object


@dataclass(frozen=True)
class ContentFilter:
    """Matches a file entry whose ``field`` text is found by ``pattern``.

    Non-string patterns (``True``, ``42``) are turned into the same text form
    that field values get, so ``ContentFilter(ContentField.TRUNCATED, False)``
    matches ``"truncated": false``.
    """

    field: ContentField
    pattern: object
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(as_text(self.pattern))
        except re.error as e:
            raise ConfigurationError(
                f"Invalid pattern for {self.field.value!r} filter: {self.pattern!r} ({e})"
            ) from e
        object.__setattr__(self, "regex", compiled)

    def matches(self, file_entry: dict) -> bool:
        if self.field.value not in file_entry:
            return False
        return self.regex.search(as_text(file_entry[self.field.value])) is not None
