"""Async client for GitHub Gists.

Lists follow Link-header pagination with concurrent page fetches, can pull
each file's raw content, and filter records by file metadata.
"""

from .cli import main
from .client import GistClient
from .errors import AuthRequiredError, ConfigurationError, GistClientError, TransportError
from .models import ApiResponse, ContentField, ContentFilter, ScopeFilter, ScopeKind

__all__ = [
    "main",
    "GistClient",
    "GistClientError",
    "AuthRequiredError",
    "ConfigurationError",
    "TransportError",
    "ApiResponse",
    "ContentField",
    "ContentFilter",
    "ScopeFilter",
    "ScopeKind",
]

if __name__ == "__main__":
    main()
