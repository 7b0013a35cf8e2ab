"""Exceptions raised by the gist client."""


class GistClientError(Exception):
    """Base class for every error raised by this package."""


class AuthRequiredError(GistClientError):
    """The targeted resource needs a token and none is set."""

    def __init__(self, resource: str):
        super().__init__(f"A token is required for {resource}; call set_token() first")
        self.resource = resource


class ConfigurationError(GistClientError):
    """Invalid filter configuration, detected before any request is sent."""


class TransportError(GistClientError):
    """A request failed on the wire or returned a non-2xx status.

    ``status_code`` is None when no response was received at all.
    """

    def __init__(self, message: str, method: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404
