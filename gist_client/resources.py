"""Build request descriptors for the gist API."""

from .errors import AuthRequiredError, ConfigurationError
from .filters import parse_filters
from .models import EXCLUSIVE_SCOPES, RequestDescriptor, ScopeKind
from .settings import get_settings

ACCEPT = "application/vnd.github+json"


def auth_headers(token: str | None, user_agent: str | None = None) -> dict:
    """Request headers; user_agent defaults to Settings.gist_user_agent."""
    user_agent = user_agent or get_settings().gist_user_agent
    headers = {"User-Agent": user_agent, "Accept": ACCEPT}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def build_resource(
    path: str,
    token: str | None,
    method: str = "GET",
    params: dict | None = None,
    requires_auth: bool = True,
    user_agent: str | None = None,
) -> RequestDescriptor:
    """Descriptor for a single resource.

    Raises AuthRequiredError when the resource needs a token and none is set.
    """
    if requires_auth and not token:
        raise AuthRequiredError(f"{method} {path}")
    return RequestDescriptor(
        method=method,
        url=path,
        params=dict(params or {}),
        headers=auth_headers(token, user_agent),
    )


def scope_values(filter_by) -> dict[ScopeKind, object]:
    """Last truthy value of each scope key.

    Raises ConfigurationError when more than one of userName, starred and
    public is set.
    """
    scopes, _ = parse_filters(filter_by)
    values: dict[ScopeKind, object] = {}
    for scope in scopes:
        if scope.value:
            values[scope.kind] = scope.value

    present = [kind.value for kind in EXCLUSIVE_SCOPES if kind in values]
    if len(present) > 1:
        raise ConfigurationError(
            f"Mutually exclusive scope filters combined: {', '.join(present)}"
        )
    return values


def resolve_collection(values: dict[ScopeKind, object]) -> tuple[str, bool]:
    """Collection path for the scope values and whether it needs a token."""
    if ScopeKind.USER_NAME in values:
        return f"/users/{values[ScopeKind.USER_NAME]}/gists", False
    if values.get(ScopeKind.STARRED) is True:
        return "/gists/starred", True
    if values.get(ScopeKind.PUBLIC) is True:
        return "/gists/public", False
    return "/gists", True


def build_list_resource(
    filter_by,
    token: str | None,
    path: str | None = None,
    page_limit: int | None = None,
    user_agent: str | None = None,
) -> RequestDescriptor:
    """Descriptor for the first page of a list operation.

    Without ``path`` the collection comes from the scope filters; with it
    (commits, forks) the path is used as is and no token is needed. Scope
    filters are validated either way.
    """
    values = scope_values(filter_by)
    if path is None:
        path, requires_auth = resolve_collection(values)
    else:
        requires_auth = False

    params = {"per_page": page_limit or get_settings().gist_page_limit}
    if ScopeKind.SINCE in values:
        params["since"] = values[ScopeKind.SINCE]

    return build_resource(
        path,
        token,
        params=params,
        requires_auth=requires_auth,
        user_agent=user_agent,
    )
