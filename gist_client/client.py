"""Async GitHub Gists client using httpx."""

import asyncio
import logging

import httpx

from .errors import TransportError
from .filters import filter_records, parse_filters
from .models import ApiResponse, RequestDescriptor
from .pagination import resolve_pages
from .resources import build_list_resource, build_resource
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class GistClient:
    """Client for the gists endpoints of the GitHub REST API.

    The token is an owned field: set_token() and unset_token() must not be
    called while requests on the same instance are in flight. Use one client
    per credential when that matters.

    Usage::

        async with GistClient(token="...") as client:
            gists = await client.get_all([{"language": "Python"}], raw_content=True)
    """

    def __init__(
        self,
        token: str | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.token = token if token is not None else self.settings.github_token
        self._client = httpx.AsyncClient(
            base_url=self.settings.gist_api_url,
            timeout=self.settings.gist_timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    def set_token(self, token: str) -> "GistClient":
        self.token = token
        return self

    def unset_token(self) -> "GistClient":
        self.token = None
        return self

    def _resource(self, path, method="GET", requires_auth=True) -> RequestDescriptor:
        return build_resource(
            path,
            self.token,
            method=method,
            requires_auth=requires_auth,
            user_agent=self.settings.gist_user_agent,
        )

    async def _send(self, request: RequestDescriptor, json=None) -> httpx.Response:
        """Issue a request; non-2xx and network failures become TransportError."""
        logger.debug("%s %s %s", request.method, request.url, request.params or "")
        try:
            resp = await self._client.request(
                request.method,
                request.url,
                params=request.params or None,
                headers=request.headers,
                json=json,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"{type(e).__name__} during {request.method} {request.url}: {e}",
                request.method,
                request.url,
            ) from e

        if not 200 <= resp.status_code < 300:
            raise TransportError(
                f"GitHub API error {resp.status_code} for {request.method} {request.url}",
                request.method,
                request.url,
                status_code=resp.status_code,
            )
        return resp

    async def _request(self, request: RequestDescriptor, json=None) -> ApiResponse:
        resp = await self._send(request, json=json)
        try:
            body = resp.json() if resp.content else {}
        except ValueError as e:
            raise TransportError(
                f"Response to {request.method} {request.url} is not JSON: {e}",
                request.method,
                request.url,
                status_code=resp.status_code,
            ) from e
        return ApiResponse(
            status=resp.status_code,
            body=body,
            etag=resp.headers.get("etag"),
            link=resp.headers.get("link"),
        )

    async def _fetch_list(self, request: RequestDescriptor, contents, raw_content) -> list[dict]:
        """Fetch every page of a listing, then hydrate and filter the records.

        Pages 2..N are requested together once page 1 names the last page.
        Results keep page order whatever order the responses arrive in; any
        failed page fails the whole call.
        """
        first = await self._request(request)
        pages = resolve_pages(first.link)

        records = list(first.records)
        if len(pages) > 1:
            rest = await asyncio.gather(
                *(self._request(RequestDescriptor("GET", uri, headers=request.headers))
                  for uri in pages[1:])
            )
            for page in rest:
                records.extend(page.records)

        if raw_content:
            await self._hydrate(records, request.headers)
        return filter_records(records, contents)

    async def _hydrate(self, records: list[dict], headers: dict) -> list[dict]:
        """Set ``content`` on every file that has a ``raw_url``, one at a time."""
        for record in records:
            files = record.get("files")
            if not isinstance(files, dict):
                continue
            for name, entry in files.items():
                raw_url = entry.get("raw_url") if isinstance(entry, dict) else None
                if not raw_url:
                    continue
                resp = await self._send(RequestDescriptor("GET", raw_url, headers=headers))
                entry["content"] = resp.text
                logger.debug("Hydrated %s (%d chars)", name, len(entry["content"]))
        return records

    async def _list(self, filter_by, raw_content, path=None) -> list[dict]:
        scopes, contents = parse_filters(filter_by)
        request = build_list_resource(
            scopes,
            self.token,
            path=path,
            page_limit=self.settings.gist_page_limit,
            user_agent=self.settings.gist_user_agent,
        )
        return await self._fetch_list(request, contents, raw_content)

    async def get_all(self, filter_by=None, raw_content: bool = False) -> list[dict]:
        """List gists of the collection chosen by the scope filters.

        Args:
            filter_by: List of {field: value} mappings. userName, starred,
                public and since choose the endpoint; size, raw_url, filename,
                type, language, truncated and content filter files by pattern.
            raw_content: Fetch each file's raw_url into its ``content`` field
                before filtering.

        Returns:
            Matching gist records in API order.
        """
        return await self._list(filter_by, raw_content)

    async def get_commits(self, gist_id: str, filter_by=None, raw_content: bool = False) -> list[dict]:
        """List the revision history of a gist."""
        return await self._list(filter_by, raw_content, path=f"/gists/{gist_id}/commits")

    async def get_forks(self, gist_id: str, filter_by=None, raw_content: bool = False) -> list[dict]:
        """List forks of a gist."""
        return await self._list(filter_by, raw_content, path=f"/gists/{gist_id}/forks")

    async def get_one_by_id(self, gist_id: str) -> dict:
        resp = await self._request(self._resource(f"/gists/{gist_id}"))
        return resp.body

    async def get_revision(self, gist_id: str, sha: str) -> dict:
        resp = await self._request(self._resource(f"/gists/{gist_id}/{sha}"))
        return resp.body

    async def create(self, files: dict, description: str | None = None, public: bool = False) -> dict:
        """Create a gist.

        ``files`` maps filename to content, or to a {"content": ...} mapping.
        """
        payload = {"files": _file_payload(files), "public": public}
        if description is not None:
            payload["description"] = description
        resp = await self._request(self._resource("/gists", method="POST"), json=payload)
        return resp.body

    async def update(self, gist_id: str, files: dict | None = None, description: str | None = None) -> dict:
        """Edit a gist. A file mapped to None is deleted from it."""
        payload = {}
        if files is not None:
            payload["files"] = _file_payload(files)
        if description is not None:
            payload["description"] = description
        resp = await self._request(self._resource(f"/gists/{gist_id}", method="PATCH"), json=payload)
        return resp.body

    async def delete(self, gist_id: str) -> bool:
        await self._send(self._resource(f"/gists/{gist_id}", method="DELETE"))
        return True

    async def fork(self, gist_id: str) -> dict:
        resp = await self._request(self._resource(f"/gists/{gist_id}/forks", method="POST"))
        return resp.body

    async def star(self, gist_id: str) -> bool:
        return await self._star_request(gist_id, "PUT")

    async def unstar(self, gist_id: str) -> bool:
        return await self._star_request(gist_id, "DELETE")

    async def is_starred(self, gist_id: str) -> bool:
        """True on 204, False on 404; any other error status raises."""
        return await self._star_request(gist_id, "GET")

    async def _star_request(self, gist_id: str, method: str) -> bool:
        try:
            await self._send(self._resource(f"/gists/{gist_id}/star", method=method))
        except TransportError as e:
            if e.not_found:
                return False
            raise
        return True


def _file_payload(files: dict) -> dict:
    payload = {}
    for name, value in files.items():
        if value is None or isinstance(value, dict):
            payload[name] = value
        else:
            payload[name] = {"content": value}
    return payload
