"""Synchronous GitLab API client: URL assembly, transport and JSON decoding."""

import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import orjson
from pydantic import TypeAdapter, ValidationError

from glquery.config import load_settings
from glquery.errors import DecodeError, StatusError, TransportError
from glquery.listers.groups import GroupsLister
from glquery.listers.issues import GroupIssuesLister, IssuesLister, ProjectIssuesLister
from glquery.listers.merge_requests import MergeRequestsLister
from glquery.listers.projects import ProjectLister, ProjectScope, ProjectsLister
from glquery.models import ById, ListingId, Pagination, Version
from glquery.query import escape_params
from glquery.resolver import IdentifierResolver

if TYPE_CHECKING:
    from glquery.config import ClientSettings

LOGGER = logging.getLogger(__name__)

API_VERSION = 3
_SUCCESS_LOWER = 200
_SUCCESS_UPPER = 300
_BODY_PREVIEW = 200
_TOKEN_PATTERN = re.compile(r"private_token=[^&]*")


class Transport(Protocol):
    """Blocking HTTP collaborator used by :class:`GitLabClient`."""

    def fetch(self, url: str) -> tuple[int, bytes]:
        """Issue a GET for ``url`` and return the status code and raw body."""
        ...


class HttpxTransport:
    """Transport opening a fresh connection for every request."""

    def __init__(self, *, timeout: float = 30.0) -> None:
        """Configure the request timeout and default headers."""
        self._timeout = httpx.Timeout(timeout)
        self._headers = {
            "User-Agent": "glquery/0.1",
            "Accept": "application/json",
            "Connection": "close",
        }

    def fetch(self, url: str) -> tuple[int, bytes]:
        """Perform the GET and close the connection afterwards."""
        try:
            with httpx.Client(headers=self._headers, timeout=self._timeout) as client:
                response = client.get(url)
        except httpx.TransportError as exc:
            message = f"Failed to reach GitLab API: {exc}"
            raise TransportError(message, url=redact(url)) from exc
        return response.status_code, response.content


class GitLabClient:
    """Entry point for building listers and executing their requests."""

    def __init__(
        self,
        settings: "ClientSettings",
        *,
        transport: Transport | None = None,
    ) -> None:
        """Bind the client to validated settings and a transport."""
        self._settings = settings
        self._transport = transport or HttpxTransport(timeout=settings.timeout)
        self._pagination = (
            Pagination(page=1, per_page=settings.per_page) if settings.per_page is not None else None
        )

    @classmethod
    def from_credentials(
        cls,
        hostname: str,
        token: str,
        *,
        scheme: str | None = None,
        port: int | None = None,
        transport: Transport | None = None,
    ) -> "GitLabClient":
        """Validate explicit connection details and build a client.

        Raises:
            ConfigurationError: when the host, token, scheme or port is invalid.
        """
        settings = load_settings(hostname=hostname, token=token, scheme=scheme, port=port)
        return cls(settings, transport=transport)

    @property
    def settings(self) -> "ClientSettings":
        """Return the settings the client was built with."""
        return self._settings

    @property
    def pagination(self) -> Pagination | None:
        """Return the default pagination applied when a lister sets none."""
        return self._pagination

    def build_url(
        self,
        path: str,
        params: Sequence[tuple[str, str]] = (),
        pagination: Pagination | None = None,
    ) -> str:
        """Assemble the absolute URL for ``path``.

        Filter ``params`` come first, then the private token, then pagination.
        Every value is percent-escaped so that characters such as ``+``, ``&``
        and ``#`` reach the server unchanged.
        """
        pairs = [*params, ("private_token", self._settings.token.get_secret_value())]
        if pagination is not None:
            pairs.extend([("page", str(pagination.page)), ("per_page", str(pagination.per_page))])
        return (
            f"{self._settings.scheme}://{self._settings.netloc}/api/v{API_VERSION}/"
            f"{path}?{escape_params(pairs)}"
        )

    def fetch(
        self,
        path: str,
        params: Sequence[tuple[str, str]] = (),
        pagination: Pagination | None = None,
        *,
        paginated: bool = True,
    ) -> bytes:
        """Fetch ``path`` and return the raw body of a successful response.

        With ``paginated=False`` no page parameters are sent, not even the
        client's default ones.

        Raises:
            TransportError: when the request could not be sent.
            StatusError: when the server answered with a non-success status.
        """
        if paginated:
            pagination = pagination or self._pagination
        else:
            pagination = None
        url = self.build_url(path, params, pagination)
        LOGGER.debug("GET %s", redact(url))
        status_code, body = self._transport.fetch(url)
        if not _SUCCESS_LOWER <= status_code < _SUCCESS_UPPER:
            LOGGER.warning("GitLab API returned %s for %s", status_code, path)
            message = f"GitLab API returned {status_code}: {body[:_BODY_PREVIEW].decode(errors='replace')}"
            raise StatusError(message, status_code=status_code, body=body)
        return body

    def get(
        self,
        path: str,
        params: Sequence[tuple[str, str]] = (),
        pagination: Pagination | None = None,
        *,
        paginated: bool = True,
    ) -> Any:
        """Fetch ``path`` and return the decoded JSON payload.

        Raises:
            DecodeError: when the body is not valid JSON.
        """
        return parse_json(self.fetch(path, params, pagination, paginated=paginated))

    def get_model(
        self,
        model: Any,
        path: str,
        params: Sequence[tuple[str, str]] = (),
        pagination: Pagination | None = None,
        *,
        paginated: bool = True,
    ) -> Any:
        """Fetch ``path`` and validate the payload against ``model``.

        ``model`` is anything pydantic's ``TypeAdapter`` accepts, such as a
        record class or ``list[Record]``.

        Raises:
            DecodeError: when the body is not JSON or does not match ``model``;
                the error carries the raw response body.
        """
        body = self.fetch(path, params, pagination, paginated=paginated)
        payload = parse_json(body)
        try:
            return TypeAdapter(model).validate_python(payload)
        except ValidationError as exc:
            message = f"Unexpected payload for {path}: {exc.error_count()} validation error(s)"
            raise DecodeError(message, body=body) from exc

    def version(self) -> Version:
        """Return the server version; doubles as a connectivity check."""
        return self.get_model(Version, "version", paginated=False)

    def groups(self) -> GroupsLister:
        """Return a lister over visible groups."""
        return GroupsLister(self)

    def projects(self, scope: ProjectScope | None = None) -> ProjectsLister:
        """Return a lister over projects, optionally narrowed to a scope."""
        return ProjectsLister(self, scope=scope)

    def project(self, listing_id: ListingId | int) -> ProjectLister:
        """Return a lister for a single project addressed by id or path."""
        if isinstance(listing_id, int):
            listing_id = ById(id=listing_id)
        return ProjectLister(self, listing_id)

    def issues(self) -> IssuesLister:
        """Return a lister over issues visible to the authenticated user."""
        return IssuesLister(self)

    def project_issues(self, project_id: int) -> ProjectIssuesLister:
        """Return a lister over the issues of one project."""
        return ProjectIssuesLister(self, project_id)

    def group_issues(self, group_id: int) -> GroupIssuesLister:
        """Return a lister over the issues of one group."""
        return GroupIssuesLister(self, group_id)

    def merge_requests(self, project_id: int) -> MergeRequestsLister:
        """Return a lister over the merge requests of one project."""
        return MergeRequestsLister(self, project_id)

    def resolver(self, *, page_size: int | None = None) -> IdentifierResolver:
        """Return a resolver turning human-facing identifiers into records."""
        if page_size is None:
            return IdentifierResolver(self)
        return IdentifierResolver(self, page_size=page_size)


def parse_json(body: bytes) -> Any:
    """Decode a JSON body or raise a DecodeError on failure."""
    try:
        return orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        message = f"GitLab API returned an invalid JSON payload: {exc}"
        raise DecodeError(message, body=body) from exc


def redact(url: str) -> str:
    """Hide the private token in a URL before it is logged or reported."""
    return _TOKEN_PATTERN.sub("private_token=[REDACTED]", url)
