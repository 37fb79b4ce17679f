"""Resolve human-facing identifiers into server-internal records.

The API cannot look a project up by namespace and name in a single call,
nor an issue or merge request by its project-scoped ``iid``. Both are
resolved here by walking result pages sequentially and matching locally.
A page holding fewer items than requested ends the walk.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from glquery.errors import GitLabError, NotFoundError
from glquery.models import Issue, MergeRequest, Project
from glquery.pagination import PaginationCursor

if TYPE_CHECKING:
    from glquery.gitlab_client import GitLabClient
    from glquery.listers.base import Lister

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20

RecordT = TypeVar("RecordT", Project, Issue, MergeRequest)


class IdentifierResolver:
    """Turn ``namespace/name`` and ``iid`` coordinates into records with internal ids."""

    def __init__(self, client: "GitLabClient", *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        """Bind the resolver to a client and a fixed page size."""
        if page_size < 1:
            msg = f"page_size must be positive, got {page_size}"
            raise ValueError(msg)
        self._client = client
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        """Return the number of items requested per page."""
        return self._page_size

    def resolve_project(self, namespace: str, name: str) -> Project:
        """Return the project named ``name`` inside ``namespace``.

        The search endpoint only filters by a substring of the name, so every
        page of candidates is checked for an exact namespace and name match.

        Raises:
            NotFoundError: when no page contains the project.
        """
        coordinates = f"{namespace}/{name}"
        lister = self._client.projects().search(name)
        try:
            project = self._scan(lister, lambda candidate: _is_project(candidate, namespace, name))
        except GitLabError as exc:
            exc.annotate(f"while resolving project {coordinates}")
            raise
        if project is None:
            msg = f"project {coordinates} not found"
            raise NotFoundError(msg, resource="project", identifier=coordinates)
        LOGGER.debug("Resolved project %s to id %s", coordinates, project.id)
        return project

    def resolve_issue(self, namespace: str, name: str, iid: int) -> Issue:
        """Return the issue ``#iid`` of project ``namespace/name``.

        Raises:
            NotFoundError: when the project or the issue cannot be found.
        """
        project = self._resolve_parent(namespace, name, f"issue #{iid}")
        lister = self._client.project_issues(project.id)
        return self._resolve_iid(lister, "issue", f"#{iid}", iid, f"{namespace}/{name}")

    def resolve_merge_request(self, namespace: str, name: str, iid: int) -> MergeRequest:
        """Return the merge request ``!iid`` of project ``namespace/name``.

        Raises:
            NotFoundError: when the project or the merge request cannot be found.
        """
        project = self._resolve_parent(namespace, name, f"merge request !{iid}")
        lister = self._client.merge_requests(project.id)
        return self._resolve_iid(lister, "merge request", f"!{iid}", iid, f"{namespace}/{name}")

    def _resolve_parent(self, namespace: str, name: str, target: str) -> Project:
        try:
            return self.resolve_project(namespace, name)
        except GitLabError as exc:
            exc.annotate(f"while resolving {target}")
            raise

    def _resolve_iid(
        self,
        lister: "Lister[RecordT]",
        resource: str,
        reference: str,
        iid: int,
        coordinates: str,
    ) -> RecordT:
        # the full listing is scanned; iid filtering is not reliable server-side
        try:
            record = self._scan(lister, lambda candidate: candidate.iid == iid)
        except GitLabError as exc:
            exc.annotate(f"while resolving {resource} {reference} in project {coordinates}")
            raise
        if record is None:
            msg = f"{resource} {reference} not found in project {coordinates}"
            raise NotFoundError(msg, resource=resource, identifier=f"{coordinates}{reference}")
        LOGGER.debug("Resolved %s %s%s to id %s", resource, coordinates, reference, record.id)
        return record

    def _scan(self, lister: "Lister[RecordT]", matches: Callable[[RecordT], bool]) -> RecordT | None:
        """Walk pages until ``matches`` accepts an item or an underfull page is seen."""
        cursor = PaginationCursor(per_page=self._page_size)
        while True:
            page = lister.list_paginated(cursor.page, cursor.per_page)
            LOGGER.debug("Scanning page %s of %s (%s items)", cursor.page, lister.base_path(), len(page))
            for candidate in page:
                if matches(candidate):
                    return candidate
            if cursor.is_last_page(len(page)):
                return None
            cursor.advance()


def _is_project(candidate: Project, namespace: str, name: str) -> bool:
    if candidate.name != name or candidate.namespace is None:
        return False
    # namespaces are addressed by display name or by URL path
    return namespace in (candidate.namespace.name, candidate.namespace.path)
