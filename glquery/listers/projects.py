"""Project listers: collection listings and single-project lookup."""

from __future__ import annotations

import copy
from enum import StrEnum
from typing import TYPE_CHECKING

from glquery.errors import GitLabError
from glquery.listers.base import Lister, QueryFilters
from glquery.listers.issues import ProjectIssuesLister
from glquery.listers.merge_requests import MergeRequestsLister
from glquery.models import ListingSort, ListingVisibility, Project, ProjectOrderBy
from glquery.query import encode_path_segment

if TYPE_CHECKING:
    from glquery.gitlab_client import GitLabClient
    from glquery.models import ListingId, Pagination


class ProjectScope(StrEnum):
    """Sub-collections of ``projects`` sharing the same filters."""

    OWNED = "owned"
    ALL = "all"
    STARRED = "starred"
    VISIBLE = "visible"


class ProjectFilters(QueryFilters):
    """Filters accepted by the project listings, in query order."""

    archived: bool | None = None
    visibility: ListingVisibility | None = None
    order_by: ProjectOrderBy | None = None
    sort: ListingSort | None = None
    search: str = ""
    simple: bool | None = None


class ProjectsLister(Lister[Project]):
    """List projects, optionally narrowed to owned, all, starred or visible ones."""

    record_model = Project
    filters_model = ProjectFilters

    def __init__(
        self,
        client: GitLabClient,
        *,
        scope: ProjectScope | None = None,
        filters: QueryFilters | None = None,
        pagination: Pagination | None = None,
    ) -> None:
        """Fix the collection scope for the lifetime of the lister."""
        super().__init__(client, filters=filters, pagination=pagination)
        self._scope = scope

    @property
    def scope(self) -> ProjectScope | None:
        """Return the sub-collection this lister targets, if any."""
        return self._scope

    def base_path(self) -> str:
        """Return ``projects`` or ``projects/<scope>``."""
        if self._scope is None:
            return "projects"
        return f"projects/{self._scope.value}"

    def owned(self) -> ProjectsLister:
        """Return a lister restricted to projects owned by the current user."""
        return self._scoped(ProjectScope.OWNED)

    def all(self) -> ProjectsLister:
        """Return a lister over every project (administrators only)."""
        return self._scoped(ProjectScope.ALL)

    def starred(self) -> ProjectsLister:
        """Return a lister over projects starred by the current user."""
        return self._scoped(ProjectScope.STARRED)

    def visible(self) -> ProjectsLister:
        """Return a lister over every project the current user can see."""
        return self._scoped(ProjectScope.VISIBLE)

    def archived(self, archived: bool) -> ProjectsLister:
        """Limit by archived status."""
        return self._with_filters(archived=archived)

    def visibility(self, visibility: ListingVisibility) -> ProjectsLister:
        """Limit by visibility level."""
        return self._with_filters(visibility=visibility)

    def order_by(self, order_by: ProjectOrderBy) -> ProjectsLister:
        """Order results by the given field."""
        return self._with_filters(order_by=order_by)

    def sort(self, sort: ListingSort) -> ProjectsLister:
        """Sort results ascending or descending."""
        return self._with_filters(sort=sort)

    def search(self, search: str) -> ProjectsLister:
        """Return only projects matching the search pattern."""
        return self._with_filters(search=search)

    def simple(self, simple: bool) -> ProjectsLister:
        """Return only the id, URL, name and path of each project."""
        return self._with_filters(simple=simple)

    def _scoped(self, scope: ProjectScope) -> ProjectsLister:
        clone = copy.copy(self)
        clone._scope = scope
        return clone


class ProjectLister:
    """Fetch one project addressed by id or by ``namespace/name``."""

    def __init__(self, client: GitLabClient, listing_id: ListingId) -> None:
        """Bind the lister to a client and an immutable project identifier."""
        self._client = client
        self._listing_id = listing_id

    @property
    def listing_id(self) -> ListingId:
        """Return the identifier the lister was built for."""
        return self._listing_id

    def build_query(self) -> str:
        """Return ``projects/<id>`` with a namespaced path escaped as one segment."""
        return f"projects/{encode_path_segment(self._listing_id)}"

    def get(self) -> Project:
        """Fetch and decode the project."""
        query = self.build_query()
        try:
            return self._client.get_model(Project, query, paginated=False)
        except GitLabError as exc:
            exc.annotate(f"cannot get query {query}")
            raise

    def issues(self) -> ProjectIssuesLister:
        """Return an issue lister scoped to this project's internal id."""
        return ProjectIssuesLister(self._client, self._project_id())

    def merge_requests(self) -> MergeRequestsLister:
        """Return a merge request lister scoped to this project's internal id."""
        return MergeRequestsLister(self._client, self._project_id())

    def _project_id(self) -> int:
        try:
            return self.get().id
        except GitLabError as exc:
            exc.annotate("failure to find project")
            raise
