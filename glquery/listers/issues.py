"""Issue listers: global, per-project and per-group listings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Self

from glquery.listers.base import Lister, QueryFilters, ScopedLister
from glquery.models import Issue, IssueOrderBy, IssueState, ListingSort


class IssueFilters(QueryFilters):
    """Filters accepted by the issue listings, in query order.

    ``iid`` is only honoured by the per-project listing.
    """

    iid: tuple[int, ...] | None = None
    state: IssueState | None = None
    labels: str = ""
    milestone: str = ""
    order_by: IssueOrderBy | None = None
    sort: ListingSort | None = None


class _IssueLister(Lister[Issue]):
    """Setters shared by every issue lister."""

    record_model = Issue
    filters_model = IssueFilters

    def state(self, state: IssueState) -> Self:
        """Return only issues in the given state."""
        return self._with_filters(state=state)

    def labels(self, labels: Sequence[str]) -> Self:
        """Return only issues carrying every one of ``labels``."""
        return self._with_filters(labels=",".join(labels))

    def milestone(self, milestone: str) -> Self:
        """Return only issues assigned to the milestone with this title."""
        return self._with_filters(milestone=milestone)

    def order_by(self, order_by: IssueOrderBy) -> Self:
        """Order results by the given field."""
        return self._with_filters(order_by=order_by)

    def sort(self, sort: ListingSort) -> Self:
        """Sort results ascending or descending."""
        return self._with_filters(sort=sort)


class IssuesLister(_IssueLister):
    """List every issue visible to the authenticated user."""

    def base_path(self) -> str:
        """Return ``issues``."""
        return "issues"


class ProjectIssuesLister(_IssueLister, ScopedLister[Issue]):
    """List the issues of one project."""

    parent_path = "projects"
    collection = "issues"

    @property
    def project_id(self) -> int:
        """Return the internal id of the project."""
        return self.parent_id

    def iid(self, iids: Sequence[int]) -> ProjectIssuesLister:
        """Return only issues with these project-scoped iids."""
        return self._with_filters(iid=tuple(iids))


class GroupIssuesLister(_IssueLister, ScopedLister[Issue]):
    """List the issues of every project in one group."""

    parent_path = "groups"
    collection = "issues"

    @property
    def group_id(self) -> int:
        """Return the internal id of the group."""
        return self.parent_id
