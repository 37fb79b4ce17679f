"""Merge request listers for GitLab projects."""

from __future__ import annotations

from collections.abc import Sequence

from glquery.listers.base import QueryFilters, ScopedLister
from glquery.models import ListingSort, MergeRequest, MergeRequestOrderBy, MergeRequestState


class MergeRequestFilters(QueryFilters):
    """Filters accepted by the merge request listing, in query order."""

    iid: tuple[int, ...] | None = None
    state: MergeRequestState | None = None
    order_by: MergeRequestOrderBy | None = None
    sort: ListingSort | None = None


class MergeRequestsLister(ScopedLister[MergeRequest]):
    """List the merge requests of one project."""

    record_model = MergeRequest
    filters_model = MergeRequestFilters
    parent_path = "projects"
    collection = "merge_requests"

    @property
    def project_id(self) -> int:
        """Return the internal id of the project."""
        return self.parent_id

    def iid(self, iids: Sequence[int]) -> MergeRequestsLister:
        """Return only merge requests with these project-scoped iids."""
        return self._with_filters(iid=tuple(iids))

    def state(self, state: MergeRequestState) -> MergeRequestsLister:
        """Return only merge requests in the given state."""
        return self._with_filters(state=state)

    def order_by(self, order_by: MergeRequestOrderBy) -> MergeRequestsLister:
        """Order results by creation or update time."""
        return self._with_filters(order_by=order_by)

    def sort(self, sort: ListingSort) -> MergeRequestsLister:
        """Sort results ascending or descending."""
        return self._with_filters(sort=sort)
