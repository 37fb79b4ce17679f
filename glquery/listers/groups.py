"""Group listers."""

from __future__ import annotations

from collections.abc import Sequence

from glquery.listers.base import Lister, QueryFilters
from glquery.models import Group, GroupOrderBy, ListingSort


class GroupFilters(QueryFilters):
    """Filters accepted by the group listing, in query order."""

    all_available: bool | None = None
    search: str = ""
    order_by: GroupOrderBy | None = None
    sort: ListingSort | None = None
    skip_groups: tuple[int, ...] | None = None


class GroupsLister(Lister[Group]):
    """List groups visible to the authenticated user."""

    record_model = Group
    filters_model = GroupFilters

    def base_path(self) -> str:
        """Return ``groups``."""
        return "groups"

    def owned(self) -> OwnedGroupsLister:
        """Return a lister over the groups owned by the current user."""
        return OwnedGroupsLister(self._client, pagination=self._pagination)

    def all_available(self, all_available: bool) -> GroupsLister:
        """Include every group the user can access, not only memberships."""
        return self._with_filters(all_available=all_available)

    def search(self, search: str) -> GroupsLister:
        """Return only groups matching the search pattern."""
        return self._with_filters(search=search)

    def order_by(self, order_by: GroupOrderBy) -> GroupsLister:
        """Order results by name or path."""
        return self._with_filters(order_by=order_by)

    def sort(self, sort: ListingSort) -> GroupsLister:
        """Sort results ascending or descending."""
        return self._with_filters(sort=sort)

    def skip_groups(self, group_ids: Sequence[int]) -> GroupsLister:
        """Leave out the groups with these ids."""
        return self._with_filters(skip_groups=tuple(group_ids))


class OwnedGroupsLister(Lister[Group]):
    """List groups owned by the authenticated user; the endpoint takes no filters."""

    record_model = Group

    def base_path(self) -> str:
        """Return ``groups/owned``."""
        return "groups/owned"
