"""Tests for the group listers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from httpx import Response

from glquery.models import GroupOrderBy, ListingSort

if TYPE_CHECKING:
    from respx import MockRouter

    from glquery.gitlab_client import GitLabClient


def test_owned_groups_query(client: GitLabClient) -> None:
    """Owned groups take no filters."""
    assert client.groups().owned().build_query() == "groups/owned"


def test_groups_query_order(client: GitLabClient) -> None:
    """Group filters serialize in declared order."""
    query = (
        client.groups()
        .skip_groups([4, 5])
        .sort(ListingSort.DESC)
        .order_by(GroupOrderBy.PATH)
        .search("team")
        .all_available(True)
        .build_query()
    )

    assert client.groups().build_query() == "groups"
    assert query == "groups?all_available=true&search=team&order_by=path&sort=desc&skip_groups[]=4&skip_groups[]=5"


def test_list_owned_groups(client: GitLabClient, respx_mock: MockRouter) -> None:
    """Owned group listing decodes group records."""
    respx_mock.get("https://gitlab.example.com/api/v3/groups/owned").mock(
        return_value=Response(200, json=[{"id": 3, "name": "Team", "path": "team"}]),
    )

    groups = client.groups().owned().list()

    assert [(group.id, group.path) for group in groups] == [(3, "team")]
