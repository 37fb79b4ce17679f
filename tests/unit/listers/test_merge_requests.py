"""Tests for the merge request lister."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import Response

from glquery.models import ListingSort, MergeRequestOrderBy, MergeRequestState
from tests.factories import merge_request_payload

if TYPE_CHECKING:
    from respx import MockRouter

    from glquery.gitlab_client import GitLabClient

TEST_PROJECT_ID = 123


def test_build_query_default(client: GitLabClient) -> None:
    """The project id is part of the base path, not of the filters."""
    lister = client.merge_requests(TEST_PROJECT_ID)

    assert lister.build_query() == "projects/123/merge_requests"
    assert lister.project_id == TEST_PROJECT_ID


def test_build_query_iid(client: GitLabClient) -> None:
    """A single iid uses plain notation, several use bracket notation."""
    lister = client.merge_requests(TEST_PROJECT_ID)

    assert lister.iid([456]).build_query() == "projects/123/merge_requests?iid=456"
    assert lister.iid([456, 789]).build_query() == "projects/123/merge_requests?iid[]=456&iid[]=789"


@pytest.mark.parametrize("state", list(MergeRequestState))
def test_build_query_state(client: GitLabClient, state: MergeRequestState) -> None:
    """Each state serializes to its declared string."""
    query = client.merge_requests(TEST_PROJECT_ID).state(state).build_query()

    assert query == f"projects/123/merge_requests?state={state.value}"


def test_build_query_order_by_and_sort(client: GitLabClient) -> None:
    """Order-by and sort use their wire strings."""
    lister = client.merge_requests(TEST_PROJECT_ID)

    assert lister.order_by(MergeRequestOrderBy.UPDATED_AT).build_query() == (
        "projects/123/merge_requests?order_by=updated_at"
    )
    assert lister.sort(ListingSort.DESC).build_query() == "projects/123/merge_requests?sort=desc"


def test_build_query_multiple(client: GitLabClient) -> None:
    """Combined filters follow the declared order regardless of setter order."""
    query = (
        client.merge_requests(TEST_PROJECT_ID)
        .iid([456, 789])
        .sort(ListingSort.ASC)
        .order_by(MergeRequestOrderBy.CREATED_AT)
        .build_query()
    )

    assert query == "projects/123/merge_requests?iid[]=456&iid[]=789&order_by=created_at&sort=asc"


def test_list_merge_requests(client: GitLabClient, respx_mock: MockRouter) -> None:
    """Listing should hydrate merge request models and send the state filter."""
    route = respx_mock.get(
        "https://gitlab.example.com/api/v3/projects/123/merge_requests",
        params={"state": "merged"},
    ).mock(
        return_value=Response(200, json=[merge_request_payload(501, 42, TEST_PROJECT_ID)]),
    )

    merge_requests = client.merge_requests(TEST_PROJECT_ID).state(MergeRequestState.MERGED).list()

    assert [merge_request.iid for merge_request in merge_requests] == [42]
    assert merge_requests[0].project_id == TEST_PROJECT_ID
    assert route.called
