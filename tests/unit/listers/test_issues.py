"""Tests for the issue listers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from glquery.models import IssueOrderBy, IssueState, ListingSort
from tests.factories import issue_payload

if TYPE_CHECKING:
    from glquery.gitlab_client import GitLabClient
    from tests.factories import RecordingTransport


def test_global_issue_query(client: GitLabClient) -> None:
    """Global issues accept state, labels, milestone and ordering."""
    query = (
        client.issues()
        .sort(ListingSort.ASC)
        .labels(["bug", "ui"])
        .state(IssueState.OPENED)
        .build_query()
    )

    assert client.issues().build_query() == "issues"
    assert query == "issues?state=opened&labels=bug,ui&sort=asc"


def test_project_issue_query(client: GitLabClient) -> None:
    """Project issues put the iid filter first and the project id in the path."""
    query = (
        client.project_issues(7)
        .order_by(IssueOrderBy.UPDATED_AT)
        .milestone("v1.0")
        .iid([3, 1])
        .build_query()
    )

    assert query == "projects/7/issues?iid[]=3&iid[]=1&milestone=v1.0&order_by=updated_at"
    assert client.project_issues(7).iid([3]).build_query() == "projects/7/issues?iid=3"


def test_group_issue_query(client: GitLabClient) -> None:
    """Group issues live under the group path."""
    lister = client.group_issues(9).state(IssueState.CLOSED)

    assert lister.group_id == 9
    assert lister.build_query() == "groups/9/issues?state=closed"


def test_list_project_issues(fake_client: GitLabClient, transport: RecordingTransport) -> None:
    """Listing should decode issues and keep the filters before the token."""
    transport.queue([issue_payload(100, 1, 7), issue_payload(101, 2, 7)])

    issues = fake_client.project_issues(7).state(IssueState.ALL).list_paginated(1, 20)

    assert [issue.iid for issue in issues] == [1, 2]
    assert transport.urls == [
        "https://gitlab.example.com/api/v3/projects/7/issues?state=all"
        "&private_token=XXXXXXXXXXXXXXXXXXXX&page=1&per_page=20",  # pragma: allowlist secret
    ]
