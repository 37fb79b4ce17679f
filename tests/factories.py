"""Factories for constructing API payloads and fake transports in tests."""

from __future__ import annotations

from typing import Any

import orjson


def project_payload(project_id: int, name: str, namespace: str) -> dict[str, Any]:
    """Return a project payload as the projects endpoint would."""
    return {
        "id": project_id,
        "name": name,
        "path": name.lower(),
        "path_with_namespace": f"{namespace}/{name.lower()}",
        "namespace": {"id": project_id * 10, "name": namespace, "path": namespace.lower()},
        "archived": False,
    }


def issue_payload(issue_id: int, iid: int, project_id: int) -> dict[str, Any]:
    """Return an issue payload scoped to ``project_id``."""
    return {
        "id": issue_id,
        "iid": iid,
        "project_id": project_id,
        "title": f"Issue {iid}",
        "state": "opened",
        "labels": ["bug"],
        "author": {"id": 10, "username": "alice", "name": "Alice"},
    }


def merge_request_payload(merge_request_id: int, iid: int, project_id: int) -> dict[str, Any]:
    """Return a merge request payload scoped to ``project_id``."""
    return {
        "id": merge_request_id,
        "iid": iid,
        "project_id": project_id,
        "title": f"Merge request {iid}",
        "state": "opened",
        "source_branch": "feature",
        "target_branch": "main",
        "author": {"id": 10, "username": "alice", "name": "Alice"},
    }


class RecordingTransport:
    """Transport returning queued responses and remembering every URL fetched."""

    def __init__(self, responses: list[tuple[int, Any]] | None = None) -> None:
        """Queue ``(status, payload)`` pairs; payloads are JSON-encoded unless bytes."""
        self.responses = list(responses or [])
        self.urls: list[str] = []

    def queue(self, payload: Any, status: int = 200) -> None:
        """Append one response to the queue."""
        self.responses.append((status, payload))

    def fetch(self, url: str) -> tuple[int, bytes]:
        """Record ``url`` and pop the next queued response."""
        self.urls.append(url)
        if not self.responses:
            msg = f"Unexpected request: {url}"
            raise AssertionError(msg)
        status, payload = self.responses.pop(0)
        body = payload if isinstance(payload, bytes) else orjson.dumps(payload)
        return status, body
