"""Listers building and executing queries for each GitLab resource type."""

from . import base, groups, issues, merge_requests, projects

__all__ = [
    "base",
    "groups",
    "issues",
    "merge_requests",
    "projects",
]
