"""Typed, read-only client for listing GitLab (API v3) resources.

Listers build canonical query strings for projects, groups, issues and merge
requests; the resolver turns ``namespace/name`` and ``iid`` coordinates into
records carrying server-internal ids.

Environment:
    GITLAB_HOSTNAME - GitLab host name (default: gitlab.com)
    GITLAB_TOKEN    - 20 character private token (required)
"""

from glquery.config import ClientSettings, load_settings
from glquery.errors import (
    ConfigurationError,
    DecodeError,
    GitLabError,
    NotFoundError,
    StatusError,
    TransportError,
)
from glquery.gitlab_client import API_VERSION, GitLabClient

__version__ = "0.1.0"
__all__ = [
    "API_VERSION",
    "ClientSettings",
    "ConfigurationError",
    "DecodeError",
    "GitLabClient",
    "GitLabError",
    "NotFoundError",
    "StatusError",
    "TransportError",
    "__version__",
    "load_settings",
]
