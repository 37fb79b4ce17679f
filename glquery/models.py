"""Pydantic models describing GitLab entities and listing parameters."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class ListingSort(StrEnum):
    """Sort direction accepted by every listing endpoint."""

    ASC = "asc"
    DESC = "desc"


class ListingVisibility(StrEnum):
    """Project visibility levels."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"


class ProjectOrderBy(StrEnum):
    """Fields a project listing can be ordered by."""

    ID = "id"
    NAME = "name"
    PATH = "path"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    LAST_ACTIVITY_AT = "last_activity_at"


class GroupOrderBy(StrEnum):
    """Fields a group listing can be ordered by."""

    NAME = "name"
    PATH = "path"


class IssueState(StrEnum):
    """Issue states usable as a listing filter."""

    OPENED = "opened"
    CLOSED = "closed"
    ALL = "all"


class IssueOrderBy(StrEnum):
    """Fields an issue listing can be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class MergeRequestState(StrEnum):
    """Merge request states usable as a listing filter."""

    MERGED = "merged"
    OPENED = "opened"
    CLOSED = "closed"
    ALL = "all"


class MergeRequestOrderBy(StrEnum):
    """Fields a merge request listing can be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class Pagination(BaseModel):
    """Page number and page size sent with a single request."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    per_page: int = Field(ge=1)


class ById(BaseModel):
    """Address a project by its server-internal id."""

    model_config = ConfigDict(frozen=True)

    id: int


class ByNamespacePath(BaseModel):
    """Address a project by its ``namespace/name`` path."""

    model_config = ConfigDict(frozen=True)

    path: str

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        namespace, _, name = value.partition("/")
        if value.count("/") != 1 or not namespace or not name:
            msg = f"project path must look like 'namespace/name', got {value!r}"
            raise ValueError(msg)
        return value


ListingId = ById | ByNamespacePath


class User(BaseModel):
    """Subset of GitLab user metadata."""

    id: int
    username: str
    name: str | None = None
    state: str | None = None
    avatar_url: HttpUrl | None = None
    web_url: HttpUrl | None = None


class Namespace(BaseModel):
    """Namespace (user or group) owning a project."""

    id: int
    name: str
    path: str
    kind: str | None = None


class Group(BaseModel):
    """GitLab group details."""

    id: int
    name: str
    path: str
    description: str | None = None
    visibility_level: int | None = None
    web_url: HttpUrl | None = None


class Project(BaseModel):
    """GitLab project metadata returned from the projects endpoints."""

    id: int
    name: str
    path: str | None = None
    path_with_namespace: str | None = None
    namespace: Namespace | None = None
    description: str | None = None
    default_branch: str | None = None
    archived: bool | None = None
    web_url: HttpUrl | None = None


class Milestone(BaseModel):
    """Milestone attached to an issue or merge request."""

    id: int
    iid: int | None = None
    project_id: int | None = None
    title: str
    state: str | None = None


def _empty_labels() -> list[str]:
    return []


class Issue(BaseModel):
    """Issue payload fields used for listing and iid resolution."""

    id: int
    iid: int
    project_id: int
    title: str
    state: str
    description: str | None = None
    labels: list[str] = Field(default_factory=_empty_labels)
    milestone: Milestone | None = None
    author: User | None = None
    assignee: User | None = None
    created_at: str | None = None
    updated_at: str | None = None
    web_url: HttpUrl | None = None


class MergeRequest(BaseModel):
    """Merge request payload fields used for listing and iid resolution."""

    id: int
    iid: int
    project_id: int
    title: str
    state: str
    description: str | None = None
    source_branch: str | None = None
    target_branch: str | None = None
    source_project_id: int | None = None
    target_project_id: int | None = None
    labels: list[str] = Field(default_factory=_empty_labels)
    work_in_progress: bool | None = None
    merge_status: str | None = None
    author: User | None = None
    assignee: User | None = None
    milestone: Milestone | None = None
    created_at: str | None = None
    updated_at: str | None = None
    web_url: HttpUrl | None = None


class Version(BaseModel):
    """Server version reported by the ``version`` endpoint."""

    version: str
    revision: str | None = None
