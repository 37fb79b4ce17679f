"""Command-line entry point for the glquery tool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, NoReturn, TypeVar

import typer

from glquery.config import load_settings
from glquery.errors import ConfigurationError, GitLabError
from glquery.gitlab_client import GitLabClient
from glquery.listers.projects import ProjectScope
from glquery.models import (
    GroupOrderBy,
    IssueState,
    ListingSort,
    ListingVisibility,
    MergeRequestOrderBy,
    MergeRequestState,
    ProjectOrderBy,
)
from glquery.resolver import DEFAULT_PAGE_SIZE

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from glquery.listers.base import Lister

app = typer.Typer(add_completion=False, help="Read-only GitLab listing and identifier resolution.")

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable verbose logging output.")] = False,
) -> None:
    """Configure logging before executing a sub-command."""
    _configure_logging(verbose)


@app.command()
def projects(
    scope: Annotated[ProjectScope | None, typer.Option("--scope", help="Restrict to a sub-collection.")] = None,
    archived: Annotated[bool | None, typer.Option("--archived/--no-archived", help="Limit by archived status.")] = None,
    visibility: Annotated[ListingVisibility | None, typer.Option("--visibility", help="Limit by visibility.")] = None,
    order_by: Annotated[ProjectOrderBy | None, typer.Option("--order-by", help="Field to order by.")] = None,
    sort: Annotated[ListingSort | None, typer.Option("--sort", help="Sort direction.")] = None,
    search: Annotated[str, typer.Option("--search", help="Search pattern.")] = "",
    simple: Annotated[bool | None, typer.Option("--simple/--full", help="Return only basic fields.")] = None,
    page: Annotated[int | None, typer.Option("--page", min=1, help="Page to fetch.")] = None,
    per_page: Annotated[int | None, typer.Option("--per-page", min=1, help="Items per page.")] = None,
) -> None:
    """List projects matching the given filters."""
    client = _client()
    lister = client.projects(scope).search(search)
    if archived is not None:
        lister = lister.archived(archived)
    if visibility is not None:
        lister = lister.visibility(visibility)
    if order_by is not None:
        lister = lister.order_by(order_by)
    if sort is not None:
        lister = lister.sort(sort)
    if simple is not None:
        lister = lister.simple(simple)
    records = _run(_paged(lister, page, per_page).list)
    _echo_records(records, lambda project: project.path_with_namespace or project.name)


@app.command()
def groups(
    owned: Annotated[bool, typer.Option("--owned", help="Only groups owned by the current user.")] = False,
    search: Annotated[str, typer.Option("--search", help="Search pattern.")] = "",
    order_by: Annotated[GroupOrderBy | None, typer.Option("--order-by", help="Field to order by.")] = None,
    sort: Annotated[ListingSort | None, typer.Option("--sort", help="Sort direction.")] = None,
) -> None:
    """List groups."""
    client = _client()
    if owned:
        records = _run(client.groups().owned().list)
    else:
        lister = client.groups().search(search)
        if order_by is not None:
            lister = lister.order_by(order_by)
        if sort is not None:
            lister = lister.sort(sort)
        records = _run(lister.list)
    _echo_records(records, lambda group: group.path)


@app.command()
def issues(
    state: Annotated[IssueState | None, typer.Option("--state", help="Issue state.")] = None,
    label: Annotated[list[str] | None, typer.Option("--label", help="Required label; repeatable.")] = None,
) -> None:
    """List issues visible to the current user."""
    lister = _client().issues()
    if state is not None:
        lister = lister.state(state)
    if label:
        lister = lister.labels(label)
    _echo_records(_run(lister.list), lambda issue: f"#{issue.iid} {issue.title}")


@app.command("merge-requests")
def merge_requests(
    project_id: Annotated[int, typer.Argument(help="Internal id of the project.")],
    state: Annotated[MergeRequestState | None, typer.Option("--state", help="Merge request state.")] = None,
    iid: Annotated[list[int] | None, typer.Option("--iid", help="Merge request iid; repeatable.")] = None,
    order_by: Annotated[MergeRequestOrderBy | None, typer.Option("--order-by", help="Field to order by.")] = None,
    sort: Annotated[ListingSort | None, typer.Option("--sort", help="Sort direction.")] = None,
) -> None:
    """List the merge requests of a project."""
    lister = _client().merge_requests(project_id)
    if iid:
        lister = lister.iid(iid)
    if state is not None:
        lister = lister.state(state)
    if order_by is not None:
        lister = lister.order_by(order_by)
    if sort is not None:
        lister = lister.sort(sort)
    _echo_records(_run(lister.list), lambda merge_request: f"!{merge_request.iid} {merge_request.title}")


@app.command("resolve-project")
def resolve_project(
    namespace: Annotated[str, typer.Argument(help="Namespace owning the project.")],
    name: Annotated[str, typer.Argument(help="Project name.")],
) -> None:
    """Print the internal id of ``NAMESPACE/NAME``."""
    resolver = _client().resolver()
    project = _run(lambda: resolver.resolve_project(namespace, name))
    typer.echo(f"{project.id}\t{namespace}/{name}")


@app.command("resolve-issue")
def resolve_issue(
    namespace: Annotated[str, typer.Argument(help="Namespace owning the project.")],
    name: Annotated[str, typer.Argument(help="Project name.")],
    iid: Annotated[int, typer.Argument(help="Issue number within the project.")],
) -> None:
    """Print the internal id of issue ``NAMESPACE/NAME#IID``."""
    resolver = _client().resolver()
    issue = _run(lambda: resolver.resolve_issue(namespace, name, iid))
    typer.echo(f"{issue.id}\t{namespace}/{name}#{iid}")


@app.command("resolve-merge-request")
def resolve_merge_request(
    namespace: Annotated[str, typer.Argument(help="Namespace owning the project.")],
    name: Annotated[str, typer.Argument(help="Project name.")],
    iid: Annotated[int, typer.Argument(help="Merge request number within the project.")],
) -> None:
    """Print the internal id of merge request ``NAMESPACE/NAME!IID``."""
    resolver = _client().resolver()
    merge_request = _run(lambda: resolver.resolve_merge_request(namespace, name, iid))
    typer.echo(f"{merge_request.id}\t{namespace}/{name}!{iid}")


@app.command()
def doctor() -> None:
    """Validate configuration and verify GitLab API connectivity."""
    client = _client()
    typer.echo(f"Loaded configuration for host: {client.settings.hostname}")
    version = _run(client.version)
    typer.echo(f"GitLab version: {version.version}")


def _client() -> GitLabClient:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _handle_settings_error(exc)
    return GitLabClient(settings)


def _paged(lister: Lister, page: int | None, per_page: int | None) -> Lister:
    if page is None and per_page is None:
        return lister
    return lister.paginate(page or 1, per_page or DEFAULT_PAGE_SIZE)


def _run(action: Callable[[], T]) -> T:
    try:
        return action()
    except GitLabError as exc:
        LOGGER.debug("Request failed", exc_info=exc)
        typer.secho(f"GitLab error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _echo_records(records: Iterable[Any], label: Callable[[Any], str]) -> None:
    for record in records:
        typer.echo(f"{record.id}\t{label(record)}")


def _handle_settings_error(exc: ValueError) -> NoReturn:
    typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
