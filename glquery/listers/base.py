"""Generic immutable lister shared by every resource type."""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict

from glquery.errors import GitLabError
from glquery.models import Pagination
from glquery.query import QueryValue, encode_fields, encode_query

if TYPE_CHECKING:
    from glquery.gitlab_client import GitLabClient

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class QueryFilters(BaseModel):
    """Immutable filter set whose field declaration order is the query key order."""

    model_config = ConfigDict(frozen=True)

    def query_fields(self) -> list[tuple[str, QueryValue]]:
        """Return ``(key, value)`` pairs in declaration order, unset ones included."""
        return [(name, getattr(self, name)) for name in type(self).model_fields]


class NoFilters(QueryFilters):
    """Filter set for endpoints that accept none."""


class Lister(ABC, Generic[RecordT]):
    """Configured, immutable query over one resource collection.

    Every setter on a subclass returns a new lister; the receiver is never
    modified, so one lister can safely be reused as a template.
    """

    record_model: ClassVar[type[BaseModel]]
    filters_model: ClassVar[type[QueryFilters]] = NoFilters

    def __init__(
        self,
        client: GitLabClient,
        *,
        filters: QueryFilters | None = None,
        pagination: Pagination | None = None,
    ) -> None:
        """Bind the lister to a client with optional filters and pagination."""
        self._client = client
        self._filters = filters if filters is not None else self.filters_model()
        self._pagination = pagination

    @property
    def filters(self) -> QueryFilters:
        """Return the current filter set."""
        return self._filters

    @property
    def pagination(self) -> Pagination | None:
        """Return the pagination configured on this lister, if any."""
        return self._pagination

    @abstractmethod
    def base_path(self) -> str:
        """Return the resource path the query string is appended to."""

    def build_query(self) -> str:
        """Return the resource path followed by the encoded filters."""
        return encode_query(self.base_path(), self._filters.query_fields())

    def query_params(self) -> list[tuple[str, str]]:
        """Return the present filters as raw, unescaped ``(key, value)`` pairs."""
        return encode_fields(self._filters.query_fields())

    def paginate(self, page: int, per_page: int) -> Self:
        """Return a copy of this lister requesting the given page."""
        clone = copy.copy(self)
        clone._pagination = Pagination(page=page, per_page=per_page)
        return clone

    def list(self) -> list[RecordT]:
        """Issue one request with this lister's pagination and decode the page."""
        return self._fetch(self._pagination)

    def list_paginated(self, page: int, per_page: int) -> list[RecordT]:
        """Issue one request for the given page without touching this lister."""
        return self._fetch(Pagination(page=page, per_page=per_page))

    def _with_filters(self, **changes: Any) -> Self:
        clone = copy.copy(self)
        clone._filters = self._filters.model_copy(update=changes)
        return clone

    def _fetch(self, pagination: Pagination | None) -> list[RecordT]:
        query = self.build_query()
        LOGGER.debug("query: %s (pagination=%s)", query, pagination)
        try:
            return self._client.get_model(
                list[self.record_model],
                self.base_path(),
                self.query_params(),
                pagination,
            )
        except GitLabError as exc:
            exc.annotate(f"cannot get query {query}")
            raise


class ScopedLister(Lister[RecordT]):
    """Lister whose collection lives under a parent resource fixed at construction."""

    parent_path: ClassVar[str]
    collection: ClassVar[str]

    def __init__(
        self,
        client: GitLabClient,
        parent_id: int,
        *,
        filters: QueryFilters | None = None,
        pagination: Pagination | None = None,
    ) -> None:
        """Bind the lister to the parent's internal id."""
        super().__init__(client, filters=filters, pagination=pagination)
        self._parent_id = parent_id

    @property
    def parent_id(self) -> int:
        """Return the internal id of the parent resource."""
        return self._parent_id

    def base_path(self) -> str:
        """Return ``<parent>/<id>/<collection>``."""
        return f"{self.parent_path}/{self._parent_id}/{self.collection}"
