"""Serialize ordered, optional filter fields into canonical query strings."""

from collections.abc import Sequence
from enum import Enum
from urllib.parse import quote

from glquery.models import ById, ByNamespacePath, ListingId

Scalar = bool | int | str | Enum
QueryValue = Scalar | Sequence[Scalar] | None


def encode_scalar(value: Scalar) -> str:
    """Render one filter value the way the API expects it on the wire."""
    # bool first: it is also an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def encode_params(key: str, value: QueryValue) -> list[tuple[str, str]]:
    """Return the raw ``(key, value)`` pairs for a single field, possibly none."""
    if value is None:
        return []
    if isinstance(value, str | bool | int | Enum):
        if value == "":
            return []
        return [(key, encode_scalar(value))]
    values = list(value)
    if len(values) == 1:
        return [(key, encode_scalar(values[0]))]
    return [(f"{key}[]", encode_scalar(item)) for item in values]


def encode_pairs(key: str, value: QueryValue) -> list[str]:
    """Return the ``key=value`` fragments for a single field, possibly none."""
    return [f"{name}={text}" for name, text in encode_params(key, value)]


def encode_fields(fields: Sequence[tuple[str, QueryValue]]) -> list[tuple[str, str]]:
    """Flatten ordered fields into raw ``(key, value)`` pairs, skipping unset ones."""
    return [pair for key, value in fields for pair in encode_params(key, value)]


def encode_query(base_path: str, fields: Sequence[tuple[str, QueryValue]]) -> str:
    """Append the present fields to ``base_path`` in the order they are given.

    Unset fields are skipped entirely. When nothing is set the base path is
    returned unchanged, without a trailing ``?``. Values are not escaped here;
    :func:`escape_params` is applied when the final URL is assembled.
    """
    fragments = [f"{key}={value}" for key, value in encode_fields(fields)]
    if not fragments:
        return base_path
    return f"{base_path}?{'&'.join(fragments)}"


def escape_params(params: Sequence[tuple[str, str]]) -> str:
    """Join raw pairs into a query string with every value percent-escaped."""
    return "&".join(f"{quote(key, safe='[]')}={quote(value, safe='')}" for key, value in params)


def encode_path_segment(listing_id: ListingId) -> str:
    """Render a project identifier as a single URL path segment."""
    if isinstance(listing_id, ById):
        return str(listing_id.id)
    if isinstance(listing_id, ByNamespacePath):
        return quote(listing_id.path, safe="")
    msg = f"Unsupported project identifier: {listing_id!r}"
    raise TypeError(msg)
