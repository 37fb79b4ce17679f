"""Tests for query string and path segment encoding."""

import pytest

from glquery.models import ById, ByNamespacePath, ListingSort, MergeRequestOrderBy
from glquery.query import encode_fields, encode_pairs, encode_path_segment, encode_query, escape_params


def test_encode_query_without_fields_returns_bare_path() -> None:
    """No present field should leave the base path untouched, without a '?'."""
    assert encode_query("projects", []) == "projects"
    assert encode_query("projects", [("archived", None), ("search", "")]) == "projects"


def test_encode_query_keeps_given_order_and_skips_unset_fields() -> None:
    """Present fields are joined in order with no trailing separator."""
    query = encode_query(
        "projects",
        [("archived", True), ("visibility", None), ("search", "Pattern"), ("simple", False)],
    )

    assert query == "projects?archived=true&search=Pattern&simple=false"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, ["flag=true"]),
        (False, ["flag=false"]),
        (0, ["flag=0"]),
        (ListingSort.DESC, ["flag=desc"]),
        (MergeRequestOrderBy.CREATED_AT, ["flag=created_at"]),
        ("", []),
        (None, []),
        ((), []),
    ],
)
def test_encode_pairs_scalars(value: object, expected: list[str]) -> None:
    """Booleans, enums and integers serialize to their wire strings."""
    assert encode_pairs("flag", value) == expected  # type: ignore[arg-type]


def test_encode_pairs_multi_valued_fields() -> None:
    """One element uses plain notation; several use repeated bracket keys in order."""
    assert encode_pairs("iid", (456,)) == ["iid=456"]
    assert encode_pairs("iid", (789, 456, 123)) == ["iid[]=789", "iid[]=456", "iid[]=123"]


def test_encode_path_segment_escapes_namespace_separator() -> None:
    """A namespaced project path must become a single path segment."""
    assert encode_path_segment(ByNamespacePath(path="group/project")) == "group%2Fproject"
    assert encode_path_segment(ById(id=123)) == "123"


@pytest.mark.parametrize("path", ["project", "a/b/c", "/project", "group/"])
def test_namespace_path_requires_one_separator(path: str) -> None:
    """Paths without exactly one non-empty namespace and name are rejected."""
    with pytest.raises(ValueError, match="namespace/name"):
        ByNamespacePath(path=path)


def test_encode_fields_keeps_values_raw() -> None:
    """Pairs handed to the client are unescaped; escaping happens once, at URL assembly."""
    pairs = encode_fields([("search", "C++ & co"), ("iid", (1, 2)), ("archived", None)])

    assert pairs == [("search", "C++ & co"), ("iid[]", "1"), ("iid[]", "2")]
    assert escape_params(pairs) == "search=C%2B%2B%20%26%20co&iid[]=1&iid[]=2"
