"""Cursor used to walk listing pages one request at a time."""

from dataclasses import dataclass

from glquery.models import Pagination


@dataclass
class PaginationCursor:
    """Track the page to request next for a fixed page size."""

    per_page: int
    page: int = 1

    def __post_init__(self) -> None:
        """Reject page numbers and sizes the API would not accept."""
        if self.per_page < 1 or self.page < 1:
            msg = f"page and per_page must be positive, got page={self.page} per_page={self.per_page}"
            raise ValueError(msg)

    def current(self) -> Pagination:
        """Return the pagination for the page the cursor points at."""
        return Pagination(page=self.page, per_page=self.per_page)

    def advance(self) -> None:
        """Move to the next page."""
        self.page += 1

    def is_last_page(self, count: int) -> bool:
        """Return True when a page with ``count`` items cannot be followed by another.

        The API does not report totals up front, so an underfull page (an empty
        one included) is the only end-of-results signal. A page holding exactly
        ``per_page`` items always needs one more request to confirm the end.
        """
        return count < self.per_page
