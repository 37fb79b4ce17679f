"""Error taxonomy shared by every layer of the GitLab listing client."""

from __future__ import annotations

from typing import Self


class GitLabError(RuntimeError):
    """Base error carrying a message plus a chain of context annotations.

    Each layer that forwards an error calls :meth:`annotate` with a short
    description of what it was doing, so the final message reads from the
    innermost failure outwards instead of being collapsed into one string.
    """

    def __init__(self, message: str) -> None:
        """Store the base message and start an empty context chain."""
        super().__init__(message)
        self.message = message
        self.context: list[str] = []

    def annotate(self, context: str) -> Self:
        """Append a context annotation and return the same error for re-raising."""
        self.context.append(context)
        return self

    def __str__(self) -> str:
        """Render the message followed by every context annotation."""
        if not self.context:
            return self.message
        return ": ".join([self.message, *self.context])


class ConfigurationError(GitLabError, ValueError):
    """Raised when the host, token, scheme or port is invalid."""


class TransportError(GitLabError):
    """Raised when a request could not be sent or the connection failed."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Remember the (redacted) URL that failed."""
        super().__init__(message)
        self.url = url


class StatusError(GitLabError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(self, message: str, *, status_code: int, body: bytes = b"") -> None:
        """Attach HTTP status metadata and the raw body to the error."""
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        """Prefix the rendered message with the status code."""
        return f"[{self.status_code}] {super().__str__()}"


class DecodeError(GitLabError):
    """Raised when a response body does not match the expected schema."""

    def __init__(self, message: str, *, body: bytes = b"") -> None:
        """Keep the raw body for diagnostics."""
        super().__init__(message)
        self.body = body


class NotFoundError(GitLabError):
    """Raised when a resolver scanned every page without finding a match."""

    def __init__(self, message: str, *, resource: str, identifier: str) -> None:
        """Record which resource type and identifier could not be resolved."""
        super().__init__(message)
        self.resource = resource
        self.identifier = identifier
