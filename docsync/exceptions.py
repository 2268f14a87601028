"""Errors raised by the documentation sync pipeline."""


class DocSyncError(Exception):
    """Base class for errors that abort a sync run."""


class FetchError(DocSyncError):
    """A documentation fetch failed (network error or non-success status)."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")


class ParseError(DocSyncError):
    """A skill document or persisted file could not be parsed."""


class CollaboratorError(DocSyncError):
    """The LLM collaborator returned a response that could not be used."""
