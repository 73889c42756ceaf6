"""Custom exceptions for mypod.

All exceptions include an HTTP status_code attribute so a host
application can map them onto responses without a lookup table.
"""


class MyPodError(Exception):
    """Base exception for mypod.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(MyPodError):
    """Entity or argument is structurally incomplete.

    Raised when an Artist, Album or Song is built without its natural id
    or name, or when a playlist name is blank. Nothing is persisted.
    """

    status_code: int = 400  # Bad Request


class NotFoundError(MyPodError):
    """Referenced entity no longer resolves in storage.

    Raised by mutations that re-resolve their arguments by id. The
    operation is aborted without any partial change.
    """

    status_code: int = 404  # Not Found


class ConstraintError(MyPodError):
    """Storage rejected a write.

    Raised on duplicate primary keys or broken foreign keys. Not retried.
    """

    status_code: int = 409  # Conflict


class TransportError(MyPodError):
    """Catalog request failed.

    Raised on non-200 responses, timeouts, network failures and
    unparseable payloads.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)


class IngestionError(MyPodError):
    """Ingestion of a search term failed.

    Wraps the underlying failure (available as ``__cause__``) together
    with the term being processed when it happened.

    Attributes:
        term: Search term that was being ingested.
    """

    status_code: int = 500  # Internal Server Error

    def __init__(self, term: str, message: str) -> None:
        self.term = term
        super().__init__(f"Failed to ingest search term '{term}': {message}")
