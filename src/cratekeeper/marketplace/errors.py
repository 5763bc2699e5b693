# ABOUTME: Error taxonomy for catalog identification and price lookups.
# ABOUTME: Raised by the resolver and aggregator; rendered by the CLI.


class CatalogError(Exception):
    """Base class for failures surfaced to callers of the marketplace layer."""


class InvalidQuery(CatalogError):
    """Raised when a lookup is missing every field it needs."""


class MissingCredential(CatalogError):
    """Raised when no marketplace access token is configured."""


class UpstreamError(CatalogError):
    """Raised when a required upstream source answers with a non-success status.

    status_code is None when the request never produced a response
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InternalError(CatalogError):
    """Raised for unexpected failures such as a malformed response body."""
