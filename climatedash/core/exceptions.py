"""Fetch failures surfaced by the ingestion transport."""


class FetchError(Exception):
    """Base error for a whole-fetch failure the dashboard must report."""


class TransportError(FetchError):
    """Raised on network errors and non-2xx HTTP responses."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class PayloadError(FetchError):
    """Raised when the body is not JSON or its top level is not an array."""


class EmptyResultError(FetchError):
    """Raised when records were received but none survived normalization."""
