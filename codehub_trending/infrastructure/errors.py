"""Errors raised by the GitHub clients and extractors."""

from typing import Optional


class InvalidCredential(ValueError):
    """Raised when a client is constructed without a GitHub token."""
    pass


class FetchFailure(Exception):
    """Raised when a request fails or returns an unusable response."""

    def __init__(self, endpoint: str, status: Optional[int] = None, message: Optional[str] = None):
        self.endpoint = endpoint
        self.status = status
        detail = message or (f"HTTP {status}" if status is not None else "request failed")
        super().__init__(f"Fetching {endpoint} failed: {detail}")


class MalformedRecord(Exception):
    """Raised inside an extraction pass when an element lacks a required field."""
    pass
