"""Custom exceptions for the storage context."""

from typing import Optional


class StorageError(Exception):
    """
    Base exception for persistence API failures.

    Attributes:
        message: Error description
        status_code: HTTP status returned by the server (None for transport failures)
        url: Request URL
        original_error: The underlying transport or decode error
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.url = url
        self.original_error = original_error

        parts = [message]

        if status_code is not None:
            parts.append(f"Status: {status_code}")

        if url:
            parts.append(f"URL: {url}")

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class DocumentNotFoundError(StorageError):
    """The requested document does not exist (or belongs to another user)."""


class UnauthorizedError(StorageError):
    """
    No session, or the server rejected the credential (401/403).

    Callers should send the user back to login rather than retry.
    """


class NetworkOrServerError(StorageError):
    """Transport failure, timeout, unexpected status or undecodable response body."""
