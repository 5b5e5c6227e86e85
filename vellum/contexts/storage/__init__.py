"""
Storage Context

Responsibilities:
- Holds the session credential explicitly (SessionContext)
- Talks to the persistence API (ResumeAPI, AuthAPI)
- Keeps the list-view summary cache and its create/duplicate/delete actions

Owns: HTTP transport, credential handling, list-view state
Never: Edits document content or renders it
"""

from vellum.contexts.storage.client import API_URL, AuthAPI, ResumeAPI
from vellum.contexts.storage.exceptions import (
    DocumentNotFoundError,
    NetworkOrServerError,
    StorageError,
    UnauthorizedError,
)
from vellum.contexts.storage.session import SessionContext
from vellum.contexts.storage.summaries import DocumentList, DocumentSummary, SummaryCache

__all__ = [
    # Session and clients
    "SessionContext",
    "ResumeAPI",
    "AuthAPI",
    "API_URL",
    # List view
    "DocumentSummary",
    "SummaryCache",
    "DocumentList",
    # Errors
    "StorageError",
    "DocumentNotFoundError",
    "UnauthorizedError",
    "NetworkOrServerError",
]
