"""Custom exceptions for the editing context."""

from typing import Any, Optional


class MalformedDocumentError(ValueError):
    """
    Exception raised when a stored document cannot be decoded.

    Loading is aborted: no partial document and no all-defaults fallback
    is produced, so the caller must show an error state.

    Attributes:
        message: Error description
        document_id: Storage id of the document being loaded (if known)
        raw_snippet: Beginning of the undecodable payload
        original_error: The underlying decode error
    """

    def __init__(
        self,
        message: str,
        document_id: Optional[Any] = None,
        raw_snippet: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.document_id = document_id
        self.raw_snippet = raw_snippet
        self.original_error = original_error

        parts = [message]

        if document_id is not None:
            parts.append(f"Document: {document_id}")

        if raw_snippet:
            snippet = raw_snippet[:200] + "..." if len(raw_snippet) > 200 else raw_snippet
            parts.append(f"Payload:\n{snippet}")

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
