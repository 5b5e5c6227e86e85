"""
Persistence API client.

Thin requests-based wrappers over the REST routes:
    GET    /resumes            list the user's documents (newest first)
    GET    /resumes/{id}       one document
    POST   /resumes            create (server assigns id and timestamps)
    PUT    /resumes/{id}       replace title, template_id and resume_data
    DELETE /resumes/{id}       delete
    POST   /auth/login         {email, password} -> {token, user}
    POST   /auth/register      {email, password, ...} -> {token, user}

Every resume call carries the session's bearer token. Responses are mapped
onto the storage exception taxonomy; there are no retries.
"""

import os
import time
from typing import Any, Dict, List, Mapping, Optional, Union

import requests
from dotenv import load_dotenv

from vellum.contexts.editing.document import ResumeDocument
from vellum.contexts.editing.normalizer import load_document
from vellum.contexts.storage.exceptions import (
    DocumentNotFoundError,
    NetworkOrServerError,
    UnauthorizedError,
)
from vellum.contexts.storage.logger import _log_info, log_request
from vellum.contexts.storage.session import SessionContext
from vellum.contexts.storage.summaries import DocumentSummary

load_dotenv()
API_URL = os.getenv("VELLUM_API_URL", "http://localhost:5000/api")
API_TIMEOUT = float(os.getenv("VELLUM_API_TIMEOUT", "10"))


def _error_detail(response) -> str:
    """Best-effort error text from a failed response ({"error"} or {"errors": [{"msg"}]})."""
    try:
        body = response.json()
    except ValueError:
        return (response.text or "").strip()[:200]

    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])
        if isinstance(body.get("errors"), list):
            messages = [str(e.get("msg", e)) if isinstance(e, dict) else str(e) for e in body["errors"]]
            return "; ".join(messages)
    return str(body)[:200]


class _APIClient:
    """Shared request handling for the API wrappers."""

    def __init__(
        self,
        session: Optional[SessionContext] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http=None,
    ):
        """
        Args:
            session: Credential holder (default: SessionContext.from_env())
            base_url: API root (default: VELLUM_API_URL from environment)
            timeout: Per-request timeout in seconds (default: VELLUM_API_TIMEOUT)
            http: Object with requests.Session's request() signature
        """
        self.session = session if session is not None else SessionContext.from_env()
        self.base_url = (base_url or API_URL).rstrip("/")
        self.timeout = API_TIMEOUT if timeout is None else timeout
        self.http = http if http is not None else requests.Session()

    def _request(self, method: str, path: str, authenticated: bool = True, **kwargs) -> Any:
        """
        Send one request and return the decoded JSON body (None when empty).

        Raises:
            UnauthorizedError: No session, or 401/403
            DocumentNotFoundError: 404
            NetworkOrServerError: Transport failure, other non-2xx, bad body
        """
        url = f"{self.base_url}{path}"
        headers = self.session.auth_headers() if authenticated else {}

        start_time = time.time()
        try:
            response = self.http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise NetworkOrServerError(f"{method} {path} failed", url=url, original_error=e) from e

        log_request(method, path, response.status_code, time.time() - start_time)

        status = response.status_code
        if status in (401, 403):
            raise UnauthorizedError(
                f"Credential rejected: {_error_detail(response)}", status_code=status, url=url
            )
        if status == 404:
            raise DocumentNotFoundError(_error_detail(response) or "Not found", status_code=status, url=url)
        if not 200 <= status < 300:
            raise NetworkOrServerError(
                f"Server error: {_error_detail(response)}", status_code=status, url=url
            )

        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkOrServerError(
                "Response body is not valid JSON", status_code=status, url=url, original_error=e
            ) from e


class ResumeAPI(_APIClient):
    """Document CRUD against the persistence API."""

    def list_documents(self) -> List[DocumentSummary]:
        rows = self._request("GET", "/resumes")
        if not isinstance(rows, list):
            raise NetworkOrServerError("Expected a list of documents", url=f"{self.base_url}/resumes")
        return [DocumentSummary.from_row(row) for row in rows if isinstance(row, Mapping)]

    def get_document(self, document_id: Any) -> ResumeDocument:
        """
        Fetch and normalize one document.

        Raises:
            DocumentNotFoundError: If no such document exists
            MalformedDocumentError: If its resume_data cannot be decoded
        """
        return self._load(self._request("GET", f"/resumes/{document_id}"))

    def create_document(self, partial: Union[ResumeDocument, Mapping[str, Any]]) -> ResumeDocument:
        """
        Create a document. The server assigns id and timestamps and defaults
        template_id to "modern".

        Args:
            partial: A document, or a mapping with title/template_id/resume_data
        """
        payload = partial.to_payload() if isinstance(partial, ResumeDocument) else dict(partial)
        document = self._load(self._request("POST", "/resumes", json=payload))
        _log_info(f"Created document {document.id}")
        return document

    def update_document(self, document_id: Any, doc: ResumeDocument) -> ResumeDocument:
        return self._load(self._request("PUT", f"/resumes/{document_id}", json=doc.to_payload()))

    def delete_document(self, document_id: Any) -> bool:
        self._request("DELETE", f"/resumes/{document_id}")
        return True

    def _load(self, row: Any) -> ResumeDocument:
        if not isinstance(row, Mapping):
            raise NetworkOrServerError("Expected a document object", url=self.base_url)
        return load_document(row)


class AuthAPI(_APIClient):
    """Login and registration. These calls need no session."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, http=None):
        super().__init__(session=SessionContext(), base_url=base_url, timeout=timeout, http=http)

    def login(self, email: str, password: str) -> SessionContext:
        return self._start_session("/auth/login", {"email": email, "password": password})

    def register(self, email: str, password: str, **profile) -> SessionContext:
        """Register a user; extra profile fields (e.g. name) are sent as given."""
        return self._start_session("/auth/register", {"email": email, "password": password, **profile})

    def _start_session(self, path: str, payload: Dict[str, Any]) -> SessionContext:
        body = self._request("POST", path, authenticated=False, json=payload)
        if not isinstance(body, Mapping) or not body.get("token"):
            raise NetworkOrServerError("Auth response carried no token", url=f"{self.base_url}{path}")
        return SessionContext.start(body["token"], body.get("user"))
