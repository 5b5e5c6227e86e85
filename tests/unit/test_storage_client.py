"""Unit tests for the persistence API client, auth client and session context."""

import json

import pytest
import requests

from tests.conftest import API_BASE, FakeHttp, FakeResponse
from vellum.contexts.editing import MalformedDocumentError, ResumeDocument
from vellum.contexts.storage import (
    AuthAPI,
    DocumentNotFoundError,
    NetworkOrServerError,
    ResumeAPI,
    SessionContext,
    StorageError,
    UnauthorizedError,
)
from vellum.contexts.storage import session as session_module


def _row(document_id=1, title="Resume", resume_data=None, **extra):
    return {
        "id": document_id,
        "title": title,
        "template_id": "modern",
        "resume_data": json.dumps(resume_data or {}),
        "created_at": "2025-01-01T00:00:00.000Z",
        "updated_at": "2025-01-02T00:00:00.000Z",
        **extra,
    }


# ============================================================================
# ResumeAPI
# ============================================================================


@pytest.mark.unit
def test_requests_carry_bearer_token(resume_api, fake_http):
    """Test that every call sends the session credential and timeout."""
    fake_http.routes[("GET", "/resumes")] = FakeResponse(200, [])
    resume_api.list_documents()

    call = fake_http.calls[0]
    assert call["headers"] == {"Authorization": "Bearer test-token"}
    assert call["timeout"] == 5


@pytest.mark.unit
def test_list_documents_returns_summaries(resume_api, fake_http):
    """Test list rows become summaries in server order."""
    fake_http.routes[("GET", "/resumes")] = FakeResponse(
        200, [_row(2, "Newer"), _row(1, "Older")]
    )

    summaries = resume_api.list_documents()

    assert [s.id for s in summaries] == [2, 1]
    assert summaries[0].title == "Newer"
    assert summaries[0].updated_at == "2025-01-02T00:00:00.000Z"


@pytest.mark.unit
def test_get_document_normalizes_encoded_data(resume_api, fake_http):
    """Test a row with JSON-string resume_data comes back as a full document."""
    fake_http.routes[("GET", "/resumes/1")] = FakeResponse(
        200, _row(1, resume_data={"skills": ["Python"]})
    )

    doc = resume_api.get_document(1)

    assert doc.id == 1
    assert doc.skills == ("Python",)
    assert doc.personal_info.full_name == ""


@pytest.mark.unit
def test_get_document_malformed_data(resume_api, fake_http):
    """Test undecodable stored data surfaces as MalformedDocumentError."""
    fake_http.routes[("GET", "/resumes/1")] = FakeResponse(200, {"id": 1, "resume_data": "{oops"})

    with pytest.raises(MalformedDocumentError):
        resume_api.get_document(1)


@pytest.mark.unit
def test_create_document_sends_payload(resume_api, fake_http):
    """Test create posts title, template_id and resume_data and returns the stored row."""
    fake_http.routes[("POST", "/resumes")] = lambda body: FakeResponse(
        201, _row(10, body["title"], body["resume_data"])
    )

    doc = resume_api.create_document(ResumeDocument.empty(title="Draft"))

    sent = fake_http.calls[0]["json"]
    assert sent["title"] == "Draft"
    assert sent["template_id"] == "modern"
    assert set(sent["resume_data"]) == {"personalInfo", "workExperience", "education", "skills"}
    assert doc.id == 10
    assert doc.created_at == "2025-01-01T00:00:00.000Z"


@pytest.mark.unit
def test_update_document(resume_api, fake_http):
    """Test update puts the document payload to its id route."""
    fake_http.routes[("PUT", "/resumes/4")] = lambda body: FakeResponse(200, _row(4, body["title"]))

    doc = resume_api.update_document(4, ResumeDocument.empty(title="Renamed"))

    assert fake_http.calls[0]["method"] == "PUT"
    assert doc.title == "Renamed"


@pytest.mark.unit
def test_delete_document(resume_api, fake_http):
    """Test delete acknowledges success."""
    fake_http.routes[("DELETE", "/resumes/4")] = FakeResponse(
        200, {"message": "Resume deleted successfully"}
    )

    assert resume_api.delete_document(4) is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "status, error_cls",
    [
        (401, UnauthorizedError),
        (403, UnauthorizedError),
        (404, DocumentNotFoundError),
        (400, NetworkOrServerError),
        (500, NetworkOrServerError),
        (503, NetworkOrServerError),
    ],
)
def test_status_codes_map_to_errors(resume_api, fake_http, status, error_cls):
    """Test each failure status maps to its storage error."""
    fake_http.routes[("GET", "/resumes/1")] = FakeResponse(status, {"error": "nope"})

    with pytest.raises(error_cls) as exc_info:
        resume_api.get_document(1)

    assert exc_info.value.status_code == status
    assert isinstance(exc_info.value, StorageError)


@pytest.mark.unit
def test_validation_errors_are_reported(resume_api, fake_http):
    """Test express-validator style {"errors": [{"msg"}]} bodies appear in the message."""
    fake_http.routes[("POST", "/resumes")] = FakeResponse(
        400, {"errors": [{"msg": "Title is required"}]}
    )

    with pytest.raises(NetworkOrServerError, match="Title is required"):
        resume_api.create_document({"title": ""})


@pytest.mark.unit
def test_transport_failure_maps_to_network_error(resume_api, fake_http):
    """Test timeouts and connection errors become NetworkOrServerError."""
    fake_http.routes[("GET", "/resumes")] = requests.Timeout("read timed out")

    with pytest.raises(NetworkOrServerError) as exc_info:
        resume_api.list_documents()

    assert isinstance(exc_info.value.original_error, requests.Timeout)


@pytest.mark.unit
def test_undecodable_body_maps_to_network_error(resume_api, fake_http):
    """Test a 200 with a non-JSON body is a server error."""
    fake_http.routes[("GET", "/resumes")] = FakeResponse(200, text="<html>proxy error</html>")

    with pytest.raises(NetworkOrServerError, match="not valid JSON"):
        resume_api.list_documents()


@pytest.mark.unit
def test_no_session_fails_before_any_request(fake_http):
    """Test an inactive session raises UnauthorizedError without touching the network."""
    api = ResumeAPI(session=SessionContext(), base_url=API_BASE, http=fake_http)

    with pytest.raises(UnauthorizedError):
        api.list_documents()
    assert fake_http.calls == []


# ============================================================================
# AuthAPI and SessionContext
# ============================================================================


@pytest.mark.unit
def test_login_starts_session():
    """Test login returns an active session with token and user."""
    http = FakeHttp(
        {("POST", "/auth/login"): FakeResponse(200, {"token": "abc", "user": {"email": "a@b.c"}})}
    )

    session = AuthAPI(base_url=API_BASE, http=http).login("a@b.c", "pw")

    assert session.is_active
    assert session.token == "abc"
    assert session.user == {"email": "a@b.c"}
    assert "Authorization" not in http.calls[0]["headers"]
    assert http.calls[0]["json"] == {"email": "a@b.c", "password": "pw"}


@pytest.mark.unit
def test_login_rejected():
    """Test bad credentials raise UnauthorizedError."""
    http = FakeHttp({("POST", "/auth/login"): FakeResponse(401, {"error": "Invalid credentials"})})

    with pytest.raises(UnauthorizedError, match="Invalid credentials"):
        AuthAPI(base_url=API_BASE, http=http).login("a@b.c", "wrong")


@pytest.mark.unit
def test_register_sends_profile_fields():
    """Test register forwards extra profile fields."""
    http = FakeHttp({("POST", "/auth/register"): FakeResponse(201, {"token": "t", "user": {}})})

    AuthAPI(base_url=API_BASE, http=http).register("a@b.c", "pw", name="Ada")

    assert http.calls[0]["json"] == {"email": "a@b.c", "password": "pw", "name": "Ada"}


@pytest.mark.unit
def test_auth_response_without_token():
    """Test an auth reply lacking a token is a server error."""
    http = FakeHttp({("POST", "/auth/login"): FakeResponse(200, {"user": {}})})

    with pytest.raises(NetworkOrServerError):
        AuthAPI(base_url=API_BASE, http=http).login("a@b.c", "pw")


@pytest.mark.unit
def test_session_lifecycle():
    """Test start, guard and end."""
    session = SessionContext.start("tok", {"email": "ada@example.com"})
    assert session.require_session() == "tok"

    session.end()
    assert not session.is_active
    assert session.user is None
    with pytest.raises(UnauthorizedError):
        session.require_session()


@pytest.mark.unit
def test_session_start_requires_token():
    """Test that an empty token cannot start a session."""
    with pytest.raises(UnauthorizedError):
        SessionContext.start("")


@pytest.mark.unit
def test_session_from_env(monkeypatch):
    """Test from_env reads VELLUM_TOKEN and is inactive when it is unset."""
    monkeypatch.setattr(session_module, "VELLUM_TOKEN", "env-token")
    assert SessionContext.from_env().token == "env-token"

    monkeypatch.setattr(session_module, "VELLUM_TOKEN", "")
    assert not SessionContext.from_env().is_active
