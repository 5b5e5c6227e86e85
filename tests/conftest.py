"""Shared fixtures: isolated event log, fake HTTP transport, sample documents."""

import json
from pathlib import Path

import pytest

from vellum.contexts.editing import normalize_document
from vellum.contexts.storage import ResumeAPI, SessionContext

FIXTURES_PATH = Path(__file__).parent / "fixtures"
API_BASE = "http://api.test/api"


class FakeResponse:
    """Just enough of requests.Response for the API client."""

    def __init__(self, status_code: int = 200, payload=None, text: str = None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        return json.loads(self.text)


class FakeHttp:
    """
    Stand-in for requests.Session that answers from a route table.

    Routes map (method, path) to a FakeResponse, an exception to raise, or a
    callable taking the request's json body and returning a FakeResponse.
    Unrouted requests get a 404. Every request is recorded in calls.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        path = url[len(API_BASE):] if url.startswith(API_BASE) else url
        self.calls.append(
            {
                "method": method,
                "path": path,
                "headers": headers or {},
                "timeout": timeout,
                "json": kwargs.get("json"),
            }
        )
        reply = self.routes.get((method, path))
        if reply is None:
            return FakeResponse(404, {"error": "Resume not found"})
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(kwargs.get("json"))
        return reply

    def paths(self, method=None):
        return [c["path"] for c in self.calls if method is None or c["method"] == method]


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send document events to a per-test file."""
    events_file = tmp_path / "document_events.log"
    monkeypatch.setattr("vellum.utils.event_logging.DOCUMENT_EVENTS_FILE", events_file)
    return events_file


@pytest.fixture
def session():
    return SessionContext(token="test-token", user={"id": 1, "email": "ada@example.com"})


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def resume_api(session, fake_http):
    return ResumeAPI(session=session, base_url=API_BASE, timeout=5, http=fake_http)


@pytest.fixture
def qa_engineer_row():
    """Stored row for a fully populated resume."""
    return json.loads((FIXTURES_PATH / "qa_engineer.json").read_text(encoding="utf-8"))


@pytest.fixture
def qa_engineer(qa_engineer_row):
    return normalize_document(qa_engineer_row)
