"""Unit tests for the manage_resumes typer app, run through typer's CliRunner."""

import pytest
from typer.testing import CliRunner

from scripts import manage_resumes
from tests.conftest import FakeResponse
from vellum.utils.event_logging import log_document_event

runner = CliRunner()


@pytest.fixture
def cli_api(monkeypatch, resume_api):
    """Point the commands at the fake-transport client and skip file logging."""
    logged = []
    monkeypatch.setattr(manage_resumes, "ResumeAPI", lambda: resume_api)
    monkeypatch.setattr(
        manage_resumes, "setup_storage_logger", lambda log_dir, api_url=None: logged.append(log_dir)
    )
    return logged


@pytest.mark.unit
def test_show_takes_positional_id(cli_api, fake_http, qa_engineer_row):
    """Test show fetches the id given as an argument and prints the plain-text preview."""
    fake_http.routes[("GET", "/resumes/7")] = FakeResponse(200, qa_engineer_row)

    result = runner.invoke(manage_resumes.app, ["show", "7"])

    assert result.exit_code == 0, result.output
    assert "QA Engineer" in result.output
    assert "Grace Hopper" in result.output
    assert len(cli_api) == 1


@pytest.mark.unit
def test_show_missing_document_exits_with_not_found_code(cli_api):
    """Test an unknown id maps to the not-found exit code."""
    result = runner.invoke(manage_resumes.app, ["show", "99"])

    assert result.exit_code == 4
    assert "Document not found." in result.output


@pytest.mark.unit
def test_delete_with_yes_skips_confirmation(cli_api, fake_http):
    """Test --yes deletes without prompting."""
    fake_http.routes[("DELETE", "/resumes/2")] = FakeResponse(200, {"message": "deleted"})

    result = runner.invoke(manage_resumes.app, ["delete", "2", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Deleted resume 2" in result.output
    assert fake_http.paths("DELETE") == ["/resumes/2"]


@pytest.mark.unit
def test_delete_declined_sends_nothing(cli_api, fake_http):
    """Test answering no at the prompt cancels the delete."""
    result = runner.invoke(manage_resumes.app, ["delete", "2"], input="n\n")

    assert result.exit_code == 1
    assert "Cancelled." in result.output
    assert fake_http.calls == []


@pytest.mark.unit
def test_events_filters_by_id_without_api_logging(cli_api):
    """Test events reads the local log only and honours --id."""
    log_document_event("save_completed", 42, source="editing")
    log_document_event("export_failed", 43, source="rendering")

    result = runner.invoke(manage_resumes.app, ["events", "--id", "42"])

    assert result.exit_code == 0, result.output
    assert "save_completed" in result.output
    assert "export_failed" not in result.output
    assert cli_api == []
