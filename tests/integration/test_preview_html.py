"""
Integration tests for the HTML preview - real Jinja2 templates from the registry.
"""

import pytest

from vellum.contexts.editing import ResumeDocument, add_skill, set_personal_field, set_template
from vellum.contexts.rendering import render_preview_html, write_preview_html


@pytest.mark.integration
@pytest.mark.parametrize("template_id", ["modern", "classic"])
def test_full_document_renders(template_id, qa_engineer):
    """Test both variants render every section of a populated resume."""
    html = render_preview_html(set_template(qa_engineer, template_id))

    assert html.lstrip().lower().startswith("<!doctype html>")
    assert "Grace Hopper" in html
    for heading in ["Professional Summary", "Work Experience", "Education", "Skills"]:
        assert heading in html
    assert "Present" in html


@pytest.mark.integration
def test_user_text_is_escaped():
    """Test markup in user input is rendered as text."""
    doc = set_personal_field(ResumeDocument.empty(), "fullName", "<script>alert(1)</script>")
    doc = add_skill(doc, "C & C++")

    html = render_preview_html(doc)

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "C &amp; C++" in html


@pytest.mark.integration
def test_empty_document_shows_placeholder():
    """Test an empty document renders the placeholder name and no section headings."""
    html = render_preview_html(ResumeDocument.empty())

    assert "Your Name" in html
    assert "Work Experience" not in html


@pytest.mark.integration
def test_unknown_template_uses_default(qa_engineer):
    """Test an unknown template_id renders with the default variant."""
    unknown = render_preview_html(set_template(qa_engineer, "retro"))
    modern = render_preview_html(set_template(qa_engineer, "modern"))

    assert unknown == modern


@pytest.mark.integration
def test_write_preview_html(tmp_path, qa_engineer):
    """Test the preview is written to disk, creating directories."""
    path = write_preview_html(qa_engineer, tmp_path / "previews" / "qa.html")

    assert path.exists()
    assert "Grace Hopper" in path.read_text(encoding="utf-8")
