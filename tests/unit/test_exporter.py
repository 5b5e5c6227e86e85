"""Unit tests for export helpers: file names, page composition, stage errors."""

import pytest
from PIL import Image

from vellum.contexts.editing import ResumeDocument, set_title
from vellum.contexts.rendering import CaptureOrEncodeError, export_pdf_bytes
from vellum.contexts.rendering.exporter import A4, LETTER, compose_page, encode_pdf, export_filename


class SolidCapture:
    """Capture stub returning a flat raster of a fixed size."""

    def __init__(self, size=(200, 100), color="navy"):
        self.size = size
        self.color = color
        self.scales = []

    def capture(self, tree, layout, scale):
        self.scales.append(scale)
        return Image.new("RGB", self.size, self.color)


class BrokenCapture:
    def capture(self, tree, layout, scale):
        raise RuntimeError("no display")


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, expected",
    [
        ("QA Engineer", "QA Engineer.pdf"),
        ("  Padded  ", "Padded.pdf"),
        ("", "resume.pdf"),
        ("   ", "resume.pdf"),
        (None, "resume.pdf"),
        ("CV 2025/26", "CV 2025-26.pdf"),
        ("..\\escape", "..-escape.pdf"),
    ],
)
def test_export_filename(title, expected):
    """Test titles become file names and empty titles fall back to resume.pdf."""
    assert export_filename(title) == expected


@pytest.mark.unit
def test_compose_page_keeps_width_and_a4_ratio():
    """Test the page is as wide as the raster with A4 proportions."""
    page = compose_page(Image.new("RGB", (1000, 400), "black"))

    assert page.size == (1000, 1414)
    assert page.getpixel((10, 10)) == (0, 0, 0)
    assert page.getpixel((10, 1000)) == (255, 255, 255)


@pytest.mark.unit
def test_compose_page_clips_tall_content():
    """Test content beyond one page height is cut off."""
    page = compose_page(Image.new("RGB", (100, 500), "black"))

    assert page.size == (100, 141)
    assert page.getpixel((50, 140)) == (0, 0, 0)


@pytest.mark.unit
def test_compose_page_letter():
    """Test other page formats change only the height."""
    assert compose_page(Image.new("RGB", (1000, 10)), LETTER).size == (1000, 1294)


@pytest.mark.unit
def test_encode_pdf_produces_pdf_stream():
    """Test encoding yields PDF bytes."""
    data = encode_pdf(compose_page(Image.new("RGB", (210, 10))), A4)
    assert data.startswith(b"%PDF")


@pytest.mark.unit
def test_export_pdf_bytes_uses_title_and_scale():
    """Test the in-memory export returns the derived name and passes the scale through."""
    capture = SolidCapture()
    doc = set_title(ResumeDocument.empty(), "Data Engineer")

    filename, data = export_pdf_bytes(doc, capture=capture, scale=3)

    assert filename == "Data Engineer.pdf"
    assert data.startswith(b"%PDF")
    assert capture.scales == [3]


@pytest.mark.unit
def test_capture_failure_is_tagged():
    """Test a capture exception surfaces as CaptureOrEncodeError at the capture stage."""
    with pytest.raises(CaptureOrEncodeError) as exc_info:
        export_pdf_bytes(ResumeDocument.empty(), capture=BrokenCapture())

    error = exc_info.value
    assert error.stage == "capture"
    assert error.template_id == "modern"
    assert isinstance(error.original_error, RuntimeError)


@pytest.mark.unit
def test_empty_raster_is_a_capture_failure():
    """Test a zero-height raster cannot be exported."""
    with pytest.raises(CaptureOrEncodeError, match="Stage: capture"):
        export_pdf_bytes(ResumeDocument.empty(), capture=SolidCapture(size=(200, 0)))
