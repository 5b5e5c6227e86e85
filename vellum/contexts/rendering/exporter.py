"""
PDF Export Module

Turns a document into a single-page PDF in three stages:
1. Capture: rasterize the preview tree at EXPORT_SCALE
2. Compose: place the raster full-bleed at the top of a portrait A4 page
3. Encode: serialize the page to PDF bytes with Pillow

The page's pixel width equals the raster width and its height follows the
A4 aspect ratio, so the raster keeps its proportions. Content taller than
one page is clipped. Exported text is part of the image and not selectable.

Any stage failing raises CaptureOrEncodeError. export_resume() catches it,
returns an ExportResult and never leaves a partial file behind.
"""

import io
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv
from PIL import Image

from vellum.contexts.editing.document import ResumeDocument
from vellum.contexts.rendering.capture import PillowCapture, RasterCapture
from vellum.contexts.rendering.exceptions import CaptureOrEncodeError
from vellum.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    log_export_result,
    log_export_start,
    setup_rendering_logger,
)
from vellum.contexts.rendering.preview import render_preview
from vellum.contexts.rendering.registries import TemplateRegistry
from vellum.utils.event_logging import log_document_event
from vellum.utils.pdf_processing import page_count

load_dotenv()

EXPORT_SCALE = float(os.getenv("EXPORT_SCALE", "2"))
EXPORTS_PATH = Path(os.getenv("EXPORTS_PATH", "outs/exports"))

DEFAULT_FILENAME = "resume"
MM_PER_INCH = 25.4
POINTS_PER_INCH = 72


@dataclass(frozen=True)
class PageFormat:
    """Portrait page size in millimetres."""

    name: str
    width_mm: float
    height_mm: float

    @property
    def aspect(self) -> float:
        """Height over width."""
        return self.height_mm / self.width_mm

    @property
    def width_points(self) -> float:
        return self.width_mm / MM_PER_INCH * POINTS_PER_INCH

    def pixel_height(self, pixel_width: int) -> int:
        return round(pixel_width * self.aspect)


A4 = PageFormat("a4", 210, 297)
LETTER = PageFormat("letter", 215.9, 279.4)

PAGE_FORMATS: Dict[str, PageFormat] = {page.name: page for page in (A4, LETTER)}


@dataclass
class ExportResult:
    """
    Result of exporting one document.

    Attributes:
        success: Whether a PDF was written
        pdf_path: Path to the written PDF (None if failed)
        filename: File name derived from the document title
        page_count: Pages in the written PDF (None if not available)
        raster_size: (width, height) of the captured raster in pixels
        error: The CaptureOrEncodeError that aborted the export
        time_s: Wall time spent exporting
    """

    success: bool
    pdf_path: Optional[Path] = None
    filename: str = ""
    page_count: Optional[int] = None
    raster_size: Optional[Tuple[int, int]] = None
    error: Optional[CaptureOrEncodeError] = None
    time_s: float = 0.0


def export_filename(title: str) -> str:
    """
    File name for an exported document: "{title}.pdf", or "resume.pdf".

    Surrounding whitespace is stripped and a whitespace-only title counts as
    empty. Path separators become "-" so the file always lands in the
    output directory.
    """
    name = (title or "").strip().replace("/", "-").replace("\\", "-")
    return f"{name or DEFAULT_FILENAME}.pdf"


def capture_preview(
    doc: ResumeDocument,
    capture: RasterCapture,
    scale: float,
    registry: TemplateRegistry,
) -> Image.Image:
    """Render the document's preview tree and rasterize it with its variant's layout."""
    layout = registry.get_layout(doc.template_id)
    raster = capture.capture(render_preview(doc), layout, scale)
    if raster.width == 0 or raster.height == 0:
        raise ValueError(f"Capture produced an empty raster ({raster.width}x{raster.height})")
    return raster


def compose_page(raster: Image.Image, page_format: PageFormat = A4) -> Image.Image:
    """
    Place a raster at the top-left of a white page of the given format.

    Args:
        raster: Captured preview
        page_format: Page proportions (default: A4)

    Returns:
        RGB page image, raster.width pixels wide
    """
    width = raster.width
    height = page_format.pixel_height(width)

    page = Image.new("RGB", (width, height), "white")
    page.paste(raster.convert("RGB").crop((0, 0, width, min(raster.height, height))), (0, 0))
    return page


def encode_pdf(page: Image.Image, page_format: PageFormat = A4) -> bytes:
    """
    Encode a page image as a one-page PDF.

    The resolution is chosen so the page is exactly page_format wide in points.
    """
    resolution = page.width / (page_format.width_mm / MM_PER_INCH)
    buffer = io.BytesIO()
    page.save(buffer, format="PDF", resolution=resolution)
    data = buffer.getvalue()
    if not data.startswith(b"%PDF"):
        raise ValueError("Encoder did not produce a PDF stream")
    return data


def _run_pipeline(
    doc: ResumeDocument,
    capture: RasterCapture,
    scale: float,
    registry: TemplateRegistry,
    page_format: PageFormat,
) -> Tuple[str, bytes, Tuple[int, int]]:
    """Run capture, compose and encode, tagging any failure with its stage."""
    template_id = registry.resolve(doc.template_id)

    try:
        raster = capture_preview(doc, capture, scale, registry)
    except Exception as e:
        raise CaptureOrEncodeError(
            "Raster capture failed", stage="capture", template_id=template_id, original_error=e
        ) from e
    _log_debug(f"Raster: {raster.width}x{raster.height} px")

    try:
        page = compose_page(raster, page_format)
    except Exception as e:
        raise CaptureOrEncodeError(
            "Page composition failed", stage="compose", template_id=template_id, original_error=e
        ) from e

    try:
        data = encode_pdf(page, page_format)
    except Exception as e:
        raise CaptureOrEncodeError(
            "PDF encoding failed", stage="encode", template_id=template_id, original_error=e
        ) from e

    return export_filename(doc.title), data, raster.size


def export_pdf_bytes(
    doc: ResumeDocument,
    capture: RasterCapture = None,
    scale: float = None,
    registry: TemplateRegistry = None,
    page_format: PageFormat = A4,
) -> Tuple[str, bytes]:
    """
    Export a document to PDF bytes without touching the filesystem.

    Args:
        doc: Normalized document
        capture: Raster capture implementation (default: PillowCapture)
        scale: Upscaling factor (default: EXPORT_SCALE from environment)
        registry: Template registry (default: new registry on TEMPLATES_PATH)
        page_format: Page proportions (default: A4)

    Returns:
        (filename, pdf_bytes)

    Raises:
        CaptureOrEncodeError: If any stage fails
    """
    filename, data, _ = _run_pipeline(
        doc,
        capture or PillowCapture(),
        EXPORT_SCALE if scale is None else scale,
        registry or TemplateRegistry(),
        page_format,
    )
    return filename, data


def _write_atomic(target: Path, data: bytes) -> None:
    """Write data to a temp file beside target, then rename it into place."""
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".", suffix=".part")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def export_resume(
    document: ResumeDocument,
    output_dir: Optional[Path] = None,
    capture: RasterCapture = None,
    scale: float = None,
    registry: TemplateRegistry = None,
    page_format: PageFormat = A4,
    log_dir: Optional[Path] = None,
) -> ExportResult:
    """
    Export a document to a PDF file with logging and event tracking.

    Orchestration function around export_pdf_bytes(). Logs the outcome
    (Tier 1) and records an export_completed or export_failed event (Tier 2).

    Args:
        document: Normalized document
        output_dir: Directory for the PDF (default: EXPORTS_PATH from environment)
        capture: Raster capture implementation (default: PillowCapture)
        scale: Upscaling factor (default: EXPORT_SCALE from environment)
        registry: Template registry (default: new registry on TEMPLATES_PATH)
        page_format: Page proportions (default: A4)
        log_dir: When given, configure a rendering log in this directory

    Returns:
        ExportResult with success status, output path and diagnostics
    """
    scale = EXPORT_SCALE if scale is None else scale
    registry = registry or TemplateRegistry()
    output_dir = Path(output_dir) if output_dir is not None else EXPORTS_PATH
    filename = export_filename(document.title)

    if log_dir is not None:
        setup_rendering_logger(Path(log_dir), scale=scale)

    log_export_start(document.title, document.template_id, scale, output_dir)
    start_time = time.time()

    try:
        _, data, raster_size = _run_pipeline(
            document, capture or PillowCapture(), scale, registry, page_format
        )
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            _write_atomic(output_dir / filename, data)
        except OSError as e:
            raise CaptureOrEncodeError(
                f"Could not write {filename}", stage="write", template_id=document.template_id,
                original_error=e,
            ) from e
    except CaptureOrEncodeError as e:
        result = ExportResult(
            success=False, filename=filename, error=e, time_s=time.time() - start_time
        )
        log_export_result(result, result.time_s)
        log_document_event(
            event_type="export_failed",
            document_id=document.id,
            source="rendering",
            filename=filename,
            stage=e.stage,
            error=e.message,
        )
        return result

    pdf_path = output_dir / filename
    result = ExportResult(
        success=True,
        pdf_path=pdf_path,
        filename=filename,
        page_count=page_count(pdf_path),
        raster_size=raster_size,
        time_s=time.time() - start_time,
    )
    log_export_result(result, result.time_s)
    _log_info(f"PDF saved to: {pdf_path}")

    log_document_event(
        event_type="export_completed",
        document_id=document.id,
        source="rendering",
        filename=filename,
        pdf_path=str(pdf_path),
        page_count=result.page_count,
        export_time_s=round(result.time_s, 2),
    )
    return result
