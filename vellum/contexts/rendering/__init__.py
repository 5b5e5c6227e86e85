"""
Rendering Context

Responsibilities:
- Projects documents into the preview tree
- Routes template_id to a layout variant (TemplateRegistry)
- Renders the HTML preview
- Rasterizes the preview and exports it as a single-page PDF

Owns: Preview tree, layout variants, raster capture, PDF export
Never: Modifies document content
"""

from vellum.contexts.rendering.capture import PillowCapture, RasterCapture
from vellum.contexts.rendering.exceptions import CaptureOrEncodeError, TemplateRenderError
from vellum.contexts.rendering.exporter import (
    A4,
    LETTER,
    PAGE_FORMATS,
    ExportResult,
    PageFormat,
    compose_page,
    encode_pdf,
    export_filename,
    export_pdf_bytes,
    export_resume,
)
from vellum.contexts.rendering.preview import PreviewNode, PreviewTree, render_preview
from vellum.contexts.rendering.preview_html import render_preview_html, write_preview_html
from vellum.contexts.rendering.registries import TemplateRegistry

__all__ = [
    # Preview
    "PreviewNode",
    "PreviewTree",
    "render_preview",
    "render_preview_html",
    "write_preview_html",
    "TemplateRegistry",
    # Export pipeline
    "RasterCapture",
    "PillowCapture",
    "PageFormat",
    "PAGE_FORMATS",
    "A4",
    "LETTER",
    "compose_page",
    "encode_pdf",
    "export_filename",
    "export_pdf_bytes",
    "export_resume",
    "ExportResult",
    # Errors
    "CaptureOrEncodeError",
    "TemplateRenderError",
]
