#!/usr/bin/env python3
"""
PDF Export and Preview CLI

Exports resumes to PDF and renders previews using the rendering context.
A resume comes either from a JSON file (a stored row, or a bare resume_data
object) or from the API by id.

Commands:
    export   - Export a resume to a single-page PDF
    preview  - Render a resume preview as HTML or plain text

Examples:\n

    export_pdf.py export tests/fixtures/qa_engineer.json              # Export from file

    export_pdf.py export --id 42                            # Export stored resume

    export_pdf.py export --id 42 --scale 3 -o outs/exports  # Sharper raster

    export_pdf.py preview tests/fixtures/qa_engineer.json --text      # Plain-text preview
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.editing import normalize_document
from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.rendering import (
    PAGE_FORMATS,
    CaptureOrEncodeError,
    TemplateRegistry,
    TemplateRenderError,
    export_filename,
    export_resume,
    render_preview,
    write_preview_html,
)
from vellum.contexts.rendering.exporter import EXPORTS_PATH
from vellum.contexts.storage import ResumeAPI, StorageError
from vellum.utils.cli import exit_on_error
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

RESUME_DATA_KEYS = ("personalInfo", "workExperience", "education", "skills")


def load_resume(source: Optional[Path], document_id: Optional[int]):
    """Load and normalize a resume from a JSON file or from the API."""
    if (source is None) == (document_id is None):
        typer.secho("Error: give exactly one of a JSON file or --id\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    try:
        if document_id is not None:
            return ResumeAPI().get_document(document_id)

        if not source.exists():
            typer.secho(f"Error: file not found: {source}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2)
        raw = json.loads(source.read_text(encoding="utf-8"))
        # A bare resume_data object is wrapped into a row titled after the file
        if isinstance(raw, dict) and "resume_data" not in raw and any(k in raw for k in RESUME_DATA_KEYS):
            raw = {"title": source.stem, "resume_data": raw}
        return normalize_document(raw)
    except json.JSONDecodeError as e:
        exit_on_error(MalformedDocumentError(f"{source} is not valid JSON", original_error=e))
    except (StorageError, MalformedDocumentError) as e:
        exit_on_error(e)


app = typer.Typer(
    help="Export resumes to PDF and render previews",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("export")
def export_command(
    source: Annotated[
        Optional[Path],
        typer.Argument(help="Resume JSON file (stored row or resume_data object)"),
    ] = None,
    document_id: Annotated[
        Optional[int],
        typer.Option("--id", help="Stored resume id to fetch from the API"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the PDF (default: EXPORTS_PATH)"),
    ] = None,
    scale: Annotated[
        Optional[float],
        typer.Option("--scale", "-s", help="Raster upscaling factor (default: EXPORT_SCALE)", min=0.5, max=6),
    ] = None,
    page: Annotated[
        str,
        typer.Option("--page", "-p", help=f"Page format: {', '.join(PAGE_FORMATS)}"),
    ] = "a4",
):
    """
    Export a resume to a single-page PDF.

    The preview is rasterized and placed full-bleed on the page, so text in
    the PDF is not selectable. Content longer than one page is clipped.

    Examples:\n

        $ export_pdf.py export tests/fixtures/qa_engineer.json          # Export from file

        $ export_pdf.py export --id 42 --page letter          # US Letter page
    """
    if page not in PAGE_FORMATS:
        typer.secho(f"Error: unknown page format '{page}'\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    document = load_resume(source, document_id)

    typer.secho(f"\nExporting: {document.title or '(untitled)'}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {document.template_id}")
    typer.echo("")

    log_dir = LOGS_PATH / f"export_{now()}"
    log_dir.mkdir(parents=True, exist_ok=True)

    result = export_resume(
        document,
        output_dir=output_dir,
        scale=scale,
        page_format=PAGE_FORMATS[page],
        log_dir=log_dir,
    )

    typer.echo("")
    if result.success:
        typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {result.pdf_path}")
        typer.echo(f"  Raster: {result.raster_size[0]}x{result.raster_size[1]} px")
        typer.echo(f"  Log: {log_dir / 'render.log'}")
        typer.echo("")
        raise typer.Exit(code=0)

    exit_on_error(result.error or CaptureOrEncodeError("Export failed"))


@app.command("preview")
def preview_command(
    source: Annotated[
        Optional[Path],
        typer.Argument(help="Resume JSON file (stored row or resume_data object)"),
    ] = None,
    document_id: Annotated[
        Optional[int],
        typer.Option("--id", help="Stored resume id to fetch from the API"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML file to write (default: <title>.html in EXPORTS_PATH)"),
    ] = None,
    text: Annotated[
        bool,
        typer.Option("--text", "-t", help="Print a plain-text preview instead of writing HTML"),
    ] = False,
):
    """
    Render a resume preview.

    Examples:\n

        $ export_pdf.py preview tests/fixtures/qa_engineer.json --text   # Print to terminal

        $ export_pdf.py preview --id 42 -o preview.html        # Write HTML
    """
    document = load_resume(source, document_id)

    if text:
        typer.echo(render_preview(document).to_plaintext())
        return

    if output is None:
        output = EXPORTS_PATH / Path(export_filename(document.title)).with_suffix(".html")

    try:
        path = write_preview_html(document, output, TemplateRegistry())
    except TemplateRenderError as e:
        exit_on_error(e)
    typer.secho(f"✓ Preview written: {path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
