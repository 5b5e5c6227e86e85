"""
Shared error reporting for the typer scripts in scripts/.

Each known error class maps to a short hint and a distinct exit code so
shell callers can tell a missing login from a missing document.
"""

from typing import NoReturn

import typer

from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.rendering.exceptions import CaptureOrEncodeError
from vellum.contexts.storage.exceptions import (
    DocumentNotFoundError,
    NetworkOrServerError,
    UnauthorizedError,
)

# (exception class, exit code, hint); first match wins
ERROR_EXITS = [
    (UnauthorizedError, 3, "Not logged in. Run manage_resumes.py login or set VELLUM_TOKEN."),
    (DocumentNotFoundError, 4, "Document not found."),
    (NetworkOrServerError, 5, "Could not reach the resume API. Check VELLUM_API_URL."),
    (MalformedDocumentError, 6, "Stored document could not be decoded."),
    (CaptureOrEncodeError, 7, "Export failed; no file was written."),
]


def exit_on_error(error: Exception) -> NoReturn:
    """Print a hint and the error, then exit with the error's code (1 if unknown)."""
    for error_cls, code, hint in ERROR_EXITS:
        if isinstance(error, error_cls):
            typer.secho(f"\n✗ {hint}", fg=typer.colors.RED, bold=True, err=True)
            typer.secho(f"  {error}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=code)

    typer.secho(f"\nError: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)
