#!/usr/bin/env python3
"""
Command-line interface for managing stored resumes.

Talks to the resume API at VELLUM_API_URL with the bearer token in
VELLUM_TOKEN (obtain one with the login command).

Commands:
    login     - Log in and print a token for VELLUM_TOKEN
    list      - List resumes (optionally search and sort)
    show      - Show one resume as a plain-text preview
    create    - Create an empty resume
    duplicate - Copy a resume as "<title> Copy"
    delete    - Delete a resume
    events    - Show recent document events
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.editing.defaults import DEFAULT_TEMPLATE_ID, NEW_RESUME_TITLE
from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.rendering import render_preview
from vellum.contexts.storage import (
    API_URL,
    AuthAPI,
    DocumentList,
    ResumeAPI,
    StorageError,
)
from vellum.contexts.storage.logger import setup_storage_logger
from vellum.contexts.storage.summaries import SORT_OPTIONS, SORT_UPDATED
from vellum.utils.cli import exit_on_error
from vellum.utils.event_logging import get_recent_events
from vellum.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help=f"Manage stored resumes via the resume API ({API_URL})",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    # events reads the local log only
    if ctx.invoked_subcommand != "events":
        setup_storage_logger(LOGS_PATH / f"manage_{now()}", api_url=API_URL)


def _document_list() -> DocumentList:
    """DocumentList with its cache loaded from the API."""
    documents = DocumentList(ResumeAPI())
    documents.refresh()
    return documents


@app.command("login")
def login_command(
    email: Annotated[str, typer.Option("--email", "-e", prompt=True, help="Account email")],
    password: Annotated[
        str, typer.Option("--password", prompt=True, hide_input=True, help="Account password")
    ],
):
    """
    Log in and print the session token.

    Examples:\n

        $ manage_resumes.py login --email ada@example.com
    """
    try:
        session = AuthAPI().login(email, password)
    except StorageError as e:
        exit_on_error(e)

    typer.secho("✓ Logged in", fg=typer.colors.GREEN, bold=True)
    typer.echo("Add this line to your .env:\n")
    typer.echo(f"VELLUM_TOKEN={session.token}")


@app.command("list")
def list_command(
    search: Annotated[
        Optional[str], typer.Option("--search", "-q", help="Filter by title substring")
    ] = None,
    sort: Annotated[
        str, typer.Option("--sort", "-s", help=f"Sort order: {', '.join(SORT_OPTIONS)}")
    ] = SORT_UPDATED,
):
    """
    List resumes.

    Examples:\n

        $ manage_resumes.py list                     # Newest first

        $ manage_resumes.py list --sort name         # Alphabetical

        $ manage_resumes.py list -q engineer         # Titles containing "engineer"
    """
    if sort not in SORT_OPTIONS:
        typer.secho(f"Error: unknown sort '{sort}'\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    try:
        summaries = _document_list().view(search or "", sort)
    except StorageError as e:
        exit_on_error(e)

    heading = f"Resumes matching '{search}':" if search else "All resumes:"
    typer.secho(f"\n{heading}", fg=typer.colors.BLUE, bold=True)

    if not summaries:
        typer.echo("  (none)")
        return

    max_id_len = max(len(str(s.id)) for s in summaries)
    max_title_len = max(len(s.title) for s in summaries)

    for summary in summaries:
        typer.echo(
            f"  {str(summary.id):>{max_id_len}}  {summary.title:{max_title_len}}  "
            f"{summary.template_id:8}  {format_timestamp(summary.updated_at, relative=True)}"
        )

    typer.echo(f"\nTotal: {len(summaries)}")


@app.command("show")
def show_command(document_id: Annotated[int, typer.Argument(help="Resume id")]):
    """
    Show a resume as a plain-text preview.

    Examples:\n

        $ manage_resumes.py show 42
    """
    try:
        document = ResumeAPI().get_document(document_id)
    except (StorageError, MalformedDocumentError) as e:
        exit_on_error(e)

    typer.secho(f"\n{document.title or '(untitled)'}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {document.template_id}")
    typer.echo(f"Updated: {format_timestamp(document.updated_at)}")
    typer.echo("=" * 80)
    typer.echo(render_preview(document).to_plaintext())


@app.command("create")
def create_command(
    title: Annotated[str, typer.Option("--title", "-t", help="Resume title")] = NEW_RESUME_TITLE,
    template_id: Annotated[
        str, typer.Option("--template", help="Layout variant")
    ] = DEFAULT_TEMPLATE_ID,
):
    """
    Create an empty resume.

    Examples:\n

        $ manage_resumes.py create --title "QA Engineer"
    """
    try:
        document = DocumentList(ResumeAPI()).create(title, template_id)
    except StorageError as e:
        exit_on_error(e)

    typer.secho(f"✓ Created resume {document.id}: {document.title}", fg=typer.colors.GREEN)


@app.command("duplicate")
def duplicate_command(document_id: Annotated[int, typer.Argument(help="Resume id to copy")]):
    """
    Copy a resume. The copy is titled "<title> Copy".

    Examples:\n

        $ manage_resumes.py duplicate 42
    """
    try:
        copy = DocumentList(ResumeAPI()).duplicate(document_id)
    except (StorageError, MalformedDocumentError) as e:
        exit_on_error(e)

    typer.secho(f"✓ Created resume {copy.id}: {copy.title}", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    document_id: Annotated[int, typer.Argument(help="Resume id to delete")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """
    Delete a resume.

    Examples:\n

        $ manage_resumes.py delete 42          # Asks for confirmation

        $ manage_resumes.py delete 42 --yes
    """
    if not yes and not typer.confirm(f"Delete resume {document_id}?"):
        typer.echo("Cancelled.")
        raise typer.Exit(code=1)

    try:
        DocumentList(ResumeAPI()).delete(document_id)
    except StorageError as e:
        exit_on_error(e)

    typer.secho(f"✓ Deleted resume {document_id}", fg=typer.colors.GREEN)


@app.command("events")
def events_command(
    count: Annotated[int, typer.Option("--count", "-n", help="Number of events")] = 10,
    document_id: Annotated[
        Optional[int], typer.Option("--id", help="Only events for this resume")
    ] = None,
    event_type: Annotated[
        Optional[str], typer.Option("--type", "-t", help="Only this event type")
    ] = None,
):
    """
    Show recent document events (saves, exports, creates, deletes).

    Examples:\n

        $ manage_resumes.py events -n 20

        $ manage_resumes.py events --type export_failed
    """
    events = get_recent_events(count, document_id=document_id, event_type=event_type)

    typer.secho("\nRecent events:", fg=typer.colors.BLUE, bold=True)
    if not events:
        typer.echo("  (none)")
        return

    for event in events:
        typer.echo(
            f"  {format_timestamp(event.get('timestamp', ''))}  {event.get('event_type', ''):20}  "
            f"{event.get('document_id')}"
        )


if __name__ == "__main__":
    app()
