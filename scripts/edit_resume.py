#!/usr/bin/env python3
"""
Resume Editing CLI

Applies one section edit to a stored resume and saves it. Each command
loads the resume from the API, runs the edit through an EditorSession and
saves the result; a failed save reports the error and changes nothing on
the server.

Commands:
    set-title        - Change the resume title
    set-template     - Change the layout variant
    set-field        - Set a personal info field (fullName, email, ...)
    add-work         - Append a work entry (optionally with field values)
    update-work      - Set one field of a work entry
    remove-work      - Remove a work entry
    add-education    - Append an education entry
    update-education - Set one field of an education entry
    remove-education - Remove an education entry
    add-skill        - Append a skill (prompts when no text is given)
    remove-skill     - Remove a skill

Examples:\n

    edit_resume.py set-field 42 fullName "Ada Lovelace"

    edit_resume.py add-work 42 --set company="Analytical Engines" --set current=true

    edit_resume.py update-work 42 0 position "Lead Engineer"

    edit_resume.py add-skill 42                 # Prompts for the skill
"""

import os
from pathlib import Path
from typing import Callable, List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.editing.document import EducationEntry, WorkEntry
from vellum.contexts.editing.editor import EditorSession
from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.editing.logger import setup_editing_logger
from vellum.contexts.editing.section_editors import editable_fields
from vellum.contexts.storage import ResumeAPI, StorageError
from vellum.utils.cli import exit_on_error
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

TRUE_VALUES = ("true", "yes", "y", "1")

app = typer.Typer(
    help="Edit stored resumes one section operation at a time",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def coerce_value(field_name: str, value: str):
    """Command-line values are strings; the "current" flag is a bool."""
    if field_name == "current":
        return value.strip().lower() in TRUE_VALUES
    return value


def parse_assignments(assignments: List[str]) -> List[tuple]:
    """Split "field=value" pairs."""
    pairs = []
    for assignment in assignments:
        field_name, sep, value = assignment.partition("=")
        if not sep:
            typer.secho(f"Error: expected field=value, got '{assignment}'\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2)
        pairs.append((field_name.strip(), coerce_value(field_name.strip(), value)))
    return pairs


def run_edit(document_id: int, edit: Callable[[EditorSession], None]) -> None:
    """Load, edit, save, and report. Exits non-zero on any failure."""
    log_dir = LOGS_PATH / f"edit_{now()}"
    log_dir.mkdir(parents=True, exist_ok=True)
    setup_editing_logger(log_dir, document_id=document_id)

    try:
        session = EditorSession.open(ResumeAPI(), document_id)
    except (StorageError, MalformedDocumentError) as e:
        exit_on_error(e)

    try:
        edit(session)
    except (IndexError, ValueError) as e:
        typer.secho(f"\nError: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    try:
        result = session.save()
    except StorageError as e:
        exit_on_error(e)
    finally:
        session.close()

    if result.success:
        typer.secho(f"✓ Saved resume {result.document_id}", fg=typer.colors.GREEN, bold=True)
        raise typer.Exit(code=0)

    exit_on_error(result.error)


# ============================================================================
# Title and personal info
# ============================================================================


@app.command("set-title")
def set_title_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    title: Annotated[str, typer.Argument(help="New title")],
):
    """Change the resume title."""
    run_edit(document_id, lambda session: session.set_title(title))


@app.command("set-template")
def set_template_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    template_id: Annotated[str, typer.Argument(help="Layout variant (e.g., modern, classic)")],
):
    """Change the layout variant."""
    run_edit(document_id, lambda session: session.set_template(template_id))


@app.command("set-field")
def set_field_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    field_name: Annotated[
        str, typer.Argument(help="fullName, email, phone, location, linkedin or summary")
    ],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """
    Set a personal info field.

    Examples:\n

        $ edit_resume.py set-field 42 email ada@example.com
    """
    run_edit(document_id, lambda session: session.set_personal_field(field_name, value))


# ============================================================================
# Work experience
# ============================================================================


@app.command("add-work")
def add_work_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    assignments: Annotated[
        Optional[List[str]],
        typer.Option("--set", help=f"field=value; fields: {', '.join(editable_fields(WorkEntry))}"),
    ] = None,
):
    """
    Append a work entry, optionally filling fields.

    Examples:\n

        $ edit_resume.py add-work 42 --set company=Acme --set position=Engineer
    """
    pairs = parse_assignments(assignments or [])

    def edit(session: EditorSession) -> None:
        session.add_work_entry()
        index = len(session.document.work_experience) - 1
        for field_name, value in pairs:
            session.update_work_entry(index, field_name, value)

    run_edit(document_id, edit)


@app.command("update-work")
def update_work_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    index: Annotated[int, typer.Argument(help="Entry position (0 = first)")],
    field_name: Annotated[str, typer.Argument(help=", ".join(editable_fields(WorkEntry)))],
    value: Annotated[str, typer.Argument(help="New value (true/false for current)")],
):
    """Set one field of a work entry."""
    run_edit(
        document_id,
        lambda session: session.update_work_entry(index, field_name, coerce_value(field_name, value)),
    )


@app.command("remove-work")
def remove_work_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    index: Annotated[int, typer.Argument(help="Entry position (0 = first)")],
):
    """Remove a work entry. Later entries shift up."""
    run_edit(document_id, lambda session: session.remove_work_entry(index))


# ============================================================================
# Education
# ============================================================================


@app.command("add-education")
def add_education_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    assignments: Annotated[
        Optional[List[str]],
        typer.Option("--set", help=f"field=value; fields: {', '.join(editable_fields(EducationEntry))}"),
    ] = None,
):
    """Append an education entry, optionally filling fields."""
    pairs = parse_assignments(assignments or [])

    def edit(session: EditorSession) -> None:
        session.add_education_entry()
        index = len(session.document.education) - 1
        for field_name, value in pairs:
            session.update_education_entry(index, field_name, value)

    run_edit(document_id, edit)


@app.command("update-education")
def update_education_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    index: Annotated[int, typer.Argument(help="Entry position (0 = first)")],
    field_name: Annotated[str, typer.Argument(help=", ".join(editable_fields(EducationEntry)))],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """Set one field of an education entry."""
    run_edit(document_id, lambda session: session.update_education_entry(index, field_name, value))


@app.command("remove-education")
def remove_education_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    index: Annotated[int, typer.Argument(help="Entry position (0 = first)")],
):
    """Remove an education entry. Later entries shift up."""
    run_edit(document_id, lambda session: session.remove_education_entry(index))


# ============================================================================
# Skills
# ============================================================================


@app.command("add-skill")
def add_skill_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    text: Annotated[Optional[str], typer.Argument(help="Skill text (prompted for when omitted)")] = None,
):
    """
    Append a skill. With no text, prompts for one; an empty answer adds nothing.

    Examples:\n

        $ edit_resume.py add-skill 42 Python

        $ edit_resume.py add-skill 42               # Prompts
    """
    if text is not None:
        run_edit(document_id, lambda session: session.add_skill(text))
        return

    def edit(session: EditorSession) -> None:
        added = session.prompt_skill(lambda: typer.prompt("Skill", default="", show_default=False))
        if not added:
            typer.echo("No skill entered; nothing to save.")
            raise typer.Exit(code=0)

    run_edit(document_id, edit)


@app.command("remove-skill")
def remove_skill_command(
    document_id: Annotated[int, typer.Argument(help="Resume id")],
    index: Annotated[int, typer.Argument(help="Skill position (0 = first)")],
):
    """Remove a skill."""
    run_edit(document_id, lambda session: session.remove_skill(index))


if __name__ == "__main__":
    app()
