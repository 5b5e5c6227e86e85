"""
Section Editors

Pure edit operations over a ResumeDocument. Every function takes a document
plus an edit intent and returns a complete new document; the input is never
modified. Values are accepted as-is (no validation). Only the addressing is
checked: field names must exist, and list indices must be in range.

Indices are positional. Removing an entry shifts later entries down, so an
index is only meaningful against the document it was read from.
"""

from dataclasses import fields, replace
from typing import Any, Dict, Tuple, Type

from vellum.contexts.editing.document import (
    EducationEntry,
    PersonalInfo,
    ResumeDocument,
    WorkEntry,
    generate_entry_id,
)


def resolve_field_name(name: str, wire_keys: Dict[str, str], kind: str) -> str:
    """
    Map a field name to its dataclass attribute.

    Accepts either the attribute name ("start_date") or the wire key
    ("startDate").

    Args:
        name: Field name supplied by the caller
        wire_keys: attribute -> wire key mapping of the target class
        kind: Human-readable target for error messages

    Returns:
        Attribute name

    Raises:
        ValueError: If name is not a field of the target
    """
    if name in wire_keys:
        return name
    for attr, wire in wire_keys.items():
        if wire == name:
            return attr
    valid = ", ".join(wire_keys.values())
    raise ValueError(f"Unknown {kind} field '{name}'. Valid fields: {valid}")


def _editable_entry_field(name: str, entry_cls: Type) -> str:
    attr = resolve_field_name(name, entry_cls.WIRE_KEYS, entry_cls.__name__)
    if attr == "id":
        raise ValueError(f"{entry_cls.__name__} id is assigned at creation and cannot be edited")
    return attr


def _check_index(entries: Tuple, index: int, kind: str) -> None:
    # Negative indices are a caller error too; the editor never presents one
    if not 0 <= index < len(entries):
        raise IndexError(f"{kind} index {index} out of range (have {len(entries)})")


def _replace_at(entries: Tuple, index: int, entry: Any) -> Tuple:
    return entries[:index] + (entry,) + entries[index + 1 :]


def _remove_at(entries: Tuple, index: int) -> Tuple:
    return entries[:index] + entries[index + 1 :]


# ============================================================================
# Title and personal info
# ============================================================================


def set_title(doc: ResumeDocument, text: str) -> ResumeDocument:
    return replace(doc, title=text)


def set_template(doc: ResumeDocument, template_id: str) -> ResumeDocument:
    return replace(doc, template_id=template_id)


def set_personal_field(doc: ResumeDocument, field_name: str, value: str) -> ResumeDocument:
    """
    Replace one personalInfo field.

    Args:
        doc: Current document
        field_name: One of fullName, email, phone, location, linkedin, summary
                    (snake_case attribute names are accepted too)
        value: New value, stored verbatim

    Raises:
        ValueError: If field_name is not a personalInfo field
    """
    attr = resolve_field_name(field_name, PersonalInfo.WIRE_KEYS, "personalInfo")
    return replace(doc, personal_info=replace(doc.personal_info, **{attr: value}))


# ============================================================================
# Work experience
# ============================================================================


def add_work_entry(doc: ResumeDocument) -> ResumeDocument:
    """Append a blank work entry with a fresh id."""
    entry = WorkEntry(id=generate_entry_id(e.id for e in doc.work_experience))
    return replace(doc, work_experience=doc.work_experience + (entry,))


def update_work_entry(
    doc: ResumeDocument, index: int, field_name: str, value: Any
) -> ResumeDocument:
    """
    Replace one field of the work entry at index.

    Raises:
        IndexError: If index is out of range
        ValueError: If field_name is unknown or is "id"
    """
    _check_index(doc.work_experience, index, "workExperience")
    attr = _editable_entry_field(field_name, WorkEntry)
    entry = replace(doc.work_experience[index], **{attr: value})
    return replace(doc, work_experience=_replace_at(doc.work_experience, index, entry))


def remove_work_entry(doc: ResumeDocument, index: int) -> ResumeDocument:
    _check_index(doc.work_experience, index, "workExperience")
    return replace(doc, work_experience=_remove_at(doc.work_experience, index))


# ============================================================================
# Education
# ============================================================================


def add_education_entry(doc: ResumeDocument) -> ResumeDocument:
    """Append a blank education entry with a fresh id."""
    entry = EducationEntry(id=generate_entry_id(e.id for e in doc.education))
    return replace(doc, education=doc.education + (entry,))


def update_education_entry(
    doc: ResumeDocument, index: int, field_name: str, value: Any
) -> ResumeDocument:
    """
    Replace one field of the education entry at index.

    Raises:
        IndexError: If index is out of range
        ValueError: If field_name is unknown or is "id"
    """
    _check_index(doc.education, index, "education")
    attr = _editable_entry_field(field_name, EducationEntry)
    entry = replace(doc.education[index], **{attr: value})
    return replace(doc, education=_replace_at(doc.education, index, entry))


def remove_education_entry(doc: ResumeDocument, index: int) -> ResumeDocument:
    _check_index(doc.education, index, "education")
    return replace(doc, education=_remove_at(doc.education, index))


# ============================================================================
# Skills
# ============================================================================


def add_skill(doc: ResumeDocument, text: str) -> ResumeDocument:
    # Appended verbatim, empty string included; prompting flows filter before calling
    return replace(doc, skills=doc.skills + (text,))


def remove_skill(doc: ResumeDocument, index: int) -> ResumeDocument:
    _check_index(doc.skills, index, "skills")
    return replace(doc, skills=_remove_at(doc.skills, index))


def editable_fields(entry_cls: Type) -> Tuple[str, ...]:
    """Wire keys a caller may pass to the update_* operations for entry_cls."""
    return tuple(
        entry_cls.WIRE_KEYS[f.name] for f in fields(entry_cls) if f.name != "id"
    )
