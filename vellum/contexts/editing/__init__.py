"""
Editing Context

Responsibilities:
- Owns the resume data model (ResumeDocument and its entries)
- Normalizes stored rows into complete documents
- Provides pure section edit operations
- Runs the single-document editing session (editor.EditorSession)

Owns: Resume data shape, repair rules, edit semantics
Never: Draws, rasterizes or talks HTTP itself
"""

from vellum.contexts.editing.document import (
    EducationEntry,
    PersonalInfo,
    ResumeDocument,
    WorkEntry,
    generate_entry_id,
)
from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.editing.normalizer import (
    EncodedResumeData,
    MissingResumeData,
    StructuredResumeData,
    classify_resume_data,
    decode_resume_data,
    load_document,
    normalize_document,
)
from vellum.contexts.editing.section_editors import (
    add_education_entry,
    add_skill,
    add_work_entry,
    remove_education_entry,
    remove_skill,
    remove_work_entry,
    set_personal_field,
    set_template,
    set_title,
    update_education_entry,
    update_work_entry,
)

__all__ = [
    # Data structures
    "ResumeDocument",
    "PersonalInfo",
    "WorkEntry",
    "EducationEntry",
    "generate_entry_id",
    # Load boundary
    "EncodedResumeData",
    "StructuredResumeData",
    "MissingResumeData",
    "classify_resume_data",
    "decode_resume_data",
    "normalize_document",
    "load_document",
    "MalformedDocumentError",
    # Section editors
    "set_title",
    "set_template",
    "set_personal_field",
    "add_work_entry",
    "update_work_entry",
    "remove_work_entry",
    "add_education_entry",
    "update_education_entry",
    "remove_education_entry",
    "add_skill",
    "remove_skill",
]
