"""
Resume Document Normalization

Turns whatever the persistence API returns into one complete ResumeDocument.

Stored rows are not uniform: resume_data may arrive as a JSON-encoded string,
as an already-decoded mapping, or not at all, and documents written by older
versions may lack whole subsections or individual personalInfo fields.

Load boundary (tagged union, collapsed immediately):
    raw value -> classify_resume_data() -> EncodedResumeData
                                           | StructuredResumeData
                                           | MissingResumeData
              -> decode_resume_data()   -> plain dict
              -> normalize_document()   -> ResumeDocument

Normalization rules:
1. Encoded data is decoded as JSON; failure raises MalformedDocumentError
   (no partial recovery, no fallback to defaults)
2. Each top-level subsection is defaulted independently
3. personalInfo fields are defaulted individually, not as a whole object
4. None becomes ""; other scalars are converted with str()
5. Entries without an id are given one; existing ids are kept
6. Non-mapping entries are dropped; unknown keys are dropped
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Sequence, Union

from vellum.contexts.editing.defaults import (
    DEFAULT_TEMPLATE_ID,
    EDUCATION_ENTRY_DEFAULTS,
    PERSONAL_INFO_DEFAULTS,
    WORK_ENTRY_DEFAULTS,
    get_default_resume_data,
)
from vellum.contexts.editing.document import (
    EducationEntry,
    PersonalInfo,
    ResumeDocument,
    WorkEntry,
    generate_entry_id,
)
from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.editing.logger import _log_debug, _log_warning


# ============================================================================
# Load-boundary variants
# ============================================================================


@dataclass(frozen=True)
class EncodedResumeData:
    """resume_data stored as a JSON string."""

    text: str


@dataclass(frozen=True)
class StructuredResumeData:
    """resume_data already decoded into a mapping."""

    mapping: Mapping[str, Any]


@dataclass(frozen=True)
class MissingResumeData:
    """resume_data absent or null."""


RawResumeData = Union[EncodedResumeData, StructuredResumeData, MissingResumeData]


def classify_resume_data(value: Any, document_id: Any = None) -> RawResumeData:
    """
    Tag the raw resume_data value with its storage shape.

    Args:
        value: resume_data exactly as returned by storage
        document_id: Storage id, for error messages

    Returns:
        One of EncodedResumeData, StructuredResumeData, MissingResumeData

    Raises:
        MalformedDocumentError: If value is none of string, mapping or None
    """
    if value is None:
        return MissingResumeData()
    if isinstance(value, str):
        return EncodedResumeData(value)
    if isinstance(value, Mapping):
        return StructuredResumeData(value)
    raise MalformedDocumentError(
        f"Unsupported resume_data type: {type(value).__name__}",
        document_id=document_id,
        raw_snippet=repr(value),
    )


def decode_resume_data(raw: RawResumeData, document_id: Any = None) -> Dict[str, Any]:
    """
    Collapse a tagged resume_data value into a plain dict.

    Encoded JSON that decodes to null is treated as missing. Anything that
    decodes to a non-object is malformed.

    Args:
        raw: Tagged value from classify_resume_data()
        document_id: Storage id, for error messages

    Returns:
        Dict (possibly empty or partial)

    Raises:
        MalformedDocumentError: If the encoded text is not a JSON object
    """
    if isinstance(raw, MissingResumeData):
        return {}

    if isinstance(raw, StructuredResumeData):
        return dict(raw.mapping)

    try:
        decoded = json.loads(raw.text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(
            "resume_data is not valid JSON",
            document_id=document_id,
            raw_snippet=raw.text,
            original_error=e,
        ) from e

    if decoded is None:
        return {}

    if not isinstance(decoded, dict):
        raise MalformedDocumentError(
            f"resume_data decoded to {type(decoded).__name__}, expected an object",
            document_id=document_id,
            raw_snippet=raw.text,
        )

    return decoded


# ============================================================================
# Field coercion
# ============================================================================


def _as_text(value: Any) -> str:
    """Coerce a stored scalar to a display string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_list(value: Any, section_name: str) -> List[Any]:
    """Return value as a list; anything else becomes empty."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if value is not None:
        _log_warning(
            f"{section_name} is {type(value).__name__}, expected a list; using empty list"
        )
    return []


def _normalize_personal_info(value: Any) -> PersonalInfo:
    stored = value if isinstance(value, Mapping) else {}
    merged = {**PERSONAL_INFO_DEFAULTS, **stored}
    return PersonalInfo(
        **{
            attr: _as_text(merged[wire])
            for attr, wire in PersonalInfo.WIRE_KEYS.items()
        }
    )


def _build_work_entry(stored: Mapping[str, Any], entry_id: Any) -> WorkEntry:
    merged = {**WORK_ENTRY_DEFAULTS, **stored}
    return WorkEntry(
        id=entry_id,
        company=_as_text(merged["company"]),
        position=_as_text(merged["position"]),
        start_date=_as_text(merged["startDate"]),
        end_date=_as_text(merged["endDate"]),
        current=bool(merged["current"]),
        description=_as_text(merged["description"]),
    )


def _build_education_entry(stored: Mapping[str, Any], entry_id: Any) -> EducationEntry:
    merged = {**EDUCATION_ENTRY_DEFAULTS, **stored}
    return EducationEntry(
        id=entry_id,
        school=_as_text(merged["school"]),
        degree=_as_text(merged["degree"]),
        field_of_study=_as_text(merged["field"]),
        start_date=_as_text(merged["startDate"]),
        end_date=_as_text(merged["endDate"]),
    )


def _normalize_entries(
    value: Any, section_name: str, build: Callable[[Mapping[str, Any], Any], Any]
) -> tuple:
    """
    Normalize a list of work or education entries.

    Entries keep their stored id; entries stored without one get a fresh id
    that does not collide with any id already in the list.
    """
    items = _as_list(value, section_name)
    kept = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            _log_warning(f"Dropping {section_name}[{position}]: not an object ({item!r})")
            continue
        kept.append(item)

    used_ids = [item.get("id") for item in kept if item.get("id") not in (None, "")]
    entries = []
    for item in kept:
        entry_id = item.get("id")
        if entry_id in (None, ""):
            entry_id = generate_entry_id(used_ids)
            used_ids.append(entry_id)
            _log_debug(f"Assigned id {entry_id} to {section_name} entry without one")
        entries.append(build(item, entry_id))
    return tuple(entries)


def _normalize_skills(value: Any) -> tuple:
    return tuple(_as_text(skill) for skill in _as_list(value, "skills") if skill is not None)


# ============================================================================
# Orchestration
# ============================================================================


def normalize_resume_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge decoded resume_data over the empty defaults.

    Each top-level subsection is defaulted independently; personalInfo is
    merged key by key. Values are not type-checked here (see
    normalize_document for the typed result).

    Args:
        data: Decoded (possibly partial) resume_data

    Returns:
        Dict with all four subsections present
    """
    defaults = get_default_resume_data()
    personal_info = data.get("personalInfo")
    return {
        "personalInfo": {
            **defaults["personalInfo"],
            **(personal_info if isinstance(personal_info, Mapping) else {}),
        },
        "workExperience": data.get("workExperience") or defaults["workExperience"],
        "education": data.get("education") or defaults["education"],
        "skills": data.get("skills") or defaults["skills"],
    }


def normalize_document(raw: Mapping[str, Any]) -> ResumeDocument:
    """
    Produce a fully populated ResumeDocument from a stored row.

    Idempotent: normalize_document(doc.to_dict()) == doc.

    Args:
        raw: Row as returned by the persistence API (keys id, title,
             template_id, resume_data, created_at, updated_at; any may be absent)

    Returns:
        Normalized ResumeDocument

    Raises:
        MalformedDocumentError: If raw is not a mapping or resume_data cannot be decoded
    """
    if isinstance(raw, ResumeDocument):
        raw = raw.to_dict()

    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(
            f"Document is {type(raw).__name__}, expected an object", raw_snippet=repr(raw)
        )

    document_id = raw.get("id")
    tagged = classify_resume_data(raw.get("resume_data"), document_id=document_id)
    data = normalize_resume_data(decode_resume_data(tagged, document_id=document_id))

    template_id = raw.get("template_id", raw.get("templateId"))
    created_at = raw.get("created_at")
    updated_at = raw.get("updated_at")

    return ResumeDocument(
        title=_as_text(raw.get("title")),
        template_id=_as_text(template_id) or DEFAULT_TEMPLATE_ID,
        personal_info=_normalize_personal_info(data["personalInfo"]),
        work_experience=_normalize_entries(
            data["workExperience"], "workExperience", _build_work_entry
        ),
        education=_normalize_entries(data["education"], "education", _build_education_entry),
        skills=_normalize_skills(data["skills"]),
        id=document_id,
        created_at=None if created_at is None else _as_text(created_at),
        updated_at=None if updated_at is None else _as_text(updated_at),
    )


def load_document(raw: Mapping[str, Any]) -> ResumeDocument:
    """
    Normalize a stored row, logging the outcome.

    Thin logging wrapper around normalize_document() used at the storage
    boundary. Errors propagate unchanged.
    """
    try:
        document = normalize_document(raw)
    except MalformedDocumentError as e:
        _log_warning(f"Could not load document {e.document_id}: {e.message}")
        raise

    _log_debug(
        f"Loaded document {document.id}: {len(document.work_experience)} work, "
        f"{len(document.education)} education, {len(document.skills)} skills"
    )
    return document
