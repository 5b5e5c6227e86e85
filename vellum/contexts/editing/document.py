"""
Resume Document Data Structures

Defines the canonical in-memory shape of a resume: personal info, work
history, education and skills, plus the storage metadata carried alongside.

All structures are frozen. Editing never mutates a document; section editors
build a new one with dataclasses.replace(). Sequences are tuples for the
same reason.

Wire format (as stored by the persistence API):
    {
        "id": 12, "title": "...", "template_id": "modern",
        "resume_data": {
            "personalInfo": {"fullName": "...", ...},
            "workExperience": [{"id": 1700000000000, "company": "...", ...}],
            "education": [...],
            "skills": ["..."]
        },
        "created_at": "...", "updated_at": "..."
    }
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple

from vellum.contexts.editing.defaults import DEFAULT_TEMPLATE_ID
from vellum.utils.timestamp import epoch_millis


def generate_entry_id(existing_ids: Iterable[Any] = ()) -> int:
    """
    Generate an entry id from the current time.

    Ids only need to be unique within one document. When the clock has not
    advanced past the largest integer id already present (two entries added
    within the same millisecond), the next free integer is used.

    Args:
        existing_ids: Ids already used in the sequence

    Returns:
        Integer id, unique among existing_ids
    """
    candidate = epoch_millis()
    numeric = [i for i in existing_ids if isinstance(i, int) and not isinstance(i, bool)]
    if numeric and candidate <= max(numeric):
        candidate = max(numeric) + 1
    return candidate


@dataclass(frozen=True)
class PersonalInfo:
    """
    Contact and summary block shown in the resume header.

    Attributes:
        full_name: Name rendered as the header title
        email: Contact email
        phone: Contact phone
        location: City/region
        linkedin: Profile URL, rendered on its own line
        summary: Professional summary paragraph
    """

    # attribute name -> wire key
    WIRE_KEYS: ClassVar[Dict[str, str]] = {
        "full_name": "fullName",
        "email": "email",
        "phone": "phone",
        "location": "location",
        "linkedin": "linkedin",
        "summary": "summary",
    }

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in self.WIRE_KEYS.items()}


@dataclass(frozen=True)
class WorkEntry:
    """
    Single position in the work history.

    Attributes:
        id: Identity within the document (list keying only, never reassigned)
        company: Employer name
        position: Job title
        start_date: Free-form month/year
        end_date: Free-form month/year, ignored for display when current is set
        current: Still employed here; end date renders as "Present"
        description: Free text
    """

    WIRE_KEYS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "company": "company",
        "position": "position",
        "start_date": "startDate",
        "end_date": "endDate",
        "current": "current",
        "description": "description",
    }

    id: Any
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in self.WIRE_KEYS.items()}


@dataclass(frozen=True)
class EducationEntry:
    """
    Single education record.

    Attributes:
        id: Identity within the document (list keying only, never reassigned)
        school: Institution name
        degree: Degree title (e.g., "BSc")
        field_of_study: Field of study (wire key "field")
        start_date: Free-form year
        end_date: Free-form year
    """

    WIRE_KEYS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "school": "school",
        "degree": "degree",
        "field_of_study": "field",
        "start_date": "startDate",
        "end_date": "endDate",
    }

    id: Any
    school: str = ""
    degree: str = ""
    field_of_study: str = ""
    start_date: str = ""
    end_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in self.WIRE_KEYS.items()}


@dataclass(frozen=True)
class ResumeDocument:
    """
    Structured representation of one resume and its storage metadata.

    A normalized document always has every subsection present; consumers
    never need to check for absence.

    Attributes:
        title: User-facing label, also used for the export filename
        template_id: Layout family selecting a renderer variant
        personal_info: Header block
        work_experience: Positions in display order
        education: Education records in display order
        skills: Skill tags in display order (duplicates allowed)
        id: Storage id (None until first saved)
        created_at: Storage creation timestamp, passed through untouched
        updated_at: Storage update timestamp, passed through untouched
    """

    title: str = ""
    template_id: str = DEFAULT_TEMPLATE_ID
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    work_experience: Tuple[WorkEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    skills: Tuple[str, ...] = ()
    id: Optional[Any] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def empty(cls, title: str = "", template_id: str = DEFAULT_TEMPLATE_ID) -> "ResumeDocument":
        """All-defaults document for "new resume"."""
        return cls(title=title, template_id=template_id)

    def resume_data(self) -> Dict[str, Any]:
        """Nested resume_data blob in wire format."""
        return {
            "personalInfo": self.personal_info.to_dict(),
            "workExperience": [entry.to_dict() for entry in self.work_experience],
            "education": [entry.to_dict() for entry in self.education],
            "skills": list(self.skills),
        }

    def to_payload(self) -> Dict[str, Any]:
        """Fields the persistence API accepts on create/update."""
        return {
            "title": self.title,
            "template_id": self.template_id,
            "resume_data": self.resume_data(),
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Full wire representation, including storage metadata when known.

        normalize_document(doc.to_dict()) == doc holds for any normalized doc.
        """
        data = {}
        if self.id is not None:
            data["id"] = self.id
        data.update(self.to_payload())
        if self.created_at is not None:
            data["created_at"] = self.created_at
        if self.updated_at is not None:
            data["updated_at"] = self.updated_at
        return data
