"""Unit tests for the pure section edit operations."""

import pytest

from vellum.contexts.editing import (
    EducationEntry,
    ResumeDocument,
    WorkEntry,
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
from vellum.contexts.editing.section_editors import editable_fields


@pytest.mark.unit
def test_edits_return_new_documents():
    """Test that edits never modify the input document."""
    doc = ResumeDocument.empty()
    edited = set_title(doc, "New title")

    assert edited.title == "New title"
    assert doc.title == ""
    assert edited is not doc


@pytest.mark.unit
def test_set_personal_field_replaces_only_that_key():
    """Test that one personalInfo field changes and the others do not."""
    doc = set_personal_field(ResumeDocument.empty(), "email", "ada@example.com")
    doc = set_personal_field(doc, "fullName", "Ada Lovelace")

    assert doc.personal_info.email == "ada@example.com"
    assert doc.personal_info.full_name == "Ada Lovelace"
    assert doc.personal_info.phone == ""


@pytest.mark.unit
def test_set_personal_field_accepts_attribute_names():
    """Test that snake_case attribute names work as well as wire keys."""
    doc = set_personal_field(ResumeDocument.empty(), "full_name", "Ada")
    assert doc.personal_info.full_name == "Ada"


@pytest.mark.unit
def test_set_personal_field_rejects_unknown_field():
    """Test that only the six personalInfo keys are accepted."""
    with pytest.raises(ValueError, match="Unknown personalInfo field"):
        set_personal_field(ResumeDocument.empty(), "github", "ada")


@pytest.mark.unit
def test_set_template():
    """Test that template_id is replaced verbatim."""
    assert set_template(ResumeDocument.empty(), "classic").template_id == "classic"


@pytest.mark.unit
def test_add_work_entry_appends_blank_entry():
    """Test a new work entry has an id and all-empty fields."""
    doc = add_work_entry(ResumeDocument.empty())
    entry = doc.work_experience[0]

    assert isinstance(entry.id, int)
    assert entry == WorkEntry(id=entry.id)
    assert entry.current is False


@pytest.mark.unit
def test_added_entries_have_unique_ids():
    """Test ids stay unique when entries are added within the same millisecond."""
    doc = ResumeDocument.empty()
    for _ in range(5):
        doc = add_work_entry(doc)

    ids = [entry.id for entry in doc.work_experience]
    assert len(set(ids)) == 5
    assert ids == sorted(ids)


@pytest.mark.unit
def test_add_then_remove_last_work_entry_restores_document(qa_engineer):
    """Test add_work_entry followed by removing the last entry gives an equal document."""
    doc = add_work_entry(qa_engineer)
    restored = remove_work_entry(doc, len(doc.work_experience) - 1)

    assert restored == qa_engineer


@pytest.mark.unit
def test_add_then_remove_last_education_entry_restores_document(qa_engineer):
    """Test the same property for education."""
    doc = add_education_entry(qa_engineer)
    assert remove_education_entry(doc, len(doc.education) - 1) == qa_engineer


@pytest.mark.unit
def test_update_work_entry_changes_one_field(qa_engineer):
    """Test update_work_entry touches only the addressed entry and field."""
    doc = update_work_entry(qa_engineer, 1, "endDate", "Jan 2021")

    assert doc.work_experience[1].end_date == "Jan 2021"
    assert doc.work_experience[1].company == qa_engineer.work_experience[1].company
    assert doc.work_experience[0] == qa_engineer.work_experience[0]
    assert doc.work_experience[1].id == qa_engineer.work_experience[1].id


@pytest.mark.unit
def test_update_education_entry_field_alias(qa_engineer):
    """Test the education "field" wire key maps to field_of_study."""
    doc = update_education_entry(qa_engineer, 0, "field", "Physics")
    assert doc.education[0].field_of_study == "Physics"


@pytest.mark.unit
@pytest.mark.parametrize("index", [-1, 2, 99])
def test_update_work_entry_out_of_range(qa_engineer, index):
    """Test that out-of-range indices, negative included, raise IndexError."""
    with pytest.raises(IndexError):
        update_work_entry(qa_engineer, index, "company", "X")


@pytest.mark.unit
@pytest.mark.parametrize(
    "operation", [remove_work_entry, remove_education_entry, remove_skill]
)
def test_remove_out_of_range(operation):
    """Test removal from an empty section raises IndexError."""
    with pytest.raises(IndexError):
        operation(ResumeDocument.empty(), 0)


@pytest.mark.unit
def test_entry_ids_cannot_be_edited(qa_engineer):
    """Test that update operations refuse to reassign an id."""
    with pytest.raises(ValueError, match="cannot be edited"):
        update_work_entry(qa_engineer, 0, "id", 123)
    with pytest.raises(ValueError, match="cannot be edited"):
        update_education_entry(qa_engineer, 0, "id", 123)


@pytest.mark.unit
def test_update_rejects_unknown_entry_field(qa_engineer):
    """Test that a field outside the entry model is rejected."""
    with pytest.raises(ValueError):
        update_work_entry(qa_engineer, 0, "salary", "lots")


@pytest.mark.unit
def test_remove_work_entry_shifts_later_entries(qa_engineer):
    """Test removal by position keeps the remaining entries and their ids."""
    doc = remove_work_entry(qa_engineer, 0)

    assert doc.work_experience == qa_engineer.work_experience[1:]


@pytest.mark.unit
def test_add_skill_appends_verbatim():
    """Test skills are appended as given, empty strings and duplicates included."""
    doc = ResumeDocument.empty()
    for skill in ["Python", "", "Python"]:
        doc = add_skill(doc, skill)

    assert doc.skills == ("Python", "", "Python")
    assert remove_skill(doc, 1).skills == ("Python", "Python")


@pytest.mark.unit
def test_editable_fields_exclude_id():
    """Test the CLI-facing field list uses wire keys and omits id."""
    assert editable_fields(WorkEntry) == (
        "company", "position", "startDate", "endDate", "current", "description"
    )
    assert "field" in editable_fields(EducationEntry)
    assert "id" not in editable_fields(EducationEntry)
