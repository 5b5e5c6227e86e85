"""
Default values for VELLUM resume documents.

Provides shared defaults used by:
- normalizer.py (fill missing subsections on load)
- section_editors.py (blank entries appended by add operations)
- storage summaries (title for newly created resumes)
"""

from typing import Any, Dict

DEFAULT_TEMPLATE_ID = "modern"

# Title given to resumes created from the list view
NEW_RESUME_TITLE = "Untitled Resume"

# Appended to the title of a duplicated resume
DUPLICATE_TITLE_SUFFIX = " Copy"

# personalInfo keys in display order
PERSONAL_INFO_DEFAULTS = {
    "fullName": "",
    "email": "",
    "phone": "",
    "location": "",
    "linkedin": "",
    "summary": "",
}

WORK_ENTRY_DEFAULTS = {
    "company": "",
    "position": "",
    "startDate": "",
    "endDate": "",
    "current": False,
    "description": "",
}

EDUCATION_ENTRY_DEFAULTS = {
    "school": "",
    "degree": "",
    "field": "",
    "startDate": "",
    "endDate": "",
}


def get_default_resume_data() -> Dict[str, Any]:
    """
    Get the complete empty resume_data structure.

    Returns a fresh dict each call, so callers may mutate it freely.

    Returns:
        Dict with personalInfo, workExperience, education and skills
    """
    return {
        "personalInfo": PERSONAL_INFO_DEFAULTS.copy(),
        "workExperience": [],
        "education": [],
        "skills": [],
    }
