"""
VELLUM - resume editing, preview and export core

Turns a stored resume record into an editable document, projects it into a
preview, and captures that preview as a single-page PDF.

Architecture:
- Editing Context: Resume data model, normalization and section editors
- Rendering Context: Preview projection, layout templates and PDF export
- Storage Context: Session credential, persistence API client and list view
"""

__version__ = "0.1.0"
