"""
PDF inspection utilities for exported documents.

Helper functions:
    page_count: Quick page count without full extraction.
    page_size: Width and height of a page in PDF points.
    image_count: Number of embedded images on a page.
"""

from pathlib import Path
from typing import Optional, Tuple

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def page_size(pdf_path: Path, page_number: int = 1) -> Tuple[float, float]:
    """
    Get the size of a page in PDF points (1/72 inch).

    Args:
        pdf_path: Path to PDF file
        page_number: 1-indexed page number

    Returns:
        (width, height) in points
    """
    with pdfplumber.open(pdf_path) as pdf:
        page = pdf.pages[page_number - 1]
        return float(page.width), float(page.height)


def image_count(pdf_path: Path, page_number: int = 1) -> int:
    """Count images embedded on a page."""
    with pdfplumber.open(pdf_path) as pdf:
        return len(pdf.pages[page_number - 1].images)
