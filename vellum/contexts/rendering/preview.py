"""
Preview Renderer

Pure projection of a ResumeDocument into a visual tree. The tree mirrors
the data model with conditional visibility and has no layout algorithm of
its own. Raster capture, the HTML preview and the plaintext view all draw
from the same tree, so what is exported is exactly what is previewed.

Tree shape:
    header
        name                    always (placeholder when fullName is empty)
        contact                 only if email/phone/location has a value
            contact_item ...
        link                    only if linkedin is non-empty
    summary   "Professional Summary"   only if summary is non-empty
        paragraph
    work_experience "Work Experience"  only if entries exist
        entry ...               document order
            entry_title         position
            entry_subtitle      company
            date_range          "start - end" or "start - Present"
            description         only if non-empty
    education "Education"              only if entries exist
        entry ...               (no current flag)
    skills "Skills"                    only if skills exist
        tag ...                 document order
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from vellum.contexts.editing.document import EducationEntry, ResumeDocument, WorkEntry

PLACEHOLDER_NAME = "Your Name"
PRESENT_LABEL = "Present"
CONTACT_SEPARATOR = " • "
ENTRY_SEPARATOR = " — "
DATE_SEPARATOR = " - "

SUMMARY_HEADING = "Professional Summary"
WORK_EXPERIENCE_HEADING = "Work Experience"
EDUCATION_HEADING = "Education"
SKILLS_HEADING = "Skills"


@dataclass(frozen=True)
class PreviewNode:
    """
    One element of the preview.

    Attributes:
        role: What the node shows (e.g., "name", "entry", "tag")
        text: Display text (heading text for section nodes)
        children: Child nodes in display order
    """

    role: str
    text: str = ""
    children: Tuple["PreviewNode", ...] = ()

    def __post_init__(self):
        # Section editors store values as given; display them as text
        if not isinstance(self.text, str):
            object.__setattr__(self, "text", "" if self.text is None else str(self.text))

    def child(self, role: str) -> Optional["PreviewNode"]:
        """First direct child with the given role, or None."""
        for node in self.children:
            if node.role == role:
                return node
        return None

    def child_text(self, role: str) -> str:
        node = self.child(role)
        return node.text if node else ""

    def find_all(self, role: str) -> List["PreviewNode"]:
        """All descendants with the given role, depth first."""
        found = []
        for node in self.children:
            if node.role == role:
                found.append(node)
            found.extend(node.find_all(role))
        return found


@dataclass(frozen=True)
class PreviewTree:
    """
    Rendered preview of one document.

    Attributes:
        template_id: Layout variant requested by the document
        header: Header node (always present)
        sections: Visible sections in display order
    """

    template_id: str
    header: PreviewNode
    sections: Tuple[PreviewNode, ...] = ()

    @property
    def headings(self) -> List[str]:
        return [section.text for section in self.sections]

    def section(self, kind: str) -> Optional[PreviewNode]:
        """Section by role ("work_experience") or heading text ("Work Experience")."""
        for section in self.sections:
            if kind in (section.role, section.text):
                return section
        return None

    @property
    def header_line(self) -> str:
        """Name followed by the contact items, joined by the contact separator."""
        parts = [self.header.child_text("name")]
        contact = self.header.child("contact")
        if contact:
            parts.extend(item.text for item in contact.children)
        return CONTACT_SEPARATOR.join(parts)

    def to_plaintext(self) -> str:
        """
        Line-oriented text projection of the preview.

        Used for terminal previews and tests; raster capture draws the tree
        directly instead.
        """
        lines = [self.header_line]
        linkedin = self.header.child_text("link")
        if linkedin:
            lines.append(linkedin)

        for section in self.sections:
            lines.append("")
            lines.append(section.text)
            if section.role == "skills":
                lines.append(", ".join(tag.text for tag in section.children))
                continue
            for node in section.children:
                if node.role == "paragraph":
                    lines.append(node.text)
                elif node.role == "entry":
                    lines.append(entry_line(node))
                    description = node.child_text("description")
                    if description:
                        lines.append(description)

        return "\n".join(lines)


def entry_line(entry: PreviewNode) -> str:
    """Title, subtitle and date range of an entry node joined on one line."""
    parts = [
        entry.child_text("entry_title"),
        entry.child_text("entry_subtitle"),
        entry.child_text("date_range"),
    ]
    return ENTRY_SEPARATOR.join(part for part in parts if part)


def format_date_range(start: str, end: str, current: bool = False) -> str:
    """
    Format a date range for display.

    "current" replaces the end date with "Present" regardless of its value.
    An entry with no dates at all (and not current) shows no range.
    """
    end_label = PRESENT_LABEL if current else end
    if not start and not end_label:
        return ""
    return f"{start}{DATE_SEPARATOR}{end_label}"


def format_degree(degree: str, field_of_study: str) -> str:
    if degree and field_of_study:
        return f"{degree} in {field_of_study}"
    return degree or field_of_study


def _text_node(role: str, text: str) -> Tuple[PreviewNode, ...]:
    """One-node tuple when text is non-empty, else empty."""
    return (PreviewNode(role, text),) if text else ()


def _render_header(doc: ResumeDocument) -> PreviewNode:
    info = doc.personal_info
    children = [PreviewNode("name", info.full_name or PLACEHOLDER_NAME)]

    contact_items = tuple(
        PreviewNode("contact_item", value)
        for value in (info.email, info.phone, info.location)
        if value
    )
    if contact_items:
        contact_text = CONTACT_SEPARATOR.join(item.text for item in contact_items)
        children.append(PreviewNode("contact", contact_text, contact_items))

    children.extend(_text_node("link", info.linkedin))
    return PreviewNode("header", children=tuple(children))


def _render_work_entry(entry: WorkEntry) -> PreviewNode:
    children = (
        PreviewNode("entry_title", entry.position),
        PreviewNode("entry_subtitle", entry.company),
        *_text_node("date_range", format_date_range(entry.start_date, entry.end_date, entry.current)),
        *_text_node("description", entry.description),
    )
    return PreviewNode("entry", children=children)


def _render_education_entry(entry: EducationEntry) -> PreviewNode:
    children = (
        PreviewNode("entry_title", format_degree(entry.degree, entry.field_of_study)),
        PreviewNode("entry_subtitle", entry.school),
        *_text_node("date_range", format_date_range(entry.start_date, entry.end_date)),
    )
    return PreviewNode("entry", children=children)


def render_preview(doc: ResumeDocument) -> PreviewTree:
    """
    Project a document into its preview tree.

    Args:
        doc: Normalized document

    Returns:
        PreviewTree with the header and every visible section
    """
    sections = []

    if doc.personal_info.summary:
        sections.append(
            PreviewNode(
                "summary",
                SUMMARY_HEADING,
                (PreviewNode("paragraph", doc.personal_info.summary),),
            )
        )

    if doc.work_experience:
        sections.append(
            PreviewNode(
                "work_experience",
                WORK_EXPERIENCE_HEADING,
                tuple(_render_work_entry(entry) for entry in doc.work_experience),
            )
        )

    if doc.education:
        sections.append(
            PreviewNode(
                "education",
                EDUCATION_HEADING,
                tuple(_render_education_entry(entry) for entry in doc.education),
            )
        )

    if doc.skills:
        sections.append(
            PreviewNode(
                "skills",
                SKILLS_HEADING,
                tuple(PreviewNode("tag", skill) for skill in doc.skills),
            )
        )

    return PreviewTree(
        template_id=doc.template_id,
        header=_render_header(doc),
        sections=tuple(sections),
    )
