"""
HTML preview output.

Renders a document's preview tree through its variant's Jinja2 template,
for viewing in a browser. All user text is autoescaped.
"""

from pathlib import Path

from jinja2 import TemplateError

from vellum.contexts.editing.document import ResumeDocument
from vellum.contexts.rendering.exceptions import TemplateRenderError
from vellum.contexts.rendering.preview import CONTACT_SEPARATOR, render_preview
from vellum.contexts.rendering.registries import TemplateRegistry


def render_preview_html(doc: ResumeDocument, registry: TemplateRegistry = None) -> str:
    """
    Render a document as a standalone HTML page.

    Args:
        doc: Normalized document
        registry: Template registry (default: new registry on TEMPLATES_PATH)

    Returns:
        HTML string

    Raises:
        TemplateRenderError: If the variant's template fails to render
    """
    registry = registry or TemplateRegistry()
    template_id = registry.resolve(doc.template_id)
    template = registry.get_template(template_id)

    try:
        return template.render(
            tree=render_preview(doc),
            layout=registry.get_layout(template_id),
            title=doc.title,
            separator=CONTACT_SEPARATOR,
        )
    except TemplateError as e:
        raise TemplateRenderError(
            "Failed to render HTML preview", template_id=template_id, original_error=e
        ) from e


def write_preview_html(doc: ResumeDocument, output_path: Path, registry: TemplateRegistry = None) -> Path:
    """Render and write the HTML preview, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_preview_html(doc, registry), encoding="utf-8")
    return output_path
