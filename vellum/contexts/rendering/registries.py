"""
Template Registry

Maps a document's template_id to a renderer variant and caches what each
variant needs:
- layout.yaml: fonts, sizes, colours and spacing used by raster capture,
  merged over the shared templates/base.yaml
- preview.html.jinja: HTML preview template

Variants live in templates/{template_id}/. An unknown template_id falls back
to the default variant so every stored document stays renderable.
"""

import os
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound
from omegaconf import OmegaConf

from vellum.contexts.editing.defaults import DEFAULT_TEMPLATE_ID
from vellum.contexts.rendering.logger import _log_warning

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("VELLUM_TEMPLATES_PATH", Path(__file__).resolve().parent / "templates")
)

BASE_LAYOUT_FILE = "base.yaml"
LAYOUT_FILE = "layout.yaml"
PREVIEW_TEMPLATE_FILE = "preview.html.jinja"


class TemplateRegistry:
    """
    Registry for loading and caching layout configs and preview templates.

    Layout configs are loaded with OmegaConf and returned as plain dicts.
    Jinja2 autoescaping is always on: every value in the preview comes from
    user input.
    """

    def __init__(self, templates_path: Path = None, default_template_id: str = DEFAULT_TEMPLATE_ID):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding base.yaml and one directory per
                            variant. Defaults to VELLUM_TEMPLATES_PATH from environment
            default_template_id: Variant used when a template_id is unknown
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self.default_template_id = default_template_id
        self._layout_cache: Dict[str, Dict[str, Any]] = {}
        self._template_cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def available_templates(self) -> List[str]:
        """Names of all variants that ship a layout.yaml, sorted."""
        return sorted(
            path.parent.name for path in self.templates_path.glob(f"*/{LAYOUT_FILE}")
        )

    def is_known(self, template_id: str) -> bool:
        return bool(template_id) and (self.templates_path / template_id / LAYOUT_FILE).exists()

    def resolve(self, template_id: str) -> str:
        """
        Return template_id if a variant exists for it, else the default variant.

        Args:
            template_id: Value stored on the document

        Returns:
            Variant name that can be loaded
        """
        if self.is_known(template_id):
            return template_id
        _log_warning(
            f"Unknown template '{template_id}', falling back to '{self.default_template_id}'"
        )
        return self.default_template_id

    def get_layout(self, template_id: str) -> Dict[str, Any]:
        """
        Get the merged layout config for a variant, loading and caching it if necessary.

        Args:
            template_id: Variant name (resolved through resolve())

        Returns:
            Dict with page, canvas, fonts, sizes, colors, spacing and header keys,
            plus "template_id" naming the variant actually used

        Raises:
            FileNotFoundError: If the default variant itself is missing
        """
        resolved = self.resolve(template_id)
        if resolved in self._layout_cache:
            return self._layout_cache[resolved]

        layout_path = self.get_layout_path(resolved)
        if not layout_path.exists():
            raise FileNotFoundError(f"Layout config not found for template '{resolved}' at {layout_path}")

        base_path = self.templates_path / BASE_LAYOUT_FILE
        base = OmegaConf.load(base_path) if base_path.exists() else OmegaConf.create()
        merged = OmegaConf.merge(base, OmegaConf.load(layout_path))
        layout = OmegaConf.to_container(merged, resolve=True)
        layout["template_id"] = resolved

        self._layout_cache[resolved] = layout
        return layout

    def get_template(self, template_id: str) -> Template:
        """
        Get the HTML preview template for a variant.

        Raises:
            TemplateNotFound: If the variant has no preview template
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        resolved = self.resolve(template_id)
        if resolved in self._template_cache:
            return self._template_cache[resolved]

        template_path = f"{resolved}/{PREVIEW_TEMPLATE_FILE}"
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Preview template not found for '{resolved}' at {self.templates_path / template_path}"
            ) from e

        self._template_cache[resolved] = template
        return template

    def get_layout_path(self, template_id: str) -> Path:
        return self.templates_path / template_id / LAYOUT_FILE

    def clear_cache(self):
        """Clear layout and template caches."""
        self._layout_cache.clear()
        self._template_cache.clear()

    def is_cached(self, template_id: str) -> bool:
        return template_id in self._layout_cache or template_id in self._template_cache
