"""
Raster Capture

Turns a preview tree into a bitmap. Capture is a capability: the export
pipeline only needs something with capture(tree, layout, scale) -> Image,
so a live-page screenshot implementation can replace the headless one
without touching export.

PillowCapture draws the tree directly with Pillow using the variant's
layout config (fonts, sizes, colours, spacing), in two passes:
1. Layout: walk the tree, wrap text to the content width, and record draw
   operations with absolute positions
2. Paint: allocate an image exactly as tall as the content and replay them

All layout values are preview pixels multiplied by the export scale, so a
scale of 2 yields a bitmap twice the preview width with proportionally
larger glyphs.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from vellum.contexts.rendering.logger import _log_debug
from vellum.contexts.rendering.preview import PreviewNode, PreviewTree


class RasterCapture(Protocol):
    """Anything that can rasterize a preview tree."""

    def capture(self, tree: PreviewTree, layout: Dict[str, Any], scale: float) -> Image.Image:
        ...


def load_font(candidates: Sequence[str], size: int):
    """
    Load the first available TrueType font from candidates.

    Bare file names are looked up in the system font directories. Falls back
    to Pillow's bundled default font at the requested size.
    """
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def wrap_text(text: str, font, max_width: int) -> List[str]:
    """
    Greedy word wrap to a pixel width.

    Explicit newlines start a new line; blank lines are kept. A single word
    wider than max_width is left on its own line rather than split.
    """
    lines = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if font.getlength(candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


@dataclass
class _DrawOp:
    kind: str  # "text", "line" or "box"
    xy: Any
    fill: str
    text: str = ""
    font: Any = None
    width: int = 1
    radius: int = 0


class _LayoutPass:
    """Positions every element of a preview tree for one layout config."""

    def __init__(self, layout: Dict[str, Any], scale: float):
        self.layout = layout
        self.scale = scale
        self.width = self.px(layout["canvas"]["width"])
        self.margin = self.px(layout["canvas"]["margin"])
        self.content_width = self.width - 2 * self.margin
        self.y = self.margin
        self.ops: List[_DrawOp] = []
        self._fonts: Dict[Tuple[str, str], Any] = {}

    def px(self, value: float) -> int:
        return round(value * self.scale)

    def font(self, style: str, size_key: str):
        key = (style, size_key)
        if key not in self._fonts:
            size = self.px(self.layout["sizes"][size_key])
            self._fonts[key] = load_font(self.layout["fonts"][style], size)
        return self._fonts[key]

    def line_height(self, size_key: str) -> int:
        return self.px(self.layout["sizes"][size_key] * self.layout["spacing"]["line"])

    def color(self, key: str) -> str:
        return self.layout["colors"][key]

    def gap(self, spacing_key: str) -> None:
        self.y += self.px(self.layout["spacing"][spacing_key])

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def text_block(
        self, text: str, style: str, size_key: str, color_key: str, align: str = "left"
    ) -> None:
        font = self.font(style, size_key)
        for line in wrap_text(text, font, self.content_width):
            if align == "center":
                x = self.margin + (self.content_width - font.getlength(line)) / 2
            else:
                x = self.margin
            self.ops.append(_DrawOp("text", (x, self.y), self.color(color_key), line, font))
            self.y += self.line_height(size_key)

    def rule(self, color_key: str, thickness: int = 2) -> None:
        width = max(1, self.px(thickness))
        self.ops.append(
            _DrawOp(
                "line",
                [(self.margin, self.y), (self.width - self.margin, self.y)],
                self.color(color_key),
                width=width,
            )
        )
        self.y += width

    def entry_head(self, title: str, subtitle: str, dates: str) -> None:
        """Title and subtitle on the left, date range right-aligned on the title line."""
        top = self.y
        dates_font = self.font("regular", "dates")
        dates_width = dates_font.getlength(dates) if dates else 0
        title_width = self.content_width - dates_width - (self.px(16) if dates else 0)

        title_font = self.font("bold", "entry_title")
        for line in wrap_text(title, title_font, max(1, int(title_width))) if title else []:
            self.ops.append(_DrawOp("text", (self.margin, self.y), self.color("name"), line, title_font))
            self.y += self.line_height("entry_title")

        if dates:
            x = self.width - self.margin - dates_width
            self.ops.append(_DrawOp("text", (x, top), self.color("muted"), dates, dates_font))
            self.y = max(self.y, top + self.line_height("dates"))

        if subtitle:
            self.text_block(subtitle, "regular", "body", "text")

    def tags(self, items: Sequence[str]) -> None:
        """Flow tags left to right, wrapping to a new row at the content edge."""
        font = self.font("regular", "tag")
        pad_x = self.px(self.layout["spacing"]["tag_padding_x"])
        pad_y = self.px(self.layout["spacing"]["tag_padding_y"])
        gap = self.px(self.layout["spacing"]["tag_gap"])
        row_height = self.line_height("tag") + 2 * pad_y

        x = self.margin
        for text in items:
            tag_width = round(font.getlength(text)) + 2 * pad_x
            if x > self.margin and x + tag_width > self.width - self.margin:
                x = self.margin
                self.y += row_height + gap
            box = [(x, self.y), (x + tag_width, self.y + row_height)]
            self.ops.append(
                _DrawOp("box", box, self.color("tag_background"), radius=self.px(4))
            )
            self.ops.append(
                _DrawOp("text", (x + pad_x, self.y + pad_y), self.color("tag_text"), text, font)
            )
            x += tag_width + gap
        self.y += row_height

    # ------------------------------------------------------------------
    # Tree walk
    # ------------------------------------------------------------------

    def header(self, node: PreviewNode) -> None:
        align = self.layout["header"]["align"]
        self.text_block(node.child_text("name"), "bold", "name", "name", align)
        contact = node.child("contact")
        if contact:
            self.y += self.px(4)
            self.text_block(contact.text, "regular", "contact", "muted", align)
        link = node.child_text("link")
        if link:
            self.text_block(link, "regular", "link", "link", align)
        self.gap("header_gap")
        if self.layout["header"]["rule"]:
            self.rule("rule")

    def section(self, node: PreviewNode) -> None:
        self.gap("section_gap")
        heading = node.text.upper() if self.layout["headings"]["uppercase"] else node.text
        self.text_block(heading, "bold", "heading", "heading")
        if self.layout["headings"]["rule"]:
            self.rule("rule", thickness=1)
        self.gap("heading_gap")

        if node.role == "skills":
            self.tags([tag.text for tag in node.children])
            return

        for child in node.children:
            if child.role == "paragraph":
                self.text_block(child.text, "regular", "body", "text")
            elif child.role == "entry":
                self.entry_head(
                    child.child_text("entry_title"),
                    child.child_text("entry_subtitle"),
                    child.child_text("date_range"),
                )
                description = child.child_text("description")
                if description:
                    self.y += self.px(4)
                    self.text_block(description, "regular", "body", "text")
                self.gap("entry_gap")


class PillowCapture:
    """Headless capture: draws the preview tree with Pillow."""

    def capture(self, tree: PreviewTree, layout: Dict[str, Any], scale: float) -> Image.Image:
        """
        Rasterize a preview tree.

        Args:
            tree: Preview tree from render_preview()
            layout: Merged layout config from TemplateRegistry.get_layout()
            scale: Upscaling factor applied to every layout dimension

        Returns:
            RGB image, canvas width * scale pixels wide, as tall as the content
        """
        if scale <= 0:
            raise ValueError(f"Capture scale must be positive, got {scale}")

        layout_pass = _LayoutPass(layout, scale)
        layout_pass.header(tree.header)
        for section in tree.sections:
            layout_pass.section(section)

        height = layout_pass.y + layout_pass.margin
        image = Image.new("RGB", (layout_pass.width, height), layout["canvas"]["background"])
        draw = ImageDraw.Draw(image)

        for op in layout_pass.ops:
            if op.kind == "text":
                draw.text(op.xy, op.text, font=op.font, fill=op.fill)
            elif op.kind == "line":
                draw.line(op.xy, fill=op.fill, width=op.width)
            elif op.kind == "box":
                draw.rounded_rectangle(op.xy, radius=op.radius, fill=op.fill)

        _log_debug(f"Captured {len(layout_pass.ops)} draw ops into {image.width}x{image.height} px")
        return image
