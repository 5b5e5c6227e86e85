"""Unit tests for TemplateRegistry class."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from vellum.contexts.rendering.registries import TemplateRegistry


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry.default_template_id == "modern"
    assert registry._layout_cache == {}


@pytest.mark.unit
def test_available_templates():
    """Test that both shipped variants are discovered."""
    assert TemplateRegistry().available_templates() == ["classic", "modern"]


@pytest.mark.unit
def test_get_layout_merges_base():
    """Test a variant layout is merged over base.yaml."""
    registry = TemplateRegistry()
    classic = registry.get_layout("classic")
    modern = registry.get_layout("modern")

    # Overridden by classic
    assert classic["header"]["align"] == "left"
    assert classic["headings"]["uppercase"] is True
    assert classic["fonts"]["regular"][0] == "DejaVuSerif.ttf"
    # Inherited from base
    assert classic["canvas"]["width"] == modern["canvas"]["width"] == 794
    assert classic["sizes"] == modern["sizes"]
    assert classic["template_id"] == "classic"


@pytest.mark.unit
def test_unknown_template_falls_back_to_default():
    """Test that an unknown template_id resolves to modern."""
    registry = TemplateRegistry()

    assert registry.resolve("fancy") == "modern"
    assert registry.resolve("") == "modern"
    assert registry.get_layout("fancy")["template_id"] == "modern"


@pytest.mark.unit
def test_layout_caching():
    """Test that layouts are cached after first load."""
    registry = TemplateRegistry()

    layout1 = registry.get_layout("classic")
    assert registry.is_cached("classic")

    layout2 = registry.get_layout("classic")
    assert layout1 is layout2


@pytest.mark.unit
def test_template_caching():
    """Test that preview templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("modern")
    template2 = registry.get_template("modern")
    assert template1 is template2


@pytest.mark.unit
def test_get_layout_path():
    """Test getting layout file path."""
    path = TemplateRegistry().get_layout_path("classic")

    assert isinstance(path, Path)
    assert path.name == "layout.yaml"
    assert path.parent.name == "classic"


@pytest.mark.unit
def test_clear_cache():
    """Test cache clearing."""
    registry = TemplateRegistry()

    registry.get_layout("modern")
    registry.get_template("modern")
    assert registry.is_cached("modern")

    registry.clear_cache()
    assert not registry.is_cached("modern")


@pytest.mark.unit
def test_missing_preview_template(tmp_path):
    """Test error handling for a variant without a preview template."""
    (tmp_path / "bare").mkdir()
    (tmp_path / "bare" / "layout.yaml").write_text("header:\n  align: left\n")

    registry = TemplateRegistry(templates_path=tmp_path, default_template_id="bare")

    assert registry.get_layout("bare")["header"]["align"] == "left"
    with pytest.raises(TemplateNotFound):
        registry.get_template("bare")


@pytest.mark.unit
def test_missing_default_variant(tmp_path):
    """Test that a registry whose default variant is absent cannot load layouts."""
    registry = TemplateRegistry(templates_path=tmp_path)

    with pytest.raises(FileNotFoundError):
        registry.get_layout("modern")
