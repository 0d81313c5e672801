"""Unit tests for TemplateRegistry class."""

import pytest

from rework.contexts.templating.exceptions import InvalidTemplateConfigError
from rework.contexts.templating.template_config import TemplateConfig
from rework.contexts.templating.template_registry import DEFAULT_TEMPLATES_PATH, TemplateRegistry


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH])
    assert registry.config_paths == [DEFAULT_TEMPLATES_PATH]
    assert registry._cache == {}


@pytest.mark.unit
def test_four_families_declared():
    """Test the bundled families."""
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH])
    assert registry.names() == ["creative", "minimal", "modern", "professional"]
    assert registry.has_template("modern")
    assert not registry.has_template("Modern")


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, layout, primary, summary_chars",
    [
        ("professional", "single", "#1e40af", 525),
        ("modern", "sidebar", "#7c3aed", 450),
        ("minimal", "single", "#059669", 495),
        ("creative", "two-column", "#ea580c", 480),
    ],
)
def test_family_definitions(name, layout, primary, summary_chars):
    """Test each family merges over the shared defaults."""
    config = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH]).get_config(name)

    assert isinstance(config, TemplateConfig)
    assert config.name == name
    assert config.geometry.column_layout == layout
    assert config.colors.primary == primary
    assert config.limits.summary_chars == summary_chars
    assert config.geometry.max_height == 1100
    assert config.geometry.page_width == 612


@pytest.mark.unit
def test_modern_places_identity_in_sidebar():
    """Test per-family placement overrides."""
    config = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH]).get_config("modern")
    assert config.region_of("header") == "side"
    assert config.region_of("experience") == "main"
    assert config.title_of("summary") == "About Me"
    assert config.title_of("education") == "Education"


@pytest.mark.unit
def test_template_caching():
    """Test that configs are cached after first load."""
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH])

    config1 = registry.get_config("minimal")
    assert registry.is_cached("minimal")

    config2 = registry.get_config("minimal")
    assert config1 is config2


@pytest.mark.unit
def test_unknown_template_falls_back_to_professional():
    """Test fallback for unknown or missing names."""
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH])
    assert registry.get_config("nonexistent_type").name == "professional"
    assert registry.get_config(None).name == "professional"
    assert registry.get_config("  Modern ").name == "modern"


@pytest.mark.unit
def test_color_overrides():
    """Test primary/accent overrides leave the cached config untouched."""
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH])
    custom = registry.get_config("creative", colors={"primary": "#000000", "accent": None})

    assert custom.colors.primary == "#000000"
    assert custom.colors.accent == "#f97316"
    assert registry.get_config("creative").colors.primary == "#ea580c"


@pytest.mark.unit
def test_clear_cache():
    """Test cache clearing."""
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH])

    registry.get_config("professional")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0


@pytest.mark.unit
def test_extra_file_adds_family(tmp_path):
    """Test that a fifth family is pure data in another file."""
    extra = tmp_path / "extra_templates.yaml"
    extra.write_text(
        "templates:\n"
        "  compact:\n"
        "    colors: {primary: '#111111', accent: '#222222'}\n"
        "    limits: {summary_chars: 300, job_description_chars: 600,"
        " max_achievements_per_job: 2, max_skills_shown: 10}\n"
        "    geometry: {column_layout: two-column, base_font_size: 10}\n"
    )
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH, extra])
    config = registry.get_config("compact")

    assert "compact" in registry.names()
    assert config.geometry.column_layout == "two-column"
    assert config.geometry.margin == 40
    assert config.title_of("experience") == "Professional Experience"


@pytest.mark.unit
def test_missing_config_file(tmp_path):
    """Test error handling for a missing config file."""
    registry = TemplateRegistry(config_paths=[tmp_path / "missing.yaml"])
    with pytest.raises(FileNotFoundError):
        registry.names()


@pytest.mark.unit
@pytest.mark.parametrize(
    "geometry",
    [
        "{column_layout: diagonal}",
        "{column_layout: sidebar, side_width: 600}",
        "{base_font_size: 0}",
        "{margin: -4}",
        "{unknown_key: 3}",
    ],
)
def test_invalid_family_raises(tmp_path, geometry):
    """Test malformed template data raises InvalidTemplateConfigError."""
    extra = tmp_path / "broken.yaml"
    extra.write_text(f"templates:\n  broken:\n    geometry: {geometry}\n")
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH, extra])

    with pytest.raises(InvalidTemplateConfigError):
        registry.get_config("broken")


@pytest.mark.unit
def test_unknown_region_raises(tmp_path):
    """Test placement into an undeclared region."""
    extra = tmp_path / "broken.yaml"
    extra.write_text("templates:\n  broken:\n    placement: {skills: footer}\n")
    registry = TemplateRegistry(config_paths=[DEFAULT_TEMPLATES_PATH, extra])

    with pytest.raises(InvalidTemplateConfigError):
        registry.get_config("broken")
