"""
Template family configuration.

A TemplateConfig is pure data: colors, content limits, page geometry and the
placement of each section into a page region. The layout engine reads these
values and nothing else, so a new template family is a new TemplateConfig
value (usually a new entry in templates.yaml), never a change to the engine.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

from rework.contexts.templating.exceptions import InvalidTemplateConfigError

COLUMN_LAYOUTS = ("single", "sidebar", "two-column")
REGIONS = ("full", "main", "side")
SECTIONS = ("header", "summary", "experience", "skills", "education")


@dataclass(frozen=True)
class TemplateColors:
    primary: str = "#1e40af"
    accent: str = "#3b82f6"
    secondary: str = "#64748b"
    text: str = "#1f2937"


@dataclass(frozen=True)
class TemplateLimits:
    """
    Character and entry caps applied before layout.

    Attributes:
        summary_chars: Max summary length (sentence-preserving truncation)
        job_description_chars: Max length of a job description used in place of bullets
        achievement_chars: Max length of a single achievement bullet
        max_achievements_per_job: Bullets kept per job (highest scoring first)
        max_skills_shown: Skills listed in the skills block
        max_jobs_shown: Job entries laid out, in document order
        max_education_shown: Education entries laid out, in document order
    """

    summary_chars: int = 525
    job_description_chars: int = 1125
    achievement_chars: int = 200
    max_achievements_per_job: int = 4
    max_skills_shown: int = 18
    max_jobs_shown: int = 4
    max_education_shown: int = 3


@dataclass(frozen=True)
class TemplateGeometry:
    """
    Page geometry in points (612 = US Letter width).

    Fixed sub-heights (header, section titles, job/education headers, tag rows)
    are per-template constants; every container height is still derived by
    summing its children.
    """

    page_width: float = 612
    column_layout: str = "single"
    base_font_size: float = 12
    line_height: float = 1.4
    margin: float = 40
    side_width: float = 160
    column_gap: float = 20
    header_height: float = 80
    section_title_height: float = 22
    job_header_height: float = 34
    education_header_height: float = 30
    tag_height: float = 14
    card_padding: float = 0
    bullet_indent: float = 14
    section_gap: float = 18
    entry_gap: float = 10
    bottom_margin: float = 40
    max_height: float = 1100

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin


@dataclass(frozen=True)
class TemplateConfig:
    """
    Complete definition of one template family.

    Attributes:
        name: Template family name (e.g., "professional")
        colors: Color scheme (primary/accent overridable per render)
        limits: Content caps
        geometry: Page and column geometry
        section_order: Order in which sections are placed
        placement: Section name -> region ("full", "main" or "side")
        section_titles: Section name -> heading text (sections without one get no heading)
    """

    name: str
    colors: TemplateColors = field(default_factory=TemplateColors)
    limits: TemplateLimits = field(default_factory=TemplateLimits)
    geometry: TemplateGeometry = field(default_factory=TemplateGeometry)
    section_order: Tuple[str, ...] = SECTIONS
    placement: Tuple[Tuple[str, str], ...] = (
        ("header", "full"),
        ("summary", "full"),
        ("experience", "main"),
        ("skills", "main"),
        ("education", "main"),
    )
    section_titles: Tuple[Tuple[str, str], ...] = ()

    def region_of(self, section: str) -> str:
        return dict(self.placement).get(section, "main")

    def title_of(self, section: str) -> str:
        return dict(self.section_titles).get(section, "")

    def with_colors(self, primary: Optional[str] = None, accent: Optional[str] = None) -> "TemplateConfig":
        """Return a copy with caller color overrides applied (None keeps the default)."""
        colors = replace(
            self.colors,
            primary=primary or self.colors.primary,
            accent=accent or self.colors.accent,
        )
        return replace(self, colors=colors)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "TemplateConfig":
        """
        Build a TemplateConfig from a plain dict (one templates.yaml entry).

        Raises:
            InvalidTemplateConfigError: On unknown keys, wrong value types,
                unknown column layouts, regions or sections
        """
        try:
            colors = TemplateColors(**data.get("colors", {}))
            limits = TemplateLimits(**data.get("limits", {}))
            geometry = TemplateGeometry(**data.get("geometry", {}))
        except TypeError as e:
            raise InvalidTemplateConfigError(str(e), template_name=name) from e

        _check_numeric(name, limits)
        _check_numeric(name, geometry)

        if geometry.column_layout not in COLUMN_LAYOUTS:
            raise InvalidTemplateConfigError(
                f"Unknown column_layout '{geometry.column_layout}', expected one of {COLUMN_LAYOUTS}",
                template_name=name,
            )

        if geometry.base_font_size <= 0 or geometry.line_height <= 0:
            raise InvalidTemplateConfigError(
                "base_font_size and line_height must be positive", template_name=name
            )

        side_share = geometry.side_width + geometry.column_gap
        if geometry.column_layout != "single" and geometry.content_width - side_share <= 0:
            raise InvalidTemplateConfigError(
                f"side_width + column_gap ({side_share}) leaves no room for the main column",
                template_name=name,
            )

        section_order = tuple(data.get("section_order", SECTIONS))
        placement = dict(data.get("placement", {}))
        section_titles = dict(data.get("section_titles", {}))

        unknown = set(section_order) | set(placement) | set(section_titles)
        unknown -= set(SECTIONS)
        if unknown:
            raise InvalidTemplateConfigError(
                f"Unknown sections {sorted(unknown)}, expected {SECTIONS}", template_name=name
            )

        bad_regions = {region for region in placement.values() if region not in REGIONS}
        if bad_regions:
            raise InvalidTemplateConfigError(
                f"Unknown regions {sorted(bad_regions)}, expected {REGIONS}", template_name=name
            )

        return cls(
            name=name,
            colors=colors,
            limits=limits,
            geometry=geometry,
            section_order=section_order,
            placement=tuple((section, placement.get(section, "main")) for section in SECTIONS),
            section_titles=tuple(sorted(section_titles.items())),
        )


def _check_numeric(name: str, values) -> None:
    """Reject negative or non-numeric limits and geometry values."""
    for f in fields(values):
        value = getattr(values, f.name)
        if isinstance(value, str):
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise InvalidTemplateConfigError(
                f"'{f.name}' must be a non-negative number, got {value!r}", template_name=name
            )
