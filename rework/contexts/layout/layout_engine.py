"""
Dynamic layout engine.

Turns a ResumeDocument and a TemplateConfig into a LayoutPlan. Every block
height is estimated from its (already truncated) content, blocks are stacked
per column with running cursors, and the page height is derived from the
lowest block. When the page comes out taller than the template's target, the
engine tightens the font sizes once and re-lays out; if that is not enough it
drops trailing content instead of shrinking text further.

Column strategies (TemplateGeometry.column_layout):
- single: one column; every region shares the same cursor
- sidebar: side column on the left, main column on the right
- two-column: main column on the left, side column on the right

Blocks placed in the "full" region span the content width and push every
column cursor below them.

The engine is a pure function of its inputs and keeps no state between calls.
"""

from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from rework.contexts.layout.font_scaler import FontSizes, is_at_floor, scale, tighten
from rework.contexts.layout.layout_plan import BlockKind, LayoutPlan, PositionedBlock
from rework.contexts.layout.logger import _log_debug, log_adjustment, log_overflow
from rework.contexts.layout.text_fitter import estimate_height, line_floor, truncate
from rework.contexts.targeting.content_scorer import ContentScorer
from rework.contexts.templating.defaults import fallback_bullet
from rework.contexts.templating.resume_data_structure import EduEntry, JobEntry, ResumeDocument
from rework.contexts.templating.template_config import TemplateConfig, TemplateGeometry

TAG_SEPARATOR = " • "
SKILL_SEPARATOR = " • "
COURSEWORK_LABEL = "Coursework: "


def column_spans(geometry: TemplateGeometry) -> Dict[str, Tuple[float, float]]:
    """
    Horizontal extent (x, width) of each region.

    Example:
        >>> column_spans(TemplateGeometry(column_layout="sidebar", margin=20, side_width=174, column_gap=40))["main"]
        (234, 358)
    """
    margin = geometry.margin
    content_width = max(geometry.content_width, 0)
    if geometry.column_layout == "single":
        return {region: (margin, content_width) for region in ("full", "main", "side")}

    side_width = min(geometry.side_width, content_width)
    main_width = max(content_width - side_width - geometry.column_gap, 0)
    if geometry.column_layout == "sidebar":
        side = (margin, side_width)
        main = (margin + side_width + geometry.column_gap, main_width)
    else:
        main = (margin, main_width)
        side = (margin + main_width + geometry.column_gap, side_width)
    return {"full": (margin, content_width), "main": main, "side": side}


def _moved(block: PositionedBlock, dx: float, dy: float) -> PositionedBlock:
    """Translate a block and all of its children."""
    return replace(
        block,
        x=block.x + dx,
        y=block.y + dy,
        children=tuple(_moved(child, dx, dy) for child in block.children),
    )


class _ColumnCursors:
    """Running bottom edge of each column while blocks are being placed."""

    def __init__(self, geometry: TemplateGeometry):
        self.single = geometry.column_layout == "single"
        self.spans = column_spans(geometry)
        self.bottoms = {"main": 0.0, "side": 0.0}
        self.started = {"main": False, "side": False}

    def _key(self, region: str) -> str:
        return "main" if self.single else region

    def reserve(self, region: str, height: float, gap: float) -> Tuple[float, float]:
        """Claim vertical space in a region; returns the (x, y) of the new block."""
        x, _ = self.spans[region]

        if region == "full" and not self.single:
            y = max(self.bottoms.values())
            if any(self.started.values()):
                y += gap
            for key in self.bottoms:
                self.bottoms[key] = y + height
                self.started[key] = True
            return x, y

        key = self._key(region)
        y = self.bottoms[key] + (gap if self.started[key] else 0)
        self.bottoms[key] = y + height
        self.started[key] = True
        return x, y


class LayoutEngine:
    """
    Computes LayoutPlans for any template family.

    Attributes:
        scorer: Ranks achievements when a job has more than the template allows
    """

    def __init__(self, scorer: Optional[ContentScorer] = None):
        self.scorer = scorer or ContentScorer()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def layout(self, doc: ResumeDocument, config: TemplateConfig) -> LayoutPlan:
        """
        Lay out a document for one template family.

        Args:
            doc: Normalized resume document
            config: Template family configuration

        Returns:
            LayoutPlan with every block positioned. plan.adjustments lists any
            font tightening or content trimming that was needed to fit
            geometry.max_height (empty when the content fit as-is).
        """
        geometry = config.geometry
        sizes = scale(doc.total_content_length, geometry.base_font_size)
        adjustments: List[str] = []

        def note(message: str) -> None:
            adjustments.append(message)
            log_adjustment(config.name, message)

        blocks, page_height = self._place_sections(doc, config, sizes)

        if page_height > geometry.max_height and not is_at_floor(sizes):
            tightened = tighten(sizes, geometry.base_font_size)
            note(
                f"tightened font scale {sizes.scale_factor:.2f} -> {tightened.scale_factor:.2f} "
                f"(page height {page_height:.1f} > {geometry.max_height:.1f})"
            )
            sizes = tightened
            blocks, page_height = self._place_sections(doc, config, sizes)

        trimmed = doc
        while page_height > geometry.max_height:
            step = self._trim_step(trimmed, config)
            if step is None:
                break
            trimmed, message = step
            note(message)
            blocks, page_height = self._place_sections(trimmed, config, sizes)

        if page_height > geometry.max_height:
            log_overflow(config.name, page_height, geometry.max_height)

        return LayoutPlan(
            template=config.name,
            page_width=geometry.page_width,
            page_height=page_height,
            font_sizes=sizes,
            blocks=tuple(blocks),
            adjustments=tuple(adjustments),
        )

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def _place_sections(
        self, doc: ResumeDocument, config: TemplateConfig, sizes: FontSizes
    ) -> Tuple[List[PositionedBlock], float]:
        """Place every section in order; returns the blocks and the page height."""
        geometry = config.geometry
        cursors = _ColumnCursors(geometry)
        builders: Dict[str, Callable[..., List[PositionedBlock]]] = {
            "header": self._header_blocks,
            "summary": self._summary_blocks,
            "experience": self._experience_blocks,
            "skills": self._skills_blocks,
            "education": self._education_blocks,
        }

        placed: List[PositionedBlock] = []
        for section in config.section_order:
            region = config.region_of(section)
            _, width = cursors.spans[region]
            font_size = sizes.small_size if region == "side" else sizes.body_size

            entries = builders[section](doc, config, sizes, width, font_size)
            if not entries:
                continue

            title = config.title_of(section)
            if title and section != "header":
                heading = self._section_title(title, config, sizes, region, width)
                placed.append(self._reserve(cursors, region, heading, geometry.section_gap))
                entry_gaps = [0.0] + [geometry.entry_gap] * (len(entries) - 1)
            else:
                entry_gaps = [geometry.section_gap] + [geometry.entry_gap] * (len(entries) - 1)

            for entry, gap in zip(entries, entry_gaps):
                placed.append(self._reserve(cursors, region, replace(entry, column=region), gap))

        content_bottom = max((block.bottom for block in placed), default=0.0)
        page_height = content_bottom + geometry.bottom_margin
        _log_debug(f"{config.name}: placed {len(placed)} blocks, page height {page_height:.1f}")
        return placed, page_height

    @staticmethod
    def _reserve(
        cursors: _ColumnCursors, region: str, block: PositionedBlock, gap: float
    ) -> PositionedBlock:
        x, y = cursors.reserve(region, block.height, gap)
        return _moved(block, x - block.x, y - block.y)

    # -------------------------------------------------------------------------
    # Section builders (blocks at the origin, positioned by _reserve)
    # -------------------------------------------------------------------------

    @staticmethod
    def _text_block(
        kind: str, text: str, font_size: float, line_height: float, width: float,
        x: float = 0.0, y: float = 0.0, minimum: float = 0.0,
    ) -> PositionedBlock:
        """Leaf block whose height is the estimated text height (at least one line)."""
        height = max(
            estimate_height(text, font_size, line_height, width),
            line_floor(font_size, line_height),
            minimum,
        )
        return PositionedBlock(
            kind=kind, x=x, y=y, width=width, height=height, font_size=font_size, content=text
        )

    def _section_title(
        self, title: str, config: TemplateConfig, sizes: FontSizes, region: str, width: float
    ) -> PositionedBlock:
        font_size = sizes.body_size if region == "side" else sizes.title_size
        return self._text_block(
            BlockKind.SECTION_TITLE,
            title,
            font_size,
            config.geometry.line_height,
            width,
            minimum=config.geometry.section_title_height,
        )

    def _header_blocks(self, doc, config, sizes, width, font_size) -> List[PositionedBlock]:
        """Name plus contact line; fixed height unless the content needs more."""
        geometry = config.geometry
        identity = doc.identity
        details = [identity.contact_line, " | ".join(identity.links)]
        details = "\n".join(line for line in details if line)

        needed = estimate_height(identity.full_name, sizes.title_size, geometry.line_height, width)
        needed += estimate_height(details, sizes.small_size, geometry.line_height, width)

        content = identity.full_name + (f"\n{details}" if details else "")
        return [
            PositionedBlock(
                kind=BlockKind.HEADER,
                x=0.0,
                y=0.0,
                width=width,
                height=max(geometry.header_height, needed),
                font_size=sizes.title_size,
                content=content,
            )
        ]

    def _summary_blocks(self, doc, config, sizes, width, font_size) -> List[PositionedBlock]:
        summary = truncate(doc.summary, config.limits.summary_chars)
        if not summary:
            return []
        return [
            self._text_block(BlockKind.SUMMARY, summary, font_size, config.geometry.line_height, width)
        ]

    def _skills_blocks(self, doc, config, sizes, width, font_size) -> List[PositionedBlock]:
        skills = doc.skills[: config.limits.max_skills_shown]
        if not skills:
            return []
        return [
            self._text_block(
                BlockKind.SKILLS,
                SKILL_SEPARATOR.join(skills),
                font_size,
                config.geometry.line_height,
                width,
            )
        ]

    def _experience_blocks(self, doc, config, sizes, width, font_size) -> List[PositionedBlock]:
        jobs = doc.experience[: config.limits.max_jobs_shown]
        return [self._job_block(job, config, sizes, width, font_size) for job in jobs]

    def _education_blocks(self, doc, config, sizes, width, font_size) -> List[PositionedBlock]:
        entries = doc.education[: config.limits.max_education_shown]
        return [self._education_block(entry, config, sizes, width, font_size) for entry in entries]

    def job_bullets(self, job: JobEntry, config: TemplateConfig) -> Tuple[str, List[str]]:
        """
        Choose what a job entry shows under its header.

        Returns:
            (kind, texts): the top-scoring achievements truncated to
            achievement_chars; else the truncated description; else a single
            synthesized fallback bullet. Never empty.
        """
        limits = config.limits
        selected = self.scorer.select_top(job.achievements, limits.max_achievements_per_job)
        bullets = [truncate(text, limits.achievement_chars) for text in selected]
        bullets = [text for text in bullets if text]
        if bullets:
            return BlockKind.ACHIEVEMENT, bullets

        description = truncate(job.description, limits.job_description_chars)
        if description:
            return BlockKind.DESCRIPTION, [description]

        return BlockKind.ACHIEVEMENT, [fallback_bullet(job.title, job.company)]

    def _job_block(
        self, job: JobEntry, config: TemplateConfig, sizes: FontSizes, width: float, font_size: float
    ) -> PositionedBlock:
        """Job container: header, bullets or description, technology tags, card padding."""
        geometry = config.geometry
        padding = geometry.card_padding
        inner_width = max(width - 2 * padding, 0)
        bullet_width = max(inner_width - geometry.bullet_indent, 0)

        heading = " | ".join(part for part in (job.title, job.company) if part)
        meta = " | ".join(part for part in (job.date_range, job.location) if part)
        header_text = "\n".join(part for part in (heading, meta) if part)

        children = [
            self._text_block(
                BlockKind.JOB_HEADER,
                header_text,
                font_size,
                geometry.line_height,
                inner_width,
                minimum=geometry.job_header_height,
            )
        ]

        kind, texts = self.job_bullets(job, config)
        for text in texts:
            if kind == BlockKind.ACHIEVEMENT:
                children.append(
                    self._text_block(kind, text, font_size, geometry.line_height, bullet_width,
                                     x=geometry.bullet_indent)
                )
            else:
                children.append(
                    self._text_block(kind, text, font_size, geometry.line_height, inner_width)
                )

        if job.technologies:
            children.append(
                self._text_block(
                    BlockKind.TAGS,
                    TAG_SEPARATOR.join(job.technologies),
                    sizes.small_size,
                    geometry.line_height,
                    inner_width,
                    minimum=geometry.tag_height,
                )
            )

        return self._container(BlockKind.JOB, heading, children, width, font_size, padding)

    def _education_block(
        self, entry: EduEntry, config: TemplateConfig, sizes: FontSizes, width: float, font_size: float
    ) -> PositionedBlock:
        geometry = config.geometry
        padding = geometry.card_padding
        inner_width = max(width - 2 * padding, 0)

        school = " | ".join(part for part in (entry.institution, entry.graduation_year) if part)
        header_text = "\n".join(part for part in (entry.heading, school) if part)
        children = [
            self._text_block(
                BlockKind.EDUCATION_HEADER,
                header_text,
                font_size,
                geometry.line_height,
                inner_width,
                minimum=geometry.education_header_height,
            )
        ]

        if entry.coursework:
            children.append(
                self._text_block(
                    BlockKind.COURSEWORK,
                    COURSEWORK_LABEL + ", ".join(entry.coursework),
                    sizes.small_size,
                    geometry.line_height,
                    inner_width,
                )
            )

        return self._container(BlockKind.EDUCATION, entry.heading, children, width, font_size, padding)

    @staticmethod
    def _container(
        kind: str, content: str, children: List[PositionedBlock], width: float,
        font_size: float, padding: float,
    ) -> PositionedBlock:
        """Stack children top to bottom inside padding; height is their sum."""
        stacked = []
        y = padding
        for child in children:
            stacked.append(_moved(child, padding, y))
            y += child.height
        return PositionedBlock(
            kind=kind,
            x=0.0,
            y=0.0,
            width=width,
            height=y + padding,
            font_size=font_size,
            content=content,
            children=tuple(stacked),
        )

    # -------------------------------------------------------------------------
    # Overflow trimming
    # -------------------------------------------------------------------------

    @staticmethod
    def _trim_step(
        doc: ResumeDocument, config: TemplateConfig
    ) -> Optional[Tuple[ResumeDocument, str]]:
        """
        Drop the next piece of trailing content.

        Order: coursework of the last shown education entry that has any, then
        the last shown job (at least one job always stays).

        Returns:
            (trimmed document, adjustment note), or None when nothing is left to drop
        """
        limits = config.limits

        education = list(doc.education[: limits.max_education_shown])
        for index in range(len(education) - 1, -1, -1):
            if education[index].coursework:
                dropped = education[index]
                education[index] = replace(dropped, coursework=())
                note = f"dropped coursework of '{dropped.heading or dropped.institution}'"
                return replace(doc, education=tuple(education)), note

        jobs = doc.experience[: limits.max_jobs_shown]
        if len(jobs) > 1:
            dropped_job = jobs[-1]
            label = " at ".join(part for part in (dropped_job.title, dropped_job.company) if part)
            return replace(doc, experience=jobs[:-1]), f"dropped job '{label}'"

        return None


_default_engine = LayoutEngine()


def layout(doc: ResumeDocument, config: TemplateConfig) -> LayoutPlan:
    """Lay out a document with the default content scorer."""
    return _default_engine.layout(doc, config)
