"""
Layout plan data structures.

A LayoutPlan is the engine's only output: every block the renderer must draw,
with absolute page coordinates (points; x from the left page edge, y from the
top of the page) and the font size its text should use. Children sit inside
their parent block and use the same absolute coordinates.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Tuple

from rework.contexts.layout.font_scaler import FontSizes


class BlockKind:
    """Block kind names used in PositionedBlock.kind."""

    # Top-level blocks
    HEADER = "header"
    SECTION_TITLE = "section_title"
    SUMMARY = "summary"
    JOB = "job"
    SKILLS = "skills"
    EDUCATION = "education"

    # Children
    JOB_HEADER = "job_header"
    ACHIEVEMENT = "achievement"
    DESCRIPTION = "description"
    TAGS = "tags"
    EDUCATION_HEADER = "education_header"
    COURSEWORK = "coursework"


@dataclass(frozen=True)
class PositionedBlock:
    """
    One positioned block of the page.

    Attributes:
        kind: BlockKind name
        x: Left edge in points
        y: Top edge in points
        width: Width in points
        height: Height in points (derived from content, never hard-coded)
        font_size: Font size for this block's own text
        content: Text to draw (already truncated)
        column: Region the block was placed in ("full", "main" or "side")
        children: Sub-entries positioned inside this block
    """

    kind: str
    x: float
    y: float
    width: float
    height: float
    font_size: float
    content: str = ""
    column: str = "main"
    children: Tuple["PositionedBlock", ...] = ()

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    def overlaps_horizontally(self, other: "PositionedBlock") -> bool:
        return self.x < other.right and other.x < self.right


@dataclass(frozen=True)
class LayoutPlan:
    """
    Complete layout for one rendering.

    Attributes:
        template: Template family the plan was computed for
        page_width: Page width in points
        page_height: Lowest block bottom plus the bottom margin
        font_sizes: Sizes chosen by the font scaler (after any tightening)
        blocks: Top-level blocks in placement order
        adjustments: Ordered notes of rescale/trim decisions (empty if none)
    """

    template: str
    page_width: float
    page_height: float
    font_sizes: FontSizes
    blocks: Tuple[PositionedBlock, ...] = ()
    adjustments: Tuple[str, ...] = ()

    def iter_blocks(self) -> Iterator[PositionedBlock]:
        """Depth-first walk over every block and child."""
        stack: List[PositionedBlock] = list(reversed(self.blocks))
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.children))

    def blocks_of_kind(self, kind: str) -> List[PositionedBlock]:
        return [block for block in self.iter_blocks() if block.kind == kind]

    @property
    def content_bottom(self) -> float:
        return max((block.bottom for block in self.blocks), default=0.0)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form for JSON/YAML output."""
        return asdict(self)
