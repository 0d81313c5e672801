"""
Layout diagnostics for computed LayoutPlans.

Checks a plan against the geometric invariants a renderer relies on, without
rendering anything:

- Block-level: negative sizes, children outside their parent, overlapping
  siblings
- Column-level: blocks in the same column (or sharing horizontal span) that
  overlap vertically
- Plan-level: page height shorter than the lowest block, page height above
  the template target

Known limitation - estimated heights:
    Diagnostics only see the estimated heights stored in the plan. A plan can
    pass every check here and still overflow once real fonts are rendered,
    because TextFitter is an approximation. Validating against rendered output
    belongs to the renderer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rework.contexts.layout.layout_plan import LayoutPlan, PositionedBlock

# Tolerance for float comparisons of accumulated coordinates
TOLERANCE = 1e-6


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Plan-level
    PAGE_TOO_SHORT = "Page height {page_height:.1f} ends above the lowest block bottom {bottom:.1f}"
    PAGE_OVER_TARGET = "Page height {page_height:.1f} exceeds target {max_height:.1f}"

    # Column-level
    COLUMN_OVERLAP = (
        "'{column}': {first} (y={first_y:.1f}, h={first_h:.1f}) overlaps "
        "{second} (y={second_y:.1f})"
    )

    # Block-level
    NEGATIVE_SIZE = "{kind} at y={y:.1f} has negative size ({width:.1f} x {height:.1f})"
    CHILD_OUTSIDE_PARENT = "{child} child of {kind} at y={y:.1f} lies outside its parent"
    CHILDREN_OVERLAP = "{first} and {second} children of {kind} at y={y:.1f} overlap"


def _overlaps_vertically(first: PositionedBlock, second: PositionedBlock) -> bool:
    return first.y < second.bottom - TOLERANCE and second.y < first.bottom - TOLERANCE


def _contains(parent: PositionedBlock, child: PositionedBlock) -> bool:
    return (
        child.x >= parent.x - TOLERANCE
        and child.y >= parent.y - TOLERANCE
        and child.right <= parent.right + TOLERANCE
        and child.bottom <= parent.bottom + TOLERANCE
    )


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class BlockDiagnostics(Diagnostics):
    """Diagnostics for a single top-level block and its children."""

    block: Optional[PositionedBlock] = None

    def get_issues(self) -> List[str]:
        issues = []
        block = self.block
        if block is None:
            return issues

        for item in (block,) + block.children:
            if item.width < 0 or item.height < 0:
                issues.append(
                    IssueTemplates.NEGATIVE_SIZE.format(
                        kind=item.kind, y=item.y, width=item.width, height=item.height
                    )
                )

        for child in block.children:
            if not _contains(block, child):
                issues.append(
                    IssueTemplates.CHILD_OUTSIDE_PARENT.format(
                        child=child.kind, kind=block.kind, y=block.y
                    )
                )

        children = block.children
        for index, first in enumerate(children):
            for second in children[index + 1 :]:
                if first.overlaps_horizontally(second) and _overlaps_vertically(first, second):
                    issues.append(
                        IssueTemplates.CHILDREN_OVERLAP.format(
                            first=first.kind, second=second.kind, kind=block.kind, y=block.y
                        )
                    )
        return issues


@dataclass
class ColumnDiagnostics(Diagnostics):
    """Diagnostics for the blocks placed in one column."""

    column_name: str = ""
    overlaps: List[str] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        return list(self.overlaps)


@dataclass
class PlanDiagnostics(Diagnostics):
    """Top-level diagnostics for an entire plan."""

    template: str = ""
    page_height: float = 0.0
    content_bottom: float = 0.0
    max_height: Optional[float] = None

    def get_issues(self) -> List[str]:
        issues = []
        if self.page_height < self.content_bottom - TOLERANCE:
            issues.append(
                IssueTemplates.PAGE_TOO_SHORT.format(
                    page_height=self.page_height, bottom=self.content_bottom
                )
            )
        if self.max_height is not None and self.page_height > self.max_height + TOLERANCE:
            issues.append(
                IssueTemplates.PAGE_OVER_TARGET.format(
                    page_height=self.page_height, max_height=self.max_height
                )
            )
        return issues


# =============================================================================
# Main Analysis Function
# =============================================================================


def _column_overlaps(column: str, indices: List[int], blocks: List[PositionedBlock]) -> List[str]:
    """
    Find vertical overlaps between a column's blocks and later blocks sharing horizontal span.

    Each pair is reported once, under the column of the block placed first.

    Args:
        column: Column name (for messages)
        indices: Positions in blocks of the blocks placed in this column
        blocks: All top-level blocks of the plan, in placement order
    """
    issues = []
    for index in indices:
        first = blocks[index]
        for second in blocks[index + 1 :]:
            if first.overlaps_horizontally(second) and _overlaps_vertically(first, second):
                issues.append(
                    IssueTemplates.COLUMN_OVERLAP.format(
                        column=column,
                        first=first.kind,
                        first_y=first.y,
                        first_h=first.height,
                        second=second.kind,
                        second_y=second.y,
                    )
                )
    return issues


def analyze_plan(plan: LayoutPlan, max_height: Optional[float] = None) -> PlanDiagnostics:
    """
    Check a LayoutPlan against its geometric invariants.

    Builds a hierarchical diagnostics tree (Plan -> Column -> Block).

    Args:
        plan: Plan returned by the layout engine
        max_height: Target page height (None skips the target check)

    Returns:
        PlanDiagnostics tree. Call .get_inherited_issues() for all issues,
        or .is_valid to check if the plan passes validation.
    """
    plan_diagnostics = PlanDiagnostics(
        template=plan.template,
        page_height=plan.page_height,
        content_bottom=plan.content_bottom,
        max_height=max_height,
    )

    # Column name -> indices of its blocks in placement order
    indices_by_column: Dict[str, List[int]] = {}
    for index, block in enumerate(plan.blocks):
        indices_by_column.setdefault(block.column, []).append(index)

    all_blocks = list(plan.blocks)
    for column_name, indices in indices_by_column.items():
        column_diagnostics = ColumnDiagnostics(
            column_name=column_name,
            overlaps=_column_overlaps(column_name, indices, all_blocks),
        )
        for index in indices:
            column_diagnostics.components.append(BlockDiagnostics(block=all_blocks[index]))
        plan_diagnostics.components.append(column_diagnostics)

    return plan_diagnostics
