"""Unit tests for layout plan diagnostics."""

import pytest

from rework.contexts.layout.font_scaler import scale
from rework.contexts.layout.layout_diagnostics import (
    BlockDiagnostics,
    ColumnDiagnostics,
    PlanDiagnostics,
    analyze_plan,
)
from rework.contexts.layout.layout_plan import BlockKind, LayoutPlan, PositionedBlock

SIZES = scale(0, 12)


def make_block(kind, x, y, width, height, column="main", children=()):
    return PositionedBlock(
        kind=kind,
        x=x,
        y=y,
        width=width,
        height=height,
        font_size=12,
        column=column,
        children=tuple(children),
    )


def make_plan(blocks, page_height=None):
    bottom = max((b.y + b.height for b in blocks), default=0)
    return LayoutPlan(
        template="professional",
        page_width=612,
        page_height=bottom + 40 if page_height is None else page_height,
        font_sizes=SIZES,
        blocks=tuple(blocks),
    )


@pytest.mark.unit
def test_clean_plan_is_valid():
    """Test stacked, non-overlapping blocks pass."""
    plan = make_plan(
        [
            make_block(BlockKind.HEADER, 40, 0, 532, 80, column="full"),
            make_block(BlockKind.SUMMARY, 40, 98, 532, 50, column="full"),
            make_block(BlockKind.SKILLS, 40, 166, 532, 30),
        ]
    )
    diagnostics = analyze_plan(plan, max_height=1100)

    assert isinstance(diagnostics, PlanDiagnostics)
    assert diagnostics.is_valid
    assert diagnostics.get_inherited_issues() == []


@pytest.mark.unit
def test_overlap_in_column_detected():
    """Test vertical overlap of blocks in the same column."""
    plan = make_plan(
        [
            make_block(BlockKind.SUMMARY, 40, 0, 532, 50),
            make_block(BlockKind.SKILLS, 40, 30, 532, 30),
        ]
    )
    diagnostics = analyze_plan(plan)

    assert not diagnostics.is_valid
    issues = diagnostics.get_inherited_issues()
    assert len(issues) == 1
    assert "overlaps" in issues[0]


@pytest.mark.unit
def test_side_by_side_columns_do_not_overlap():
    """Test that blocks in disjoint horizontal spans may share y."""
    plan = make_plan(
        [
            make_block(BlockKind.SKILLS, 20, 0, 174, 300, column="side"),
            make_block(BlockKind.SUMMARY, 234, 0, 358, 100),
        ]
    )
    assert analyze_plan(plan).is_valid


@pytest.mark.unit
def test_full_width_block_overlapping_column_detected():
    """Test overlap across columns when horizontal spans intersect."""
    plan = make_plan(
        [
            make_block(BlockKind.SKILLS, 412, 0, 160, 300, column="side"),
            make_block(BlockKind.SUMMARY, 40, 200, 532, 50, column="full"),
        ]
    )
    assert not analyze_plan(plan).is_valid


@pytest.mark.unit
def test_touching_blocks_are_not_overlapping():
    """Test that b.y == a.y + a.height is allowed."""
    plan = make_plan(
        [
            make_block(BlockKind.SUMMARY, 40, 0, 532, 50.1),
            make_block(BlockKind.SKILLS, 40, 50.1, 532, 30),
        ]
    )
    assert analyze_plan(plan).is_valid


@pytest.mark.unit
def test_child_outside_parent_detected():
    """Test children must stay inside their parent."""
    child = make_block(BlockKind.ACHIEVEMENT, 54, 40, 518, 60)
    job = make_block(BlockKind.JOB, 40, 0, 532, 80, children=[child])

    issues = BlockDiagnostics(block=job).get_issues()
    assert len(issues) == 1
    assert "outside its parent" in issues[0]


@pytest.mark.unit
def test_overlapping_children_detected():
    """Test sibling children must not overlap."""
    header = make_block(BlockKind.JOB_HEADER, 40, 0, 532, 34)
    bullet = make_block(BlockKind.ACHIEVEMENT, 54, 20, 518, 20)
    job = make_block(BlockKind.JOB, 40, 0, 532, 60, children=[header, bullet])

    issues = BlockDiagnostics(block=job).get_issues()
    assert any("overlap" in issue for issue in issues)


@pytest.mark.unit
def test_negative_size_detected():
    """Test negative width or height."""
    block = make_block(BlockKind.SKILLS, 40, 0, -10, 30)
    assert not BlockDiagnostics(block=block).is_valid


@pytest.mark.unit
def test_page_height_checks():
    """Test page height below the content bottom and above the target."""
    blocks = [make_block(BlockKind.SUMMARY, 40, 0, 532, 500)]

    too_short = analyze_plan(make_plan(blocks, page_height=400))
    assert not too_short.is_valid
    assert "lowest block" in too_short.get_issues()[0]

    over_target = analyze_plan(make_plan(blocks, page_height=540), max_height=520)
    assert "exceeds target" in over_target.get_issues()[0]

    assert analyze_plan(make_plan(blocks, page_height=540)).is_valid


@pytest.mark.unit
def test_hierarchy_groups_blocks_by_column():
    """Test Plan -> Column -> Block structure."""
    plan = make_plan(
        [
            make_block(BlockKind.HEADER, 20, 0, 174, 120, column="side"),
            make_block(BlockKind.SUMMARY, 234, 0, 358, 60),
            make_block(BlockKind.SKILLS, 20, 138, 174, 40, column="side"),
        ]
    )
    diagnostics = analyze_plan(plan)

    columns = {c.column_name: c for c in diagnostics.components}
    assert set(columns) == {"side", "main"}
    assert isinstance(columns["side"], ColumnDiagnostics)
    assert len(columns["side"].components) == 2
    assert len(columns["main"].components) == 1
