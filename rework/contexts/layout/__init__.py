"""
Layout Context

Responsibilities:
- Estimates text heights and truncates text to character budgets
- Scales font sizes to content density
- Positions every section and sub-entry for a template family
- Fits the page to its target height (rescale once, then trim trailing content)
- Checks computed plans for overlap and bounds violations

Owns: Geometry, font sizing, overflow handling
Never: Parses raw records or draws glyphs
"""

from rework.contexts.layout.font_scaler import FontSizes, scale, tighten
from rework.contexts.layout.layout_diagnostics import PlanDiagnostics, analyze_plan
from rework.contexts.layout.layout_engine import LayoutEngine, layout
from rework.contexts.layout.layout_plan import BlockKind, LayoutPlan, PositionedBlock
from rework.contexts.layout.pipeline import render_layout
from rework.contexts.layout.text_fitter import estimate_height, truncate

__all__ = [
    # Entry points
    "render_layout",
    "layout",
    "LayoutEngine",
    # Plan
    "LayoutPlan",
    "PositionedBlock",
    "BlockKind",
    # Fitting
    "FontSizes",
    "scale",
    "tighten",
    "estimate_height",
    "truncate",
    # Diagnostics
    "analyze_plan",
    "PlanDiagnostics",
]
