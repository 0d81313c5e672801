"""
ReWork - Resume layout engine

Turns a loosely typed resume record into a fixed-width, paginated layout plan
that an SVG/PDF renderer can draw without overlap, overflow or illegible text.

Architecture:
- Templating Context: Canonical resume document and template families
- Targeting Context: Heuristic content prioritization
- Layout Context: Text fitting, font scaling and block stacking
"""

__version__ = "0.1.0"
