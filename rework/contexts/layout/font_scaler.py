"""
Content-density font scaling.

Maps the total content volume of a document onto a scale factor applied to a
template's base font size. The mapping is a monotonic step function: more
content never produces a larger font, and no size ever drops below its
legibility minimum.
"""

from dataclasses import dataclass
from typing import Tuple

# (content length above which the factor applies, factor), densest first
DENSITY_TIERS: Tuple[Tuple[int, float], ...] = (
    (2000, 0.75),
    (1500, 0.85),
    (1000, 0.9),
)
DEFAULT_SCALE_FACTOR = 1.0
MIN_SCALE_FACTOR = 0.7
TIGHTEN_STEP = 0.05

TITLE_RATIO = 1.2
SMALL_RATIO = 0.8

MIN_TITLE_SIZE = 10.0
MIN_BODY_SIZE = 8.0
MIN_SMALL_SIZE = 7.0

_EPSILON = 1e-9


@dataclass(frozen=True)
class FontSizes:
    """
    Font sizes for one rendering, in points.

    Attributes:
        title_size: Names and section headings
        body_size: Main and full-width text
        small_size: Side-column text, tags and annotations
        scale_factor: Factor applied to the template base size
    """

    title_size: float
    body_size: float
    small_size: float
    scale_factor: float = DEFAULT_SCALE_FACTOR


def scale_factor_for(total_content_length: int) -> float:
    """Scale factor for a content volume (1.0 for short documents)."""
    for threshold, factor in DENSITY_TIERS:
        if total_content_length > threshold:
            return max(factor, MIN_SCALE_FACTOR)
    return DEFAULT_SCALE_FACTOR


def sizes_for_factor(factor: float, base_font_size: float) -> FontSizes:
    """Derive title/body/small sizes from a scale factor, clamped to the minimums."""
    factor = max(factor, MIN_SCALE_FACTOR)
    return FontSizes(
        title_size=max(base_font_size * TITLE_RATIO * factor, MIN_TITLE_SIZE),
        body_size=max(base_font_size * factor, MIN_BODY_SIZE),
        small_size=max(base_font_size * SMALL_RATIO * factor, MIN_SMALL_SIZE),
        scale_factor=factor,
    )


def scale(total_content_length: int, base_font_size: float) -> FontSizes:
    """
    Choose font sizes for a document of the given content volume.

    Args:
        total_content_length: Aggregate characters (ResumeDocument.total_content_length)
        base_font_size: Template base font size in points

    Returns:
        FontSizes for the matching density tier

    Example:
        >>> scale(2500, 12).body_size
        9.0
    """
    return sizes_for_factor(scale_factor_for(total_content_length), base_font_size)


def tighten(sizes: FontSizes, base_font_size: float) -> FontSizes:
    """
    Step down to the next smaller scale factor.

    The next lower density tier is used if there is one; past the densest tier
    the factor drops by TIGHTEN_STEP. The result never goes below
    MIN_SCALE_FACTOR, so tightening at the floor returns the same sizes.
    """
    current = sizes.scale_factor
    lower_tiers = [factor for _, factor in DENSITY_TIERS if factor < current - _EPSILON]
    if lower_tiers:
        factor = max(lower_tiers)
    else:
        factor = current - TIGHTEN_STEP
    return sizes_for_factor(max(factor, MIN_SCALE_FACTOR), base_font_size)


def is_at_floor(sizes: FontSizes) -> bool:
    return sizes.scale_factor <= MIN_SCALE_FACTOR + _EPSILON
