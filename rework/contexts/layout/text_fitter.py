"""
Text fitting without real font metrics.

Height estimation uses a single average glyph width (a fraction of the font
size) to turn a column width into a characters-per-line budget. It is an
approximation meant to err towards taller blocks: with AVERAGE_GLYPH_WIDTH_RATIO
at 0.5, proportional Latin fonts (average advance roughly 0.45-0.5 em) wrap at
or after the estimated point, so estimates run at most about one line per
paragraph short when long words force early wraps.

Truncation keeps whole sentences where possible and otherwise cuts on a word
boundary with an ellipsis. Both operations are pure.
"""

import math

from rework.utils.text_processing import split_sentences

AVERAGE_GLYPH_WIDTH_RATIO = 0.5
ELLIPSIS = "..."
SENTENCE_ENDINGS = (".", "!", "?")

# A word-boundary cut is rejected if it keeps less than this share of the budget
MIN_WORD_CUT_RATIO = 0.8


def chars_per_line(font_size: float, max_width: float, glyph_ratio: float = AVERAGE_GLYPH_WIDTH_RATIO) -> int:
    """Characters that fit on one line of max_width at font_size (at least 1)."""
    if font_size <= 0 or max_width <= 0:
        return 1
    return max(1, math.floor(max_width / (font_size * glyph_ratio)))


def estimate_lines(text: str, font_size: float, max_width: float) -> int:
    """
    Count wrapped lines for text in a column of max_width.

    Every explicit line break starts a new line; an empty paragraph between two
    breaks still takes one line.
    """
    if not text:
        return 0

    per_line = chars_per_line(font_size, max_width)
    return sum(max(1, math.ceil(len(paragraph) / per_line)) for paragraph in text.split("\n"))


def estimate_height(text: str, font_size: float, line_height: float, max_width: float) -> float:
    """
    Estimate rendered height of text in points.

    Args:
        text: Text to fit (may contain explicit line breaks)
        font_size: Font size in points
        line_height: Line-height multiplier (e.g., 1.4)
        max_width: Available width in points

    Returns:
        lines * font_size * line_height, or 0 for empty text

    Example:
        >>> estimate_height("x" * 150, font_size=10, line_height=1.5, max_width=500)
        30.0
    """
    if not text or font_size <= 0:
        return 0.0
    return estimate_lines(text, font_size, max_width) * font_size * line_height


def line_floor(font_size: float, line_height: float) -> float:
    """Height of a single line, the minimum for any non-empty text block."""
    return font_size * line_height


def _with_sentence_ending(text: str) -> str:
    text = text.rstrip()
    if text.endswith(SENTENCE_ENDINGS):
        return text
    return text.rstrip(",;:-") + "."


def _truncate_sentences(text: str, max_chars: int) -> str:
    """Longest prefix of whole sentences that fits max_chars ("" if none does)."""
    kept = ""
    for sentence in split_sentences(text):
        candidate = _with_sentence_ending(f"{kept} {sentence}" if kept else sentence)
        if len(candidate) > max_chars:
            break
        kept = candidate
    return kept


def _truncate_words(text: str, max_chars: int) -> str:
    if max_chars <= len(ELLIPSIS):
        return text[:max_chars]

    budget = max_chars - len(ELLIPSIS)
    cut = text[:budget]
    last_space = cut.rfind(" ")
    if last_space >= budget * MIN_WORD_CUT_RATIO:
        cut = cut[:last_space]
    return cut.rstrip() + ELLIPSIS


def truncate(text: str, max_chars: int, preserve_sentences: bool = True) -> str:
    """
    Shorten text to at most max_chars characters.

    Args:
        text: Text to shorten
        max_chars: Character budget
        preserve_sentences: Prefer dropping whole trailing sentences

    Returns:
        text unchanged when it fits; otherwise whole sentences (when at least
        one fits and preserve_sentences is set), else a word-boundary cut
        ending in "...". Never longer than max_chars.

    Example:
        >>> truncate("First point. Second point is longer.", 20)
        'First point.'
    """
    if max_chars < 1:
        return ""
    if len(text) <= max_chars:
        return text

    if preserve_sentences:
        kept = _truncate_sentences(text, max_chars)
        if kept:
            return kept

    return _truncate_words(text, max_chars)
