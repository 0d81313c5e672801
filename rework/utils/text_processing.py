"""
Text processing utilities shared across contexts.
"""

import re
import unicodedata
from typing import Iterable, List

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    " ": " ",  # non-breaking space
    " ": " ",  # narrow no-break space
    # Zero-width characters → remove
    "​": "",  # zero-width space
    "‌": "",  # zero-width non-joiner
    "‍": "",  # zero-width joiner
    "⁠": "",  # word joiner
    "﻿": "",  # BOM
    # Quotes
    "‘": "'",  # left single quote
    "’": "'",  # right single quote
    "“": '"',  # left double quote
    "”": '"',  # right double quote
}

# Sentence boundary: terminal punctuation followed by whitespace
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

# Leading list markers pasted in from word processors or LLM output
BULLET_PREFIX = re.compile(r"^\s*(?:[-*•·▪●◦]|\d+[.)])\s+")

_WHITESPACE_RUN = re.compile(r"[ \t\r\f\v]+")


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that distort length estimates.

    Applies NFC normalization (keeps bullets and dashes intact, unlike NFKC)
    and replaces invisible or typographic characters with ASCII equivalents.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFC", text)
    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def collapse_whitespace(text: str) -> str:
    """Collapse runs of horizontal whitespace and trim each line."""
    lines = [_WHITESPACE_RUN.sub(" ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def clean_text(text: str) -> str:
    """Unicode-normalize and whitespace-collapse a free-text field."""
    return collapse_whitespace(normalize_unicode(text))


def strip_bullet_prefix(text: str) -> str:
    """
    Remove a leading list marker from a line.

    Example:
        >>> strip_bullet_prefix("• Led a team of 5")
        'Led a team of 5'
        >>> strip_bullet_prefix("2) Shipped v2")
        'Shipped v2'
    """
    return BULLET_PREFIX.sub("", text, count=1).strip()


def split_sentences(text: str) -> List[str]:
    """
    Split text after sentence-terminal punctuation.

    Each returned sentence keeps its own punctuation.

    Example:
        >>> split_sentences("Built APIs. Led a team! Shipped.")
        ['Built APIs.', 'Led a team!', 'Shipped.']
    """
    return [s for s in SENTENCE_BOUNDARY.split(text.strip()) if s]


def dedupe_preserving_order(items: Iterable[str]) -> List[str]:
    """Drop blank and repeated strings, keeping first occurrences in order."""
    seen = set()
    result = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
