"""
Shared utilities for ReWork.

Common functionality used across contexts:
- Logger setup with provenance
- Text normalization helpers
"""

from rework.utils.logger import setup_logger
from rework.utils.text_processing import clean_text, split_sentences

__all__ = ["setup_logger", "clean_text", "split_sentences"]
