"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.

Sinks are configured once per session by the caller (see
rework.contexts.layout.logger.setup_layout_logger); this module only emits.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_section_fallback(section: str, error: Exception) -> None:
    """Log that a raw section could not be parsed and was replaced by its default."""
    _log_warning(f"Could not parse '{section}', using default ({type(error).__name__}: {error})")


def log_normalization_result(document) -> None:
    """
    Log the section overview of a normalized document.

    Args:
        document: ResumeDocument produced by normalize()
    """
    _log_debug("Normalized document:")
    for line in document.table_of_contents.split("\n"):
        _log_debug(f"  {line}")


def log_template_fallback(requested: str, fallback: str, available) -> None:
    """Log that an unknown template name was replaced by the fallback family."""
    _log_warning(
        f"Unknown template '{requested}', falling back to '{fallback}'. "
        f"Available templates: {list(available)}"
    )
