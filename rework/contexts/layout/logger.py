"""
Layout context logger.

Provides logging interface for layout context with automatic [layout] prefix.
All layout modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from rework.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[layout]"


def setup_layout_logger(
    log_dir: Path, console_level: str = "INFO", extra_provenance: Optional[Dict[str, object]] = None
) -> Path:
    """
    Setup logger for layout context.

    Args:
        log_dir: Directory for this layout session
        console_level: Minimum level shown on stdout
        extra_provenance: Session details for the log header (input file, template)

    Returns:
        Path to log file

    Example:
        from rework.contexts.layout.logger import setup_layout_logger

        log_file = setup_layout_logger(log_dir)
    """
    return _setup_logger(
        context_name="layout",
        log_dir=log_dir,
        extra_provenance=extra_provenance,
        console_level=console_level,
    )


# Wrapper functions with automatic [layout] prefix


def _log_info(message: str) -> None:
    """Log info message with [layout] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level layout-specific logging helpers


def log_adjustment(template: str, note: str) -> None:
    """Log a rescale or trim decision taken to fit the page."""
    _log_debug(f"{template}: {note}")


def log_overflow(template: str, page_height: float, max_height: float) -> None:
    """Log that a plan still exceeds the target height after every adjustment."""
    _log_warning(
        f"{template}: page height {page_height:.1f} still exceeds target {max_height:.1f} "
        "after rescaling and trimming"
    )


def log_plan_summary(plan) -> None:
    """
    Log a one-line summary of a finished plan.

    Args:
        plan: LayoutPlan from layout()
    """
    _log_info(
        f"Laid out '{plan.template}': {len(plan.blocks)} blocks, "
        f"page height {plan.page_height:.1f}, "
        f"body {plan.font_sizes.body_size:.2f}pt (x{plan.font_sizes.scale_factor:.2f}), "
        f"{len(plan.adjustments)} adjustments"
    )
