"""
Generic logger setup utilities.

One session = one log directory holding a DEBUG-level file per context, plus
a console sink at a caller-chosen level. Context-specific wrappers live in
contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from rework import __version__

load_dotenv()

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Environment variables echoed into every session header when set
PROVENANCE_ENV_VARS = ("REWORK_TEMPLATES_PATH", "LOGS_PATH")


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console_level: str = "INFO",
    level_colors: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Start a logging session for one context.

    Any sinks left over from an earlier session are removed first, so calling
    this twice in one process does not duplicate output.

    Args:
        context_name: Context identifier, also the log file stem (e.g. "layout")
        log_dir: Session directory; created if missing
        extra_provenance: Additional key-value pairs for the session header
        console_level: Minimum level echoed to stdout
        level_colors: Overrides for LEVEL_COLORS (e.g. {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        from rework.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="layout",
            log_dir=Path("outs/logs/layout_20260101_120000"),
            extra_provenance={"Input": "resume.yaml"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, object]] = None) -> None:
    """Write the session header: invocation, interpreter, package version and config env."""
    header = {
        "Context": context_name,
        "rework": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
    }
    for name in PROVENANCE_ENV_VARS:
        if os.getenv(name):
            header[name] = os.getenv(name)
    header.update(extra_context or {})

    logger.info("=" * 80)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
