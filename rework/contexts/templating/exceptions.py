"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Optional


class InvalidTemplateConfigError(ValueError):
    """
    Exception raised when a template family definition is malformed.

    Raised while loading templates.yaml (or an extra templates file), never
    while laying out a document: a broken template definition is a
    configuration error, not a property of the resume being rendered.

    Attributes:
        message: Error description
        template_name: Name of the template family being loaded
        config_path: Path to the YAML file that defines it
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        config_path: Optional[Path] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.config_path = config_path

        parts = [message]
        if template_name:
            parts.append(f"Template: {template_name}")
        if config_path:
            parts.append(f"Defined in: {config_path}")

        super().__init__("\n".join(parts))
