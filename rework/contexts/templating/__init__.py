"""
Templating Context

Responsibilities:
- Normalizes heterogeneous resume records into the canonical ResumeDocument
- Owns the default-value policy (fallback names, caps, bucket order)
- Declares template families as pure data (templates.yaml) and resolves them

Owns: Canonical document model, record normalization, template family definitions
Never: Computes geometry or ranks content
"""

from rework.contexts.templating.exceptions import InvalidTemplateConfigError
from rework.contexts.templating.normalizer import normalize
from rework.contexts.templating.resume_data_structure import (
    EduEntry,
    Identity,
    JobEntry,
    ResumeDocument,
)
from rework.contexts.templating.template_config import (
    TemplateColors,
    TemplateConfig,
    TemplateGeometry,
    TemplateLimits,
)
from rework.contexts.templating.template_registry import TemplateRegistry

__all__ = [
    # Normalization
    "normalize",
    # Canonical document
    "ResumeDocument",
    "Identity",
    "JobEntry",
    "EduEntry",
    # Template families
    "TemplateConfig",
    "TemplateColors",
    "TemplateLimits",
    "TemplateGeometry",
    "TemplateRegistry",
    "InvalidTemplateConfigError",
]
