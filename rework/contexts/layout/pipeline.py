"""
Layout pipeline.

Single input boundary for callers holding a persisted (loosely typed) resume
record: normalize it, resolve the template family and lay it out. Nothing is
cached between calls except parsed template definitions.
"""

from typing import Any, Mapping, Optional

from rework.contexts.layout.layout_engine import LayoutEngine
from rework.contexts.layout.layout_plan import LayoutPlan
from rework.contexts.layout.logger import log_plan_summary
from rework.contexts.templating.normalizer import normalize
from rework.contexts.templating.template_registry import TemplateRegistry

_registry = TemplateRegistry()
_engine = LayoutEngine()


def render_layout(
    raw: Any,
    template: Optional[str] = "professional",
    colors: Optional[Mapping[str, Optional[str]]] = None,
    title: Optional[str] = None,
    registry: Optional[TemplateRegistry] = None,
) -> LayoutPlan:
    """
    Compute the layout of a raw resume record.

    Args:
        raw: Persisted record (dict, JSON string, or anything else)
        template: Template family name; unknown names fall back to professional
        colors: Optional {primary, accent} overrides
        title: Caller-supplied title used when the record carries no name
        registry: Template registry (defaults to the shared one)

    Returns:
        LayoutPlan for the resolved template family

    Raises:
        InvalidTemplateConfigError: If the template configuration itself is malformed

    Example:
        >>> plan = render_layout({"summary": "Built APIs."}, template="modern")
        >>> plan.template
        'modern'
    """
    registry = registry or _registry
    document = normalize(raw, title=title)
    config = registry.get_config(template, colors=colors)
    plan = _engine.layout(document, config)
    log_plan_summary(plan)
    return plan
