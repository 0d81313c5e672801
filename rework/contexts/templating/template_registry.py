"""
Template Family Registry

Loads template families from templates.yaml (plus an optional extra file named
by REWORK_TEMPLATES_PATH), merges each family over the shared defaults and
caches the resulting TemplateConfig values.

Examples:
    >>> registry = TemplateRegistry()
    >>> config = registry.get_config("modern", colors={"primary": "#111111"})
    >>> config.geometry.column_layout
    'sidebar'
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from rework.contexts.templating.exceptions import InvalidTemplateConfigError
from rework.contexts.templating.logger import _log_debug, log_template_fallback
from rework.contexts.templating.template_config import TemplateConfig

load_dotenv()
DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "templates.yaml"
EXTRA_TEMPLATES_PATH = os.getenv("REWORK_TEMPLATES_PATH")

FALLBACK_TEMPLATE = "professional"


def default_config_paths() -> List[Path]:
    """Bundled templates.yaml, followed by REWORK_TEMPLATES_PATH when set."""
    paths = [DEFAULT_TEMPLATES_PATH]
    if EXTRA_TEMPLATES_PATH:
        paths.append(Path(EXTRA_TEMPLATES_PATH))
    return paths


class TemplateRegistry:
    """
    Registry for loading and caching template family configurations.

    Later files override earlier ones, so an extra file can both tweak an
    existing family and declare new ones.
    """

    def __init__(self, config_paths: Optional[List[Path]] = None):
        """
        Initialize the template registry.

        Args:
            config_paths: YAML files to merge, in order. Defaults to the bundled
                          templates.yaml plus REWORK_TEMPLATES_PATH if set.
        """
        if config_paths is None:
            config_paths = default_config_paths()

        self.config_paths = [Path(path) for path in config_paths]
        self._definitions: Optional[Dict[str, Dict[str, Any]]] = None
        self._cache: Dict[str, TemplateConfig] = {}

    def _load_definitions(self) -> Dict[str, Dict[str, Any]]:
        """
        Merge all config files and expand each family over the defaults.

        Raises:
            FileNotFoundError: If a config file does not exist
            InvalidTemplateConfigError: If no families are declared
        """
        if self._definitions is not None:
            return self._definitions

        merged = OmegaConf.create({})
        for path in self.config_paths:
            if not path.exists():
                raise FileNotFoundError(f"Template config not found: {path}")
            merged = OmegaConf.merge(merged, OmegaConf.load(path))

        defaults = merged.get("defaults", OmegaConf.create({}))
        templates = merged.get("templates", None)
        if not templates:
            raise InvalidTemplateConfigError(
                "No template families declared under 'templates'",
                config_path=self.config_paths[-1],
            )

        self._definitions = {
            str(name): OmegaConf.to_container(OmegaConf.merge(defaults, overrides), resolve=True)
            for name, overrides in templates.items()
        }
        _log_debug(f"Loaded template families: {sorted(self._definitions)}")
        return self._definitions

    def names(self) -> List[str]:
        """Available template family names, sorted."""
        return sorted(self._load_definitions())

    def has_template(self, name: str) -> bool:
        return name in self._load_definitions()

    def resolve_name(self, name: Optional[str]) -> str:
        """
        Map a requested template name onto an available family.

        Unknown or missing names fall back to FALLBACK_TEMPLATE (or the first
        available family when the fallback itself is not declared).
        """
        definitions = self._load_definitions()
        requested = (name or "").strip().lower()
        if requested in definitions:
            return requested

        fallback = FALLBACK_TEMPLATE if FALLBACK_TEMPLATE in definitions else sorted(definitions)[0]
        log_template_fallback(requested, fallback, sorted(definitions))
        return fallback

    def get_config(
        self, name: Optional[str], colors: Optional[Mapping[str, Optional[str]]] = None
    ) -> TemplateConfig:
        """
        Get a template family by name, loading and caching it if necessary.

        Args:
            name: Template family name (e.g., 'modern'); unknown names fall back
            colors: Optional {primary, accent} overrides for this render

        Returns:
            TemplateConfig (a fresh copy when colors are overridden)

        Raises:
            InvalidTemplateConfigError: If the family definition is malformed
        """
        resolved = self.resolve_name(name)

        if resolved not in self._cache:
            self._cache[resolved] = TemplateConfig.from_dict(
                resolved, self._load_definitions()[resolved]
            )

        config = self._cache[resolved]
        if colors:
            config = config.with_colors(colors.get("primary"), colors.get("accent"))
        return config

    def clear_cache(self):
        """Clear cached configs and definitions (forces a reload from disk)."""
        self._cache.clear()
        self._definitions = None

    def is_cached(self, name: str) -> bool:
        return name in self._cache
