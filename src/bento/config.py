"""Configuration threaded through the registry and every component."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from .hooks import Hooks

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class BentoConfig(BaseModel):
    """
    Settings for component lookup, diagnostics and extension.

    Args:
        namespace: Module searched when a component is requested by name: default ('components')
        debug: Render detailed error boxes for authenticated requests: default False
        strict_props: Log a warning for props a component does not declare: default False
        theme_dir: Directory holding ``components/<name>/view.py`` overrides: default None
        hooks: Filter registry consulted at every extension point
        escape: Attribute escaper replacing ``html.escape``: default None
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    namespace: str = "components"
    debug: bool = False
    strict_props: bool = False
    theme_dir: Path | None = None
    hooks: Hooks = Field(default_factory=Hooks)
    escape: Callable[[str], str] | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> BentoConfig:
        """Build a config from ``BENTO_*`` environment variables."""
        values: dict[str, Any] = {
            "debug": _env_flag("BENTO_DEBUG"),
            "strict_props": _env_flag("BENTO_STRICT_PROPS"),
        }
        if namespace := os.getenv("BENTO_NAMESPACE"):
            values["namespace"] = namespace
        if theme_dir := os.getenv("BENTO_THEME_DIR"):
            values["theme_dir"] = Path(theme_dir)
        values.update(overrides)
        return cls(**values)
