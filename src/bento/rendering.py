"""Template resolution and render error placeholders."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import pprint
from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from .core import render_html

if TYPE_CHECKING:
    from .component import Component

logger = logging.getLogger(__name__)

VIEW_FILE = "view.py"


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-render facts about the caller."""

    authenticated: bool = False


def render_component_error(
    name: str,
    message: str,
    props: Any,
    trace: str = "",
    *,
    verbose: bool = False,
) -> str:
    """
    Placeholder markup for a component that failed to render.

    ``verbose`` output shows the message, the props and the traceback and
    is meant for authenticated users of a debug deployment only.
    """
    if not verbose:
        return f"<!-- Component render error: {escape(message)} -->"

    props_dump = pprint.pformat(props)
    return (
        '<div class="bento-component-error" style="border:2px solid #c00;'
        'background:#fee;color:#900;padding:1em;margin:1em 0;font-family:monospace;">'
        f"<strong>Component error in {escape(name)}:</strong><br>"
        f"{escape(message)}"
        f"<pre>{escape(props_dump)}</pre>"
        f"<pre>{escape(trace)}</pre>"
        "</div>"
    )


def load_view(path: str | Path) -> Callable[[Component], Any]:
    """Import a view file and return its ``render(component)`` function."""
    path = Path(path)
    spec = importlib.util.spec_from_file_location(f"bento_view_{path.parent.name}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load view file {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    render = getattr(module, "render", None)
    if not callable(render):
        raise AttributeError(f"View file {path} does not define render(component)")
    return render


def _as_renderer(template: Any) -> Callable[[Component], Any] | None:
    if callable(template):
        return template
    if isinstance(template, (str, Path)) and Path(template).is_file():
        return load_view(template)
    return None


def _local_view(component: Component) -> Path | None:
    try:
        source = inspect.getfile(type(component))
    except (TypeError, OSError):
        return None
    path = Path(source).parent / VIEW_FILE
    return path if path.is_file() else None


def resolve_template(component: Component, explicit: Any = None) -> Callable[[Component], Any] | None:
    """
    Find the renderer for a component.

    Order: the ``bento/component/{name}/template`` filter, the theme override
    ``<theme_dir>/components/{name}/view.py``, a ``view.py`` beside the
    component's module, then ``explicit`` (or the class ``template``).
    """
    name = component.component_name.lower()

    filtered = component.hooks.apply_filters(f"bento/component/{name}/template", None, component)
    if filtered and (renderer := _as_renderer(filtered)):
        return renderer

    theme_dir = component.config.theme_dir
    if theme_dir is not None:
        override = Path(theme_dir) / "components" / name / VIEW_FILE
        if override.is_file():
            return load_view(override)

    if (local := _local_view(component)) is not None:
        return load_view(local)

    template = explicit if explicit is not None else type(component).template
    if template:
        return _as_renderer(template)
    return None


def render_template(component: Component, explicit: Any = None) -> str:
    renderer = resolve_template(component, explicit)
    if renderer is None:
        name = component.component_name.lower()
        logger.debug(f"No template found for component: {name}")
        return f"<!-- No template found for component: {escape(name)} -->"
    return render_html(renderer(component))
