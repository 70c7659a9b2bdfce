"""
Component base class.

Subclasses declare their props, slots, attributes and classnames in
``setup()`` and render through a template: a ``view.py`` file or a callable
receiving the component.

Usage:
    class Alert(Component):
        def setup(self):
            self.define_props({
                "title": ["", "string", True],
                "dismissible": [False, "boolean"],
            })
            self.define_slots({"default": ["string", "callable"]})
            self.define_classnames(lambda props, slots: {
                "root": ["alert", {"alert--dismissible": props["dismissible"]}],
                "title": "alert__title",
            })
            self.define_attributes({"root": {"role": "alert"}})

        def template(self):
            parts = self.use_attributes()
            return f"<div {parts['root']}><strong {parts['title']}>{self.prop('title')}</strong>{self.slot()}</div>"

    str(Alert({"title": "Saved", "id": "notice"}, slots={"default": "All good."}))
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Mapping
from typing import Any, Callable, ClassVar

from .attributes import AttributeStore, attributes
from .classnames import ClassnameStore, block_class, classnames, resolve_parts
from .compositor import compose_attributes
from .config import BentoConfig
from .core import SafeHTML, escape_attr
from .hooks import Hooks
from .props import PropStore
from .rendering import RenderContext, render_component_error, render_template
from .slots import SlotContent, SlotStore

logger = logging.getLogger(__name__)


class Component:
    """Base for server-rendered components with typed props and named slots."""

    name: ClassVar[str | None] = None
    template: ClassVar[Any] = None

    def __init__(
        self,
        props: Mapping[str, Any] | None = None,
        *,
        slots: Mapping[str, SlotContent] | None = None,
        config: BentoConfig | None = None,
    ):
        self.config = config or BentoConfig()
        self.errors: list[str] = []
        self.props = PropStore(
            self.component_name,
            props,
            hooks=self.config.hooks,
            strict=self.config.strict_props,
        )
        self.slots = SlotStore(self.component_name, hooks=self.config.hooks)
        self.classname_store = ClassnameStore(self)
        self.attribute_store = AttributeStore(self)

        self.setup()
        if not self.props.definitions:
            self.define_props({})
        for name, content in (slots or {}).items():
            self.use_slot(name, content)

        # Surface definition errors at construction time
        self.props.resolve()
        self.slots.resolve()
        self.classname_store.get()
        self.attribute_store.get()

    def setup(self) -> None:
        """Declare props, slots, classnames and attributes."""
        raise NotImplementedError(f"{type(self).__name__} must implement setup()")

    # --- StoreHost ---

    @property
    def component_name(self) -> str:
        return type(self).name or type(self).__name__

    @property
    def hooks(self) -> Hooks:
        return self.config.hooks

    @property
    def escape(self) -> Callable[[str], str] | None:
        return self.config.escape

    def resolved_context(self) -> tuple[dict[str, Any], dict[str, str]]:
        return self.props.resolve(), self.slots.resolve()

    # --- Props ---

    def define_props(self, definitions: Mapping[str, Any]) -> None:
        self.props.define(definitions)

    def computed(self, key: str, fn: Callable[[PropStore], Any]) -> None:
        self.props.computed(key, fn)

    def prop(self, key: str, default: Any = None) -> Any:
        return self.props.get(key, default)

    def use_props(self) -> dict[str, Any]:
        return self.props.resolve()

    def with_props(self, keys: list[str] | tuple[str, ...], callback: Callable[..., Any]) -> Any:
        """Call ``callback`` with the values of ``keys`` as positional arguments."""
        return callback(*self.props.extract(keys).values())

    # --- Slots ---

    def define_slots(self, definitions: Mapping[str, Any]) -> None:
        self.slots.define(definitions)

    def use_slot(self, name: str | None, content: SlotContent, override: bool = True) -> None:
        self.slots.set(name, content, override)

    def has_slot(self, name: str | None = None) -> bool:
        return self.slots.has(name)

    def slot_is_empty(self, name: str | None = None) -> bool:
        return self.slots.is_empty(name)

    def slot_is_active(self, name: str | None = None) -> bool:
        return self.slots.is_active(name)

    def slot(
        self,
        name: str | None = None,
        fallback: str = "",
        scope: Mapping[str, Any] | None = None,
    ) -> SafeHTML:
        return SafeHTML(self.slots.get(name, fallback, scope))

    # --- Attributes and classnames ---

    def define_attributes(self, definition: Any) -> None:
        self.attribute_store.define(definition)

    def define_classnames(self, definition: Any) -> None:
        self.classname_store.define(definition)

    def attributes(self, parts: Any = None) -> dict[str, Any]:
        """Attributes of the defined parts, or of ad hoc ``parts``."""
        if parts is None:
            return self.attribute_store.get()
        props, slots = self.resolved_context()
        return attributes(
            resolve_parts(parts, props, slots),
            props,
            self.component_name,
            hooks=self.hooks,
            escape=self.escape,
        )

    def classnames(self, parts: Any = None) -> dict[str, Any] | bool:
        """Classnames of the defined parts, or of ad hoc ``parts``."""
        if parts is None:
            return self.classname_store.get()
        props, slots = self.resolved_context()
        return classnames(
            resolve_parts(parts, props, slots),
            props,
            self.component_name,
            slots,
            hooks=self.hooks,
            escape=self.escape,
        )

    def use_attributes(self) -> dict[str, Any]:
        """Final attribute strings per part, ready for the template."""
        return compose_attributes(
            self.attribute_store.get(),
            self.classname_store.get(),
            self.prop("attributes"),
            self.prop("classes"),
            self.prop("reset_attributes"),
            self.prop("reset_classes"),
            self.prop("id", ""),
            props=self.props,
            escape=self.escape,
        )

    def block_name(self) -> str:
        return self.prop("block_name") or self.component_name.lower()

    def block_class(self, element: str = "", block: str = "", modifier: str = "") -> str:
        return block_class(element, block or self.block_name(), modifier)

    # --- Lifecycle ---

    def before_render(self) -> None:
        self.props.clear_computed_cache()

    def after_render(self, output: str) -> None:
        pass

    def render(self, template: Any = None) -> str:
        return render_template(self, template)

    def render_with_lifecycle(self, context: RenderContext | None = None) -> str:
        context = context or RenderContext()
        try:
            self.before_render()
            output = self.render()
            self.after_render(output)
            return output
        except Exception as e:
            self.errors.append(str(e))
            logger.error(
                f"Component error in {self.component_name}: {e}",
                exc_info=self.config.debug,
            )
            return render_component_error(
                self.component_name,
                str(e),
                self.props.extract(list(self.props.definitions)),
                traceback.format_exc(),
                verbose=self.config.debug and context.authenticated,
            )

    def __html__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        try:
            return self.render_with_lifecycle()
        except Exception as e:
            return f"<!-- Component render error: {escape_attr(e)} -->"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(props={self.props.resolve()!r})"
