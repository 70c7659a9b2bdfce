"""Component registry and name lookup."""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, TypeVar, overload

from .component import Component
from .config import BentoConfig
from .errors import ComponentNotFound
from .rendering import RenderContext
from .slots import SlotContent

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type[Component])


class Bento:
    """
    Registered components sharing one configuration.

    Usage:
        bento = Bento(BentoConfig(namespace="myapp.components"))

        @bento.register
        class Alert(Component):
            ...

        bento.render("Alert", {"title": "Saved"})
    """

    def __init__(self, config: BentoConfig | None = None):
        self.config = config or BentoConfig()
        self._components: dict[str, type[Component]] = {}

    @overload
    def register(self, cls: C, *, name: str | None = None) -> C: ...

    @overload
    def register(self, cls: None = None, *, name: str | None = None) -> Callable[[C], C]: ...

    def register(self, cls=None, *, name=None):
        """Register a component class. Works as ``register(cls)`` or as a decorator."""

        def decorator(component_cls: C) -> C:
            if not (inspect.isclass(component_cls) and issubclass(component_cls, Component)):
                raise TypeError(f"{component_cls!r} is not a Component subclass")
            key = name or component_cls.name or component_cls.__name__
            self._components[key] = component_cls
            logger.info(f"Registered component {key}")
            return component_cls

        if cls is None:
            return decorator
        return decorator(cls)

    @property
    def components(self) -> dict[str, type[Component]]:
        return self._components.copy()

    def resolve(self, name: str) -> type[Component]:
        """Registered name first, then an attribute of the configured namespace module."""
        if name in self._components:
            return self._components[name]

        namespace = self.config.namespace
        try:
            module = importlib.import_module(namespace)
        except ImportError as e:
            raise ComponentNotFound(name, namespace) from e

        found = getattr(module, name, None)
        if inspect.isclass(found) and issubclass(found, Component):
            return found
        raise ComponentNotFound(name, namespace)

    def component(
        self,
        name: str,
        props: Mapping[str, Any] | None = None,
        slots: Mapping[str, SlotContent] | None = None,
    ) -> Component:
        return self.resolve(name)(props, slots=slots, config=self.config)

    def render(
        self,
        name: str,
        props: Mapping[str, Any] | None = None,
        slots: Mapping[str, SlotContent] | None = None,
        context: RenderContext | None = None,
    ) -> str:
        return self.component(name, props, slots).render_with_lifecycle(context)
