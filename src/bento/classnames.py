"""
Class name resolution for component parts.

A part definition may be:
- a string: "card"
- a map of conditional classes: {"is-active": props["active"], 0: "always"}
- a list mixing the above, flattened into one class list
- a list of lists: one class list per repeated item, structure preserved
- a callable receiving (props, slots) and returning any of the above

Usage:
    classnames({
        "root": ["alert", {"alert--dismissible": props["dismissible"]}],
        "item": lambda props: [[f"item-{i}"] for i in range(props["count"])],
    }, props, "Alert")
    # {"root": 'class="alert alert--dismissible"', "item": ['class="item-0"', ...]}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Literal, Protocol

from .core import call_with_accepted_args, escape_attr
from .errors import MalformedPart
from .hooks import Hooks, resolve_hooks
from .shapes import Shape, is_sequence, shape_of

logger = logging.getLogger(__name__)

ClassList = list[Any]  # str leaves or nested ClassLists
PartsDefinition = Mapping[str, Any] | Callable[..., Mapping[str, Any]]


class StoreHost(Protocol):
    """What attribute and classname stores need from their component."""

    @property
    def component_name(self) -> str: ...

    def resolved_context(self) -> tuple[dict[str, Any], dict[str, str]]: ...

    @property
    def hooks(self) -> Hooks: ...

    @property
    def escape(self) -> Callable[[str], str] | None: ...


def flatten_classes(classes: Any) -> list[str]:
    """Flatten strings and arbitrarily nested lists of strings into one list."""
    if isinstance(classes, str):
        return [classes]
    if is_sequence(classes):
        result: list[str] = []
        for item in classes:
            result.extend(flatten_classes(item))
        return result
    return []


def join_classes(classes: Any) -> str:
    """First-seen unique class names joined by spaces."""
    tokens = (token for c in flatten_classes(classes) for token in c.split())
    return " ".join(dict.fromkeys(tokens))


def block_class(
    element: str,
    block: str,
    modifier: str = "",
    *,
    separator: str = "__",
    mod_separator: str = "--",
) -> str:
    """
    Build a BEM/ABEM class name.

    Example:
        >>> block_class("title", "card", "large")
        'card__title--large'
    """
    if not block:
        logger.warning("block_class: No block name provided.")
        return ""

    name = block
    if element:
        name += f"{separator}{element}"
    if modifier:
        name += f"{mod_separator}{modifier}"
    return name


def process_class_part(
    defs: Any,
    props: Mapping[str, Any] | None = None,
    slots: Mapping[str, Any] | None = None,
    part: str = "",
) -> ClassList:
    """Resolve a class definition into a class list, or nested class lists."""
    props = props if props is not None else {}
    slots = slots if slots is not None else {}

    match shape_of(defs, nested_items=(list, tuple)):
        case Shape.CALLABLE:
            return process_class_part(call_with_accepted_args(defs, props, slots), props, slots, part)
        case Shape.TEXT:
            return [defs]
        case Shape.MAP:
            result: ClassList = []
            for name, condition in defs.items():
                if isinstance(name, int):
                    result.extend(flatten_classes(condition))
                elif condition:
                    result.append(name)
            return result
        case Shape.NESTED:
            return [
                process_class_part(item, props, slots, f"{part}[{index}]")
                for index, item in enumerate(defs)
            ]
        case Shape.FLAT:
            result = []
            for item in defs:
                # Numbers and other leaves carry no class name
                if shape_of(item) is Shape.OTHER:
                    continue
                result.extend(flatten_classes(process_class_part(item, props, slots, part)))
            return result
        case Shape.EMPTY:
            return []
        case _:
            raise MalformedPart(
                "classnames", part, f"resolved to an unsupported {type(defs).__name__} value."
            )


def build_classes(
    class_list: Any,
    part: str = "",
    wrap: bool = True,
    *,
    escape: Callable[[str], str] | None = None,
) -> Any:
    """
    Collapse a class list into a class string, or nested class strings.

    With ``wrap`` the string is returned as a ready ``class="..."`` attribute.
    """
    if not is_sequence(class_list):
        return class_list
    if not class_list:
        return ""

    if all(isinstance(c, str) for c in class_list):
        class_string = join_classes(class_list)
        if wrap and class_string:
            return f'class="{escape_attr(class_string, escape)}"'
        return class_string

    if all(is_sequence(c) for c in class_list):
        return [
            build_classes(c, f"{part}[{index}]", wrap, escape=escape)
            for index, c in enumerate(class_list)
        ]

    logger.warning(f"classnames: Part '{part}' has a mix of string and array children. This is not supported.")
    return ""


def classnames(
    parts: Mapping[str, Any],
    props: Mapping[str, Any] | None = None,
    component: str = "",
    slots: Mapping[str, Any] | None = None,
    *,
    hooks: Hooks | None = None,
    escape: Callable[[str], str] | None = None,
    wrap: bool = True,
) -> dict[str, Any] | Literal[False]:
    """
    Build class strings for every part.

    Returns False, and logs why, when any part definition is malformed.
    """
    props = props if props is not None else {}
    hooks = resolve_hooks(hooks)

    result: dict[str, Any] = {}
    for part, defs in parts.items():
        try:
            class_list = process_class_part(defs, props, slots, part)
        except MalformedPart as exc:
            logger.warning(str(exc))
            return False

        result[part] = build_classes(class_list, part, wrap, escape=escape)
        if component and part and isinstance(result[part], str):
            result[part] = hooks.apply_filters(
                f"bento/component/{component}/class/{part}", result[part], class_list, props
            )

    if component:
        result = hooks.apply_filters(f"bento/component/{component}/classes", result, props)
    return result


def resolve_parts(
    definition: PartsDefinition | None,
    props: Mapping[str, Any],
    slots: Mapping[str, Any],
) -> dict[str, Any]:
    """Evaluate a store definition: a parts map, or a callable returning one."""
    if definition is None:
        return {}
    if callable(definition):
        return dict(call_with_accepted_args(definition, props, slots) or {})
    return dict(definition)


class ClassnameStore:
    """
    Classnames of one component's parts.

    Define in ``setup()`` and resolve against the current props and slots:

        self.classname_store.define(lambda props, slots: {
            "root": ["alert", {"alert--open": props["open"]}],
        })
        self.classname_store.get()
    """

    def __init__(self, component: StoreHost):
        self.component = component
        self._definition: PartsDefinition | None = None

    def define(self, definition: PartsDefinition) -> None:
        self._definition = definition

    @property
    def defined(self) -> bool:
        return self._definition is not None

    def get(self) -> dict[str, Any] | Literal[False]:
        props, slots = self.component.resolved_context()
        parts = resolve_parts(self._definition, props, slots)
        return classnames(
            parts,
            props,
            self.component.component_name,
            slots,
            hooks=self.component.hooks,
            escape=self.component.escape,
        )
