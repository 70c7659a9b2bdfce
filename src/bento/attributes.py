"""
Attribute resolution for component parts.

A part definition may be:
- a string: boolean attribute, "disabled"
- a map: {"data-foo": "bar", "aria-label": label, "class": "x", 0: "hidden"}
- a flat list mixing the above: [{"type": "text"}, "required"]
- a list of lists/maps: one attribute set per repeated item, structure preserved
- a callable receiving props and returning any of the above

Usage:
    attributes({
        "root": [{"role": "alert", "data-id": 123}, "hidden"],
        "item": lambda props: [
            [{"data-index": i}, {"aria-current": item["active"]}]
            for i, item in enumerate(props["items"])
        ],
    }, props, "Alert")
    # {"root": 'role="alert" data-id="123" hidden', "item": ['data-index="0" aria-current', ...]}
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable

from .classnames import PartsDefinition, StoreHost, join_classes, resolve_parts
from .core import call_with_accepted_args, escape_attr
from .errors import MalformedPart
from .hooks import Hooks, resolve_hooks
from .shapes import Shape, is_sequence, shape_of

logger = logging.getLogger(__name__)

AttributeMap = dict[str, Any]

_CLASS_ATTR = re.compile(r'\s*(?<![\w-])class="([^"]*)"')


def merge_class_fragments(sources: list[Any]) -> str:
    """
    Join attribute strings, folding every ``class="..."`` into one trailing attribute.

    Example:
        >>> merge_class_fragments(['role="alert" class="a"', 'class="b a" hidden'])
        'role="alert" hidden class="a b"'
    """
    text: list[str] = []
    classes: list[str] = []
    for source in sources:
        source = str(source)
        for value in _CLASS_ATTR.findall(source):
            classes.extend(value.split())
        text.append(_CLASS_ATTR.sub("", source).strip())

    merged = " ".join(t for t in text if t)
    class_string = " ".join(dict.fromkeys(classes))
    if class_string:
        merged = f'{merged} class="{class_string}"'.strip()
    return merged


def render_attribute_map(attrs: Mapping[str, Any], escape: Callable[[str], str] | None = None) -> str:
    """
    Render an attribute map.

    True renders the bare name, False/None/"" drop the attribute, lists and
    maps are written as JSON, everything else as an escaped string.
    """
    rendered: list[str] = []
    for name, value in attrs.items():
        name = str(name).strip()
        if not name:
            continue
        if isinstance(value, bool):
            if value:
                rendered.append(escape_attr(name, escape))
            continue
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple, dict)):
            value = json.dumps(value)
        rendered.append(f'{escape_attr(name, escape)}="{escape_attr(value, escape)}"')
    return " ".join(rendered)


def _collect(
    defs: Any,
    props: Mapping[str, Any],
    attrs: AttributeMap,
    classes: list[Any],
) -> None:
    """Merge a definition node into one flat attribute map and class list."""
    match shape_of(defs):
        case Shape.CALLABLE:
            _collect(call_with_accepted_args(defs, props), props, attrs, classes)
        case Shape.TEXT:
            attrs[defs.strip()] = True
        case Shape.MAP:
            for name, value in defs.items():
                if name == "class":
                    classes.append(value)
                elif isinstance(name, int):
                    if value is not None and value is not False:
                        attrs[str(value).strip()] = True
                elif value is None or value is False:
                    attrs.pop(name, None)
                else:
                    attrs[name] = value
        case Shape.NESTED | Shape.FLAT:
            for item in defs:
                _collect(item, props, attrs, classes)
        case _:
            pass


def _classes_for_item(classes_map: Any, index: int) -> Any:
    """Classes for one item of a nested definition. A scalar attaches to the first item only."""
    if is_sequence(classes_map):
        return classes_map[index] if index < len(classes_map) else None
    if isinstance(classes_map, dict):
        return classes_map.get(index)
    return classes_map if index == 0 else None


def process_attributes(
    defs: Any,
    props: Mapping[str, Any] | None = None,
    classes_map: Any = None,
    component: str = "",
    part: str = "",
    *,
    hooks: Hooks | None = None,
    escape: Callable[[str], str] | None = None,
) -> str | list[Any]:
    """
    Resolve a part definition into an attribute string, or a list of them
    mirroring a nested definition.

    ``classes_map`` holds extra classes merged into the ``class`` attribute.
    Every attribute string passes the ``bento/component/{component}/attributes/{part}``
    filter with the attribute map and props as context.
    """
    props = props if props is not None else {}
    hooks = resolve_hooks(hooks)

    match shape_of(defs):
        case Shape.CALLABLE:
            return process_attributes(
                call_with_accepted_args(defs, props),
                props,
                classes_map,
                component,
                part,
                hooks=hooks,
                escape=escape,
            )
        case Shape.NESTED:
            return [
                process_attributes(
                    child,
                    props,
                    _classes_for_item(classes_map, index),
                    component,
                    part,
                    hooks=hooks,
                    escape=escape,
                )
                for index, child in enumerate(defs)
            ]
        case Shape.TEXT | Shape.MAP | Shape.FLAT:
            attrs: AttributeMap = {}
            classes: list[Any] = []
            _collect(defs, props, attrs, classes)
            if classes_map:
                classes.append(classes_map)

            class_string = join_classes(classes)
            if class_string:
                attrs.pop("class", None)
                attrs["class"] = class_string

            attr_string = render_attribute_map(attrs, escape).strip()
            if component and part:
                attr_string = hooks.apply_filters(
                    f"bento/component/{component}/attributes/{part}", attr_string, attrs, props
                )
            return attr_string
        case _:
            return ""


def build_attributes(attr_list: Any, part: str = "") -> Any:
    """
    Collapse resolved attributes bottom-up.

    A list of strings joins into one string with a single merged ``class``,
    a list of lists keeps its structure. A node mixing both is malformed and renders as "".
    """
    try:
        return _build_node(attr_list, part)
    except MalformedPart as exc:
        logger.warning(str(exc))
        return ""


def _build_node(attr_list: Any, part: str) -> Any:
    if not is_sequence(attr_list):
        return attr_list
    if not attr_list:
        return ""

    if all(isinstance(v, str) for v in attr_list):
        return merge_class_fragments(attr_list)

    if all(is_sequence(v) for v in attr_list):
        return [build_attributes(v, f"{part}[{index}]") for index, v in enumerate(attr_list)]

    raise MalformedPart("attributes", part, "has a mix of string and array children. This is not supported.")


def attributes(
    parts: Mapping[str, Any],
    props: Mapping[str, Any] | None = None,
    component: str = "",
    classes_map: Mapping[str, Any] | None = None,
    *,
    hooks: Hooks | None = None,
    escape: Callable[[str], str] | None = None,
) -> dict[str, Any]:
    """
    Build attribute strings for every part.

    The complete map passes the ``bento/component/{component}/attributes`` filter.
    """
    props = props if props is not None else {}
    classes_map = classes_map or {}
    hooks = resolve_hooks(hooks)

    result: dict[str, Any] = {}
    for part, defs in parts.items():
        attr_list = process_attributes(
            defs,
            props,
            classes_map.get(part),
            component,
            part,
            hooks=hooks,
            escape=escape,
        )
        result[part] = build_attributes(attr_list, part)

    if component:
        result = hooks.apply_filters(f"bento/component/{component}/attributes", result, props)
    return result


class AttributeStore:
    """
    Attributes of one component's parts.

    Usage in ``setup()``:
        self.attribute_store.define(lambda props, slots: {
            "root": [{"role": "alert"}, "hidden"],
            "input": [{"type": "text", "placeholder": "Enter..."}, "required"],
        })

    In the template:
        attrs = self.attribute_store.get()
        f"<div {attrs['root']}>"
    """

    def __init__(self, component: StoreHost):
        self.component = component
        self._definition: PartsDefinition | None = None

    def define(self, definition: PartsDefinition) -> None:
        self._definition = definition

    @property
    def defined(self) -> bool:
        return self._definition is not None

    def get(self) -> dict[str, Any]:
        props, slots = self.component.resolved_context()
        parts = resolve_parts(self._definition, props, slots)
        return attributes(
            parts,
            props,
            self.component.component_name,
            hooks=self.component.hooks,
            escape=self.component.escape,
        )
