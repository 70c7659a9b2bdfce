"""
Final per-part attribute composition.

Combines what a component defines for its parts with what the caller passed
through the ``attributes``, ``classes``, ``reset_attributes`` and
``reset_classes`` props, then applies the ``id`` prop to ``root``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable

from .attributes import build_attributes, merge_class_fragments, process_attributes
from .classnames import build_classes, process_class_part
from .core import escape_attr
from .errors import MalformedPart
from .shapes import is_structured

logger = logging.getLogger(__name__)

_ID_ATTR = re.compile(r'\s*(?<![\w-])id="[^"]*"')
_WHITESPACE = re.compile(r"\s+")


def _is_empty_source(source: Any) -> bool:
    if source is None or source is False:
        return True
    if isinstance(source, (str, list, tuple, dict)):
        return len(source) == 0
    return False


def _keys(source: Any) -> list[Any]:
    if isinstance(source, dict):
        return list(source)
    return list(range(len(source)))


def _child(source: Any, key: Any, fill: Any = "") -> Any:
    if isinstance(source, dict):
        return source.get(key, fill)
    if isinstance(source, (list, tuple)):
        return source[key] if isinstance(key, int) and 0 <= key < len(source) else fill
    return fill


def _merge_strings(sources: list[Any]) -> str:
    return _WHITESPACE.sub(" ", merge_class_fragments(sources)).strip()


def merge_attributes_and_classes(*sources: Any) -> Any:
    """
    Merge resolved attribute and class strings, keeping nested structure.

    Example:
        >>> merge_attributes_and_classes('role="alert" class="a"', 'class="b a"')
        'role="alert" class="a b"'
        >>> merge_attributes_and_classes(['x="1"', 'x="2"'], 'class="item"')
        ['x="1" class="item"', 'x="2" class="item"']
    """
    present = [s for s in sources if not _is_empty_source(s)]
    if not present:
        return ""

    if all(is_structured(s) for s in present):
        keys = list(dict.fromkeys(k for s in present for k in _keys(s)))
        merged = {key: merge_attributes_and_classes(*(_child(s, key) for s in present)) for key in keys}
        if all(isinstance(s, (list, tuple)) for s in present):
            return [merged[key] for key in keys]
        return merged

    driver = next((s for s in present if is_structured(s)), None)
    if driver is not None:
        merged = {
            key: merge_attributes_and_classes(
                *(_child(s, key) if is_structured(s) else s for s in present)
            )
            for key in _keys(driver)
        }
        if isinstance(driver, (list, tuple)):
            return list(merged.values())
        return merged

    return _merge_strings(present)


def _parts_of(source: Any) -> dict[str, Any]:
    return source if isinstance(source, dict) else {}


def resolve_prop_attributes(value: Any, props: Mapping[str, Any], *, escape: Callable[[str], str] | None = None) -> Any:
    """Caller supplied attributes for one part. Strings are trusted attribute text."""
    if isinstance(value, str):
        return value.strip()
    return build_attributes(process_attributes(value, props, escape=escape))


def resolve_prop_classes(
    value: Any,
    props: Mapping[str, Any],
    *,
    part: str = "",
    escape: Callable[[str], str] | None = None,
) -> Any:
    """Caller supplied classes for one part, as ``class="..."`` text."""
    try:
        return build_classes(process_class_part(value, props, None, part), part, escape=escape)
    except MalformedPart as exc:
        logger.warning(str(exc))
        return ""


def apply_root_id(merged: dict[str, Any], id: str, *, escape: Callable[[str], str] | None = None) -> dict[str, Any]:
    """Strip every ``id`` from ``root`` and put the given one first."""
    if not id:
        return merged
    root = merged.get("root", "")
    if not isinstance(root, str):
        return merged
    root = _ID_ATTR.sub("", root).strip()
    merged["root"] = f'id="{escape_attr(id, escape)}" {root}'.strip()
    return merged


def compose_attributes(
    defined_attributes: Any,
    defined_classes: Any,
    prop_attributes: Any = None,
    prop_classes: Any = None,
    reset_attributes: Any = None,
    reset_classes: Any = None,
    id: str = "",
    *,
    props: Mapping[str, Any] | None = None,
    escape: Callable[[str], str] | None = None,
) -> dict[str, Any]:
    """
    Final attribute string (or nested list of them) for every part.

    A part with ``reset_attributes`` uses only those plus its ``reset_classes``.
    A part with only ``reset_classes`` keeps its defined attributes and swaps
    the defined classes. Any other part merges everything.
    """
    props = props if props is not None else {}
    sources = [
        _parts_of(defined_attributes),
        _parts_of(defined_classes),
        _parts_of(prop_attributes),
        _parts_of(prop_classes),
        _parts_of(reset_attributes),
        _parts_of(reset_classes),
    ]
    defined_attrs, defined_cls, prop_attrs, prop_cls, reset_attrs, reset_cls = sources
    parts = list(dict.fromkeys(key for source in sources for key in source))

    merged: dict[str, Any] = {}
    for part in parts:
        if part in reset_attrs:
            merged[part] = merge_attributes_and_classes(
                resolve_prop_attributes(reset_attrs[part], props, escape=escape),
                resolve_prop_classes(reset_cls.get(part), props, part=part, escape=escape),
            )
        elif part in reset_cls:
            merged[part] = merge_attributes_and_classes(
                defined_attrs.get(part, ""),
                resolve_prop_classes(reset_cls[part], props, part=part, escape=escape),
            )
        else:
            merged[part] = merge_attributes_and_classes(
                defined_attrs.get(part, ""),
                defined_cls.get(part, ""),
                resolve_prop_attributes(prop_attrs.get(part), props, escape=escape),
                resolve_prop_classes(prop_cls.get(part), props, part=part, escape=escape),
            )

    return apply_root_id(merged, id, escape=escape)
