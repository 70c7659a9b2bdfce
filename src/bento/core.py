"""
Core markup primitives shared by the resolvers and the render layer.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Renderable(Protocol):
    """Protocol for objects that can render themselves as HTML."""

    def __html__(self) -> str: ...


@dataclass(frozen=True, slots=True)
class SafeHTML:
    """
    Marks content as already escaped/safe.
    Immutable and hashable for use as cache keys.
    """

    content: str

    def __html__(self) -> str:
        return self.content

    def __str__(self) -> str:
        return self.content

    def __bool__(self) -> bool:
        return bool(self.content)

    def __add__(self, other: SafeHTML | str) -> SafeHTML:
        if isinstance(other, SafeHTML):
            return SafeHTML(self.content + other.content)
        return SafeHTML(self.content + escape(str(other)))

    def __radd__(self, other: SafeHTML | str) -> SafeHTML:
        if isinstance(other, SafeHTML):
            return SafeHTML(other.content + self.content)
        return SafeHTML(escape(str(other)) + self.content)


def raw(content: str) -> SafeHTML:
    """Mark a string as safe/pre-escaped HTML. Use with caution."""
    return SafeHTML(content)


def escape_attr(value: Any, escape_fn: Callable[[str], str] | None = None) -> str:
    """
    Escape a value for use inside a double-quoted HTML attribute.

    A host supplied escaper wins; otherwise quotes, ampersands and angle
    brackets are escaped with ``html.escape``.
    """
    text = "" if value is None else str(value)
    if escape_fn is not None:
        return escape_fn(text)
    return escape(text, quote=True)


def attr(
    name: str,
    value: Any,
    escape_fn: Callable[[str], str] | None = None,
) -> SafeHTML:
    """
    Build a safe HTML attribute.

    - None, False or "": returns empty (attribute omitted)
    - True: returns just the attribute name (boolean attribute)
    - anything else: returns name="escaped_value"
    """
    if value is None or value is False or value == "":
        return SafeHTML("")
    if value is True:
        return SafeHTML(escape_attr(name, escape_fn))
    return SafeHTML(f'{escape_attr(name, escape_fn)}="{escape_attr(value, escape_fn)}"')


def render_html(result: Any) -> str:
    """Render a template result (str, SafeHTML, element, renderable) to markup."""
    if result is None:
        return ""

    if isinstance(result, SafeHTML):
        return result.content

    if isinstance(result, str):
        return result

    if isinstance(result, Renderable):
        return str(result.__html__())

    if isinstance(result, (list, tuple)):
        return "".join(render_html(item) for item in result)

    return escape(str(result))


def _positional_capacity(fn: Callable) -> int | None:
    """Number of positional arguments ``fn`` accepts, None when unbounded."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None

    count = 0
    for p in sig.parameters.values():
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if p.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def call_with_accepted_args(fn: Callable, *args: Any) -> Any:
    """
    Call ``fn`` with as many leading positional ``args`` as it accepts.

    Definition callables, slot closures and filters are free to ignore the
    trailing context they are offered.
    """
    capacity = _positional_capacity(fn)
    if capacity is None:
        return fn(*args)
    return fn(*args[:capacity])
