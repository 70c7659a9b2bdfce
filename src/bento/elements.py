"""
HTML element factories for view functions.

Resolved part attributes from ``Component.use_attributes()`` plug in through
``attrs``; keyword arguments add attributes of their own.

Usage:
    from bento.elements import div, h2, p

    def render(component):
        parts = component.use_attributes()
        return div(
            h2(component.prop("title"), attrs=parts["title"]),
            p(component.slot()),
            attrs=parts["root"],
            data_state="open",
        )
"""

from __future__ import annotations

from html import escape
from typing import Any

from .attributes import render_attribute_map
from .core import Renderable, render_html


class Element:
    """HTML element that renders when __html__ is called."""

    __slots__ = ("tag", "children", "attrs", "attr_string", "void")

    def __init__(
        self,
        tag: str,
        children: tuple[Any, ...],
        attrs: dict[str, Any],
        void: bool = False,
        attr_string: str = "",
    ):
        self.tag = tag
        self.children = children
        self.attrs = attrs
        self.attr_string = attr_string
        self.void = void

    def __html__(self) -> str:
        attr_str = " ".join(a for a in (self.attr_string.strip(), _render_attrs(self.attrs)) if a)
        space = " " if attr_str else ""

        if self.void:
            return f"<{self.tag}{space}{attr_str}>"

        inner = _render_children(self.children)
        return f"<{self.tag}{space}{attr_str}>{inner}</{self.tag}>"

    def __str__(self) -> str:
        return self.__html__()

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, children={len(self.children)}, attrs={list(self.attrs.keys())})"


def _render_children(children: tuple[Any, ...]) -> str:
    """Render a tuple of children to string."""
    parts = []
    for child in children:
        if child is None:
            continue

        # Strings get escaped
        if isinstance(child, str):
            parts.append(escape(child))
        # SafeHTML, elements and components pass through
        elif isinstance(child, Renderable):
            parts.append(render_html(child))
        # Iterables flatten (but not strings)
        elif hasattr(child, "__iter__") and not isinstance(child, bytes):
            parts.append(_render_children(tuple(child)))
        else:
            parts.append(escape(str(child)))

    return "".join(parts)


def _render_attrs(attrs: dict[str, Any]) -> str:
    """Render keyword attributes, ``class_`` -> ``class``, ``data_x`` -> ``data-x``."""
    normalized = {}
    for key, value in attrs.items():
        if key.endswith("_"):
            key = key[:-1]
        normalized[key.replace("_", "-")] = value
    return render_attribute_map(normalized)


def _make_element(tag: str, void: bool = False):
    """Factory for creating element functions."""

    def element(*children, attrs: Any = "", **kwargs) -> Element:
        return Element(tag, children, kwargs, void, render_html(attrs))

    element.__name__ = tag
    element.__doc__ = f"Create a <{tag}> element."
    return element


# Structure
section = _make_element("section")
article = _make_element("article")
aside = _make_element("aside")
header = _make_element("header")
footer = _make_element("footer")
nav = _make_element("nav")
main = _make_element("main")
div = _make_element("div")

# Text
h1 = _make_element("h1")
h2 = _make_element("h2")
h3 = _make_element("h3")
h4 = _make_element("h4")
p = _make_element("p")
ul = _make_element("ul")
ol = _make_element("ol")
li = _make_element("li")
figure = _make_element("figure")
figcaption = _make_element("figcaption")
a = _make_element("a")
span = _make_element("span")
strong = _make_element("strong")
em = _make_element("em")

# Forms
form = _make_element("form")
label = _make_element("label")
input_ = _make_element("input", void=True)
button = _make_element("button")
select = _make_element("select")
option = _make_element("option")
textarea = _make_element("textarea")

# Media
img = _make_element("img", void=True)
picture = _make_element("picture")
source = _make_element("source", void=True)
svg = _make_element("svg")

# Interactive
details = _make_element("details")
summary = _make_element("summary")
dialog = _make_element("dialog")
br = _make_element("br", void=True)
hr = _make_element("hr", void=True)


class Fragment:
    """Multiple children without a wrapper element."""

    __slots__ = ("children",)

    def __init__(self, *children):
        self.children = children

    def __html__(self) -> str:
        return _render_children(self.children)


def fragment(*children) -> Fragment:
    """Render multiple children without a wrapper element."""
    return Fragment(*children)
