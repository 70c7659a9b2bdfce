"""
Named content slots.

A slot holds one or more entries, each either literal markup or a callable
returning markup. Callables receive the scope passed to ``get`` positionally.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from .core import Renderable, call_with_accepted_args
from .errors import SlotTypeMismatch
from .hooks import Hooks, resolve_hooks
from .props import describe_type, normalize_types, type_tags

SlotContent = str | Callable[..., Any]

DEFAULT_SLOT = "default"


def slot_name(name: str | None) -> str:
    return DEFAULT_SLOT if name is None or name == "" else name


def _content_kinds(content: Any) -> frozenset[str]:
    if callable(content):
        return frozenset({"callable"})
    if isinstance(content, Renderable):
        return frozenset({"string"})
    return type_tags(content)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Renderable):
        return str(value.__html__())
    return str(value)


class SlotStore:
    """Slots of one component instance."""

    def __init__(self, component: str, *, hooks: Hooks | None = None):
        self.component = component
        self._slots: dict[str, list[SlotContent]] = {}
        self._definitions: dict[str, frozenset[str]] = {}
        self._hooks = resolve_hooks(hooks)

    @property
    def definitions(self) -> dict[str, frozenset[str]]:
        return dict(self._definitions)

    def define(self, definitions: Mapping[str, str | list[str] | tuple[str, ...]]) -> None:
        """Declare slot names and the content kinds they accept."""
        for name, kinds in definitions.items():
            self._definitions[slot_name(name)] = normalize_types(kinds)

    def set(self, name: str | None, content: SlotContent, override: bool = True) -> None:
        """Replace (default) or append content for a slot."""
        name = slot_name(name)

        allowed = self._definitions.get(name)
        if allowed is not None and not (_content_kinds(content) & allowed):
            actual = "callable" if callable(content) else describe_type(content)
            raise SlotTypeMismatch(name, allowed, actual)

        if override or name not in self._slots:
            self._slots[name] = [content]
        else:
            self._slots[name].append(content)

    def remove(self, name: str | None) -> None:
        self._slots.pop(slot_name(name), None)

    def has(self, name: str | None = None) -> bool:
        return slot_name(name) in self._slots

    def is_empty(self, name: str | None = None) -> bool:
        """True when the slot is unset or every entry renders blank."""
        name = slot_name(name)
        for entry in self._slots.get(name, ()):
            content = call_with_accepted_args(entry) if callable(entry) else entry
            if _as_text(content).strip() != "":
                return False
        return True

    def is_active(self, name: str | None = None) -> bool:
        return self.has(name) and not self.is_empty(name)

    def get(
        self,
        name: str | None = None,
        fallback: str = "",
        scope: Mapping[str, Any] | None = None,
    ) -> str:
        """Render a slot, calling callable entries with the scope values."""
        name = slot_name(name)
        if name not in self._slots:
            return fallback

        args = list((scope or {}).values())
        output: list[str] = []
        for entry in self._slots[name]:
            content = call_with_accepted_args(entry, *args) if callable(entry) else entry
            content = self._hooks.apply_filters(
                f"bento/component/{self.component}/slot/{name}", content
            )
            output.append(_as_text(content))
        return "".join(output)

    def resolve(self) -> dict[str, str]:
        """Every declared slot rendered without scope."""
        return {name: self.get(name) for name in self._definitions}

    def __getitem__(self, name: str | None) -> str:
        return self.get(name)

    def __setitem__(self, name: str | None, content: SlotContent) -> None:
        self.set(name, content)

    def __delitem__(self, name: str | None) -> None:
        self.remove(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __repr__(self) -> str:
        return f"SlotStore({self.component!r}, slots={list(self._slots)})"
