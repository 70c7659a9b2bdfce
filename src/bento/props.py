"""
Prop definitions and the per-component prop store.

Usage:
    store = PropStore("Alert", {"title": "Hi"})
    store.define({
        "title": "Default title",                      # shorthand default
        "count": [0, "integer", False, lambda v: v >= 0],  # positional form
        "variant": {"default": "info", "type": "string"},  # named form
    })
    store.computed("upper_title", lambda props: props["title"].upper())
    store.resolve()
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator, Mapping
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import (
    MissingRequiredProp,
    PropsReadOnlyError,
    TypeMismatch,
    ValidationFailed,
)
from .hooks import Hooks, resolve_hooks

logger = logging.getLogger(__name__)


# --- Type tags ---


_TAG_ALIASES: dict[str, frozenset[str]] = {
    "string": frozenset({"string"}),
    "str": frozenset({"string"}),
    "boolean": frozenset({"boolean"}),
    "bool": frozenset({"boolean"}),
    "integer": frozenset({"integer"}),
    "int": frozenset({"integer"}),
    "float": frozenset({"float"}),
    "double": frozenset({"float"}),
    "number": frozenset({"integer", "float"}),
    "array": frozenset({"array"}),
    "list": frozenset({"list"}),
    "tuple": frozenset({"list"}),
    "map": frozenset({"map"}),
    "dict": frozenset({"map"}),
    "null": frozenset({"null"}),
    "none": frozenset({"null"}),
    "callable": frozenset({"callable"}),
    "function": frozenset({"callable"}),
    "object": frozenset({"object"}),
}


def normalize_types(types: str | list[str] | tuple[str, ...] | set[str] | frozenset[str]) -> frozenset[str]:
    """Map user supplied type names to canonical tags."""
    if isinstance(types, str):
        types = [types]
    tags: set[str] = set()
    for name in types:
        key = str(name).strip().lower()
        if key not in _TAG_ALIASES:
            raise ValueError(f"Unknown prop type '{name}'")
        tags |= _TAG_ALIASES[key]
    return frozenset(tags)


def type_tags(value: Any) -> frozenset[str]:
    """Canonical tags a runtime value satisfies."""
    match value:
        case None:
            return frozenset({"null"})
        case bool():
            return frozenset({"boolean"})
        case int():
            return frozenset({"integer"})
        case float():
            return frozenset({"float"})
        case str():
            return frozenset({"string"})
        case list() | tuple():
            return frozenset({"array", "list"})
        case dict():
            return frozenset({"array", "map"})
        case _ if callable(value):
            return frozenset({"callable"})
        case _:
            return frozenset({"object"})


def describe_type(value: Any) -> str:
    tags = type_tags(value)
    for preferred in ("list", "map"):
        if preferred in tags:
            return preferred
    return next(iter(tags))


# --- Definitions ---


class PropDefinition(BaseModel):
    """Canonical definition of a single prop."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid", frozen=True)

    default: Any = None
    type: frozenset[str] | None = None
    required: bool = False
    validator: Callable[[Any], Any] | None = None
    formatter: Callable[[Any], Any] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> frozenset[str] | None:
        if value is None or value == "" or value == []:
            return None
        return normalize_types(value)

    @field_validator("required", mode="before")
    @classmethod
    def _coerce_required(cls, value: Any) -> bool:
        return bool(value)

    @classmethod
    def from_config(cls, config: Any) -> PropDefinition:
        """
        Normalize one of the accepted definition forms.

        - scalar: default value
        - list/tuple: [default, type, required, validator, formatter]
        - dict: named fields
        """
        if isinstance(config, PropDefinition):
            return config
        if isinstance(config, dict):
            return cls.model_validate(config)
        if isinstance(config, (list, tuple)):
            padded = list(config) + [None] * (5 - len(config))
            default, type_, required, validator, formatter = padded[:5]
            return cls(
                default=default,
                type=type_,
                required=required,
                validator=validator or None,
                formatter=formatter or None,
            )
        return cls(default=config)


GLOBAL_PROPS: dict[str, PropDefinition] = {
    "id": PropDefinition(default="", type="string"),
    "block_name": PropDefinition(default="", type="string"),
    "classes": PropDefinition(default="", type=["string", "array"]),
    "attributes": PropDefinition(default="", type=["string", "array"]),
    "reset_classes": PropDefinition(default={}, type="array"),
    "reset_attributes": PropDefinition(default={}, type="array"),
}


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _fresh(default: Any) -> Any:
    """Copy container defaults so instances never share them."""
    if isinstance(default, (list, dict, set)):
        return copy.deepcopy(default)
    return default


# --- Store ---


class PropStore(Mapping):
    """
    Declared, validated and formatted props of one component instance.

    Reads work by key, attribute or ``get``; every write fails with
    ``PropsReadOnlyError``.
    """

    def __init__(
        self,
        component: str,
        initial: Mapping[str, Any] | None = None,
        *,
        hooks: Hooks | None = None,
        strict: bool = False,
    ):
        object.__setattr__(self, "_component", component)
        object.__setattr__(self, "_initial", dict(initial or {}))
        object.__setattr__(self, "_values", dict(initial or {}))
        object.__setattr__(self, "_definitions", {})
        object.__setattr__(self, "_computed", {})
        object.__setattr__(self, "_computed_cache", {})
        object.__setattr__(self, "_hooks", resolve_hooks(hooks))
        object.__setattr__(self, "_strict", strict)

    @property
    def component(self) -> str:
        return self._component

    @property
    def definitions(self) -> dict[str, PropDefinition]:
        return dict(self._definitions)

    def define(self, definitions: Mapping[str, Any]) -> None:
        """Declare props, merge in the global props, then validate everything."""
        merged: dict[str, PropDefinition] = {}
        for key, definition in GLOBAL_PROPS.items():
            if key not in self._definitions and key not in definitions:
                merged[key] = definition
        for key, config in definitions.items():
            merged[key] = PropDefinition.from_config(config)

        self._definitions.update(merged)
        self._warn_unknown()
        self._apply_defaults_and_validate()

    def _warn_unknown(self) -> None:
        if not self._strict:
            return
        for key in self._initial:
            if key not in self._definitions:
                logger.warning(f"Unknown prop '{key}' passed to component {self._component}")

    def _apply_defaults_and_validate(self) -> None:
        for key, definition in self._definitions.items():
            supplied = key in self._initial
            value = self._initial[key] if supplied else _fresh(definition.default)

            if definition.required and not supplied and _is_blank(definition.default):
                raise MissingRequiredProp(key)

            value = self._hooks.apply_filters(f"bento/component/{self._component}/prop/{key}", value)

            if definition.type:
                actual = type_tags(value)
                if not (actual & definition.type):
                    raise TypeMismatch(key, definition.type, describe_type(value))

            if definition.validator is not None and not definition.validator(value):
                raise ValidationFailed(key)

            if definition.formatter is not None:
                value = definition.formatter(value)

            self._values[key] = value

    # --- Computed ---

    def computed(self, key: str, fn: Callable[[PropStore], Any]) -> None:
        """Register a derived prop, evaluated lazily once per render."""
        self._computed[key] = fn
        self._computed_cache.pop(key, None)

    def clear_computed_cache(self) -> None:
        """Forget computed values. Call before each render."""
        self._computed_cache.clear()

    # --- Reads ---

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._computed:
            if key not in self._computed_cache:
                self._computed_cache[key] = self._computed[key](self)
            return self._computed_cache[key]
        value = self._values.get(key)
        return default if value is None else value

    def extract(self, keys: list[str] | tuple[str, ...]) -> dict[str, Any]:
        return {key: self.get(key) for key in keys}

    def resolve(self) -> dict[str, Any]:
        """All declared props followed by computed-only props."""
        result = {key: self.get(key) for key in self._definitions}
        for key in self._computed:
            if key not in result:
                result[key] = self.get(key)
        return result

    def _known(self, key: str) -> bool:
        return key in self._computed or key in self._values

    def __getitem__(self, key: str) -> Any:
        if not self._known(key):
            raise KeyError(key)
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._known(key)

    def __iter__(self) -> Iterator[str]:
        yield from self._definitions
        for key in self._computed:
            if key not in self._definitions:
                yield key

    def __len__(self) -> int:
        return len(self._definitions) + sum(1 for k in self._computed if k not in self._definitions)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if not self._known(name):
            raise AttributeError(f"{self._component} has no prop '{name}'")
        return self.get(name)

    # --- Writes are rejected ---

    def __setitem__(self, key: str, value: Any) -> None:
        raise PropsReadOnlyError(key)

    def __delitem__(self, key: str) -> None:
        raise PropsReadOnlyError(key)

    def __setattr__(self, name: str, value: Any) -> None:
        raise PropsReadOnlyError(name)

    def __delattr__(self, name: str) -> None:
        raise PropsReadOnlyError(name)

    def __repr__(self) -> str:
        return f"PropStore({self._component!r}, keys={list(self)})"
