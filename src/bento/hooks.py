"""
Filter hooks.

Every extension point in bento is a named filter: a value is handed to the
registered callbacks in turn and each returns the (possibly replaced) value.
With nothing registered a filter is the identity.

Usage:
    hooks = Hooks()

    @hooks.filter("bento/component/Alert/prop/title")
    def shout(value):
        return value.upper()

    config = BentoConfig(hooks=hooks)
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable

from .core import call_with_accepted_args

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

Filter = Callable[..., Any]


@dataclass(order=True, slots=True)
class _Registered:
    priority: int
    sequence: int
    fn: Filter = field(compare=False)


class Hooks:
    """Registry of named filters."""

    def __init__(self) -> None:
        self._filters: dict[str, list[_Registered]] = defaultdict(list)
        self._counter = itertools.count()

    def add_filter(self, name: str, fn: Filter, priority: int = DEFAULT_PRIORITY) -> None:
        """Register ``fn`` for ``name``. Lower priorities run first."""
        entries = self._filters[name]
        entries.append(_Registered(priority, next(self._counter), fn))
        entries.sort()
        logger.debug(f"filter added: {name} priority={priority}")

    def remove_filter(self, name: str, fn: Filter) -> bool:
        entries = self._filters.get(name, [])
        kept = [e for e in entries if e.fn is not fn]
        if len(kept) == len(entries):
            return False
        self._filters[name] = kept
        return True

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def filter(self, name: str, priority: int = DEFAULT_PRIORITY) -> Callable[[Filter], Filter]:
        """Decorator form of ``add_filter``."""

        def decorator(fn: Filter) -> Filter:
            self.add_filter(name, fn, priority)
            return fn

        return decorator

    def apply_filters(self, name: str, value: Any, *context: Any) -> Any:
        """
        Run ``value`` through every filter registered for ``name``.

        Filters receive the value followed by as much of ``context`` as their
        signature accepts.
        """
        for entry in list(self._filters.get(name, ())):
            value = call_with_accepted_args(entry.fn, value, *context)
        return value

    def clear(self) -> None:
        self._filters.clear()


def resolve_hooks(hooks: Hooks | None) -> Hooks:
    """Hooks to use when a caller supplied none."""
    return hooks if hooks is not None else Hooks()
