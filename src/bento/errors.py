"""Exceptions raised while defining, resolving and rendering components."""

from __future__ import annotations


class BentoError(Exception):
    pass


class PropError(BentoError, ValueError):
    """Base for prop definition failures. Aborts component construction."""

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key


class MissingRequiredProp(PropError):
    def __init__(self, key: str):
        super().__init__(key, f"Required prop '{key}' is missing and no default is set.")


class TypeMismatch(PropError):
    def __init__(self, key: str, allowed: frozenset[str], actual: str):
        allowed_str = "|".join(sorted(allowed))
        super().__init__(key, f"Prop '{key}' must be of type {allowed_str}, got {actual}")
        self.allowed = allowed
        self.actual = actual


class ValidationFailed(PropError):
    def __init__(self, key: str):
        super().__init__(key, f"Validation failed for prop '{key}'")


class PropsReadOnlyError(BentoError, TypeError):
    def __init__(self, key: str | None = None):
        suffix = f" (tried to write '{key}')" if key else ""
        super().__init__(f"Props are read-only{suffix}.")


class SlotTypeMismatch(BentoError, TypeError):
    def __init__(self, name: str, allowed: frozenset[str], actual: str):
        allowed_str = "|".join(sorted(allowed))
        super().__init__(f"Slot '{name}' must be of type {allowed_str}, got {actual}")
        self.name = name
        self.allowed = allowed
        self.actual = actual


class ComponentNotFound(BentoError, LookupError):
    def __init__(self, name: str, namespace: str | None = None):
        where = f" in namespace '{namespace}'" if namespace else ""
        super().__init__(f"Component '{name}' not found{where}.")
        self.name = name


class MalformedPart(BentoError):
    """
    A part definition resolved to a shape that cannot be rendered.

    Never escapes the resolvers: the offending node renders empty and a
    warning is logged.
    """

    def __init__(self, resolver: str, part: str, detail: str):
        super().__init__(f"{resolver}: Part '{part}' {detail}")
        self.resolver = resolver
        self.part = part
