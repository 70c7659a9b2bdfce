"""
bento - server-side UI components with typed props, named slots and
per-part attribute and class resolution.
"""

from .attributes import AttributeStore, attributes, build_attributes, process_attributes
from .classnames import ClassnameStore, block_class, build_classes, classnames, process_class_part
from .component import Component
from .compositor import compose_attributes, merge_attributes_and_classes
from .config import BentoConfig
from .core import SafeHTML, attr, escape_attr, raw, render_html
from .errors import (
    BentoError,
    ComponentNotFound,
    MalformedPart,
    MissingRequiredProp,
    PropError,
    PropsReadOnlyError,
    SlotTypeMismatch,
    TypeMismatch,
    ValidationFailed,
)
from .hooks import Hooks
from .props import GLOBAL_PROPS, PropDefinition, PropStore
from .registry import Bento
from .rendering import RenderContext, render_component_error
from .slots import SlotStore

__all__ = [
    # core
    "SafeHTML",
    "attr",
    "escape_attr",
    "raw",
    "render_html",
    # components
    "Bento",
    "BentoConfig",
    "Component",
    "Hooks",
    "RenderContext",
    "render_component_error",
    # stores
    "GLOBAL_PROPS",
    "PropDefinition",
    "PropStore",
    "SlotStore",
    "AttributeStore",
    "ClassnameStore",
    # resolvers
    "attributes",
    "build_attributes",
    "process_attributes",
    "classnames",
    "build_classes",
    "process_class_part",
    "block_class",
    "compose_attributes",
    "merge_attributes_and_classes",
    # errors
    "BentoError",
    "ComponentNotFound",
    "MalformedPart",
    "MissingRequiredProp",
    "PropError",
    "PropsReadOnlyError",
    "SlotTypeMismatch",
    "TypeMismatch",
    "ValidationFailed",
]
