"""Merge resolved declarations into nested containers."""

from .classes import into_classes, is_class_like, is_promoted_static
from .modules import into_modules
from .namespaces import into_namespaces, promote_static_members
from .types import into_callbacks, into_typedefs

__all__ = [
    "into_callbacks",
    "into_classes",
    "into_modules",
    "into_namespaces",
    "into_typedefs",
    "is_class_like",
    "is_promoted_static",
    "promote_static_members",
]
