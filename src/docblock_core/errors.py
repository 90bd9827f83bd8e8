"""Exceptions raised by docblock_core."""

from __future__ import annotations


class DocblockCoreError(Exception):
    """Base class for all docblock_core errors."""


class UnresolvableClassError(DocblockCoreError, LookupError):
    """Raised when a class (or one of its ancestors) cannot be located."""

    def __init__(self, class_id: object, reason: str = "class not found") -> None:
        super().__init__(f"{reason}: {class_id!r}")
        self.class_id = class_id
        self.reason = reason


class AnnotationRenderError(DocblockCoreError, ValueError):
    """Raised when a value has no textual annotation form."""
