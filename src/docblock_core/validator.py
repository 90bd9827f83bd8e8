"""Acceptance rules for property-level annotations."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .model import AGroup, ANull, AnnotationMap, AString, PropertyInfo
from .reader import list_annotations

logger = logging.getLogger(__name__)

VAR_TYPES = frozenset(["array", "bool", "int", "integer", "string", "float", "null"])
"""Values accepted for a property's ``@var`` tag."""


def has_valid_var(annotations: AnnotationMap) -> bool:
    var = annotations.get("var")
    return isinstance(var, AString) and var.value in VAR_TYPES


def has_storage(annotations: AnnotationMap) -> bool:
    """A property is stored if it names a column or a joined entity."""
    if "column" in annotations:
        return True
    join = annotations.get("join")
    if isinstance(join, AGroup):
        entity = join.get("entity")
        return entity is not None and entity is not ANull
    return False


def is_valid_annotation(annotations: AnnotationMap) -> bool:
    return has_valid_var(annotations) and has_storage(annotations)


def collect_properties(
    properties: Iterable[PropertyInfo],
) -> tuple[dict[str, AnnotationMap], str | None]:
    """Read and filter property annotations.

    Returns the accepted ``{name: annotations}`` and the primary key: the
    name of the last accepted property carrying ``@id``. Properties that
    fail validation are left out without raising.
    """
    accepted: dict[str, AnnotationMap] = {}
    primary_key: str | None = None
    for prop in properties:
        annotations = list_annotations(prop.comment)
        if not is_valid_annotation(annotations):
            if annotations:
                logger.debug("Ignoring property %r: no valid @var/@column/@join", prop.name)
            continue
        accepted[prop.name] = annotations
        if "id" in annotations:
            if primary_key is not None and primary_key != prop.name:
                logger.warning(
                    "Property %r overrides %r as primary key", prop.name, primary_key
                )
            primary_key = prop.name
    return accepted, primary_key
