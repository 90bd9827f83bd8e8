"""Resolution of class and property annotations into EntityAnnotations."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any

from ._internal._logging import PrefixLogger
from .errors import UnresolvableClassError
from .introspection import ClassIntrospector
from .model import (
    AGroup,
    AnnotationMap,
    ClassAnnotations,
    EntityAnnotations,
    GroupEntry,
    Value,
    is_truthy,
)
from .reader import list_annotations
from .validator import collect_properties

logger = logging.getLogger(__name__)

INHERIT_TAG = "inherit"


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def resolve(class_id: Any, introspector: ClassIntrospector) -> EntityAnnotations:
    """Resolve the class and property annotations of *class_id*.

    Raises ``UnresolvableClassError`` if the class, or an ancestor it
    inherits annotations from, cannot be located.
    """
    class_annotations = resolve_class(class_id, introspector)
    properties, primary_key = collect_properties(introspector.properties_of(class_id))
    return EntityAnnotations(
        class_name=class_annotations.class_name,
        extends=class_annotations.extends,
        class_annotations=class_annotations.merged,
        properties=properties,
        primary_key=primary_key,
    )


def resolve_class(class_id: Any, introspector: ClassIntrospector) -> ClassAnnotations:
    """Read the class's own annotations and merge in its ancestors' if it has ``@inherit``."""
    return _resolve_class(class_id, introspector, ())


def _resolve_class(
    class_id: Any,
    introspector: ClassIntrospector,
    chain: tuple[Hashable, ...],
) -> ClassAnnotations:
    if class_id in chain:
        raise UnresolvableClassError(class_id, "inheritance cycle")

    class_name = introspector.name_of(class_id)
    log = PrefixLogger(logger, class_name)
    own = list_annotations(introspector.own_comment(class_id))
    parent = introspector.parent_of(class_id)
    result = ClassAnnotations(
        class_name=class_name,
        extends=introspector.name_of(parent) if parent is not None else None,
        own=own,
        merged=dict(own),
    )

    inherit = own.get(INHERIT_TAG)
    if inherit is None or not is_truthy(inherit):
        return result
    if parent is None:
        log.debug("@%s requested but there is no parent class", INHERIT_TAG)
        return result

    log.debug("Inheriting annotations from %s", result.extends)
    parent_result = _resolve_class(parent, introspector, (*chain, class_id))
    result.merged = merge_maps(parent_result.merged, own)
    return result


# ---------------------------------------------------------------------------
# Deep merge
# ---------------------------------------------------------------------------

def merge_maps(parent: AnnotationMap, child: AnnotationMap) -> AnnotationMap:
    """Merge *child* over *parent*.

    Groups present on both sides are merged recursively; any other value of
    the child replaces the parent's.
    """
    merged: AnnotationMap = dict(parent)
    for key, value in child.items():
        merged[key] = merge_values(parent[key], value) if key in parent else value
    return merged


def merge_values(parent: Value, child: Value) -> Value:
    if isinstance(parent, AGroup) and isinstance(child, AGroup):
        return merge_groups(parent, child)
    return child


def merge_groups(parent: AGroup, child: AGroup) -> AGroup:
    """Merge two groups key by key.

    Positional entries are matched by their position among the positional
    entries of each group.
    """
    slots: dict[str | int, Value] = {}
    for slot, value in _slots(parent):
        slots[slot] = value
    for slot, value in _slots(child):
        slots[slot] = merge_values(slots[slot], value) if slot in slots else value
    return AGroup(
        tuple(
            GroupEntry(key=None if isinstance(slot, int) else slot, value=value)
            for slot, value in slots.items()
        )
    )


def _slots(group: AGroup) -> list[tuple[str | int, Value]]:
    index = 0
    slots: list[tuple[str | int, Value]] = []
    for entry in group.entries:
        if entry.key is None:
            slots.append((index, entry.value))
            index += 1
        else:
            slots.append((entry.key, entry.value))
    return slots
