"""Conversion of annotation values to plain Python data."""

from __future__ import annotations

from typing import Any

from .model import ABool, AGroup, AList, ANumber, AString, AnnotationMap, EntityAnnotations, Value


def to_python(value: Value) -> Any:
    """Convert a Value to plain data.

    - ABool / AString / ANumber → bool / str / int or float
    - ANull → None
    - AList → list
    - AGroup → list if every entry is positional, else dict; positional
      entries of a mixed group are keyed by their position (0, 1, ...)
    """
    if isinstance(value, (ABool, AString, ANumber)):
        return value.value
    if isinstance(value, AList):
        return [to_python(v) for v in value.items]
    if isinstance(value, AGroup):
        if all(e.key is None for e in value.entries):
            return [to_python(e.value) for e in value.entries]
        result: dict[str | int, Any] = {}
        index = 0
        for entry in value.entries:
            if entry.key is None:
                result[index] = to_python(entry.value)
                index += 1
            else:
                result[entry.key] = to_python(entry.value)
        return result
    return None


def map_to_python(annotations: AnnotationMap) -> dict[str, Any]:
    return {name: to_python(value) for name, value in annotations.items()}


def entity_to_python(entity: EntityAnnotations) -> dict[str, Any]:
    """Plain ``{"class": ..., "property": ..., "id": ...}`` view of a result."""
    return {
        "class": {
            **map_to_python(entity.class_annotations),
            "class_name": entity.class_name,
            "extends": entity.extends,
        },
        "property": {
            name: map_to_python(annotations)
            for name, annotations in entity.properties.items()
        },
        "id": entity.primary_key,
    }
