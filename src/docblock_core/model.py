"""Data model for annotation values, maps and resolution results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ABool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True, slots=True)
class AString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ANumber:
    value: int | float

    def __str__(self) -> str:
        return str(self.value)


class _NullType:
    """JSON ``null`` found inside a parenthesized argument list."""

    _instance: _NullType | None = None

    def __new__(cls) -> _NullType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANull"

    def __str__(self) -> str:
        return "null"

    def __bool__(self) -> bool:
        return False


ANull = _NullType()


@dataclass(frozen=True, slots=True)
class AList:
    """Values of a tag that appeared more than once, in order of appearance."""

    items: tuple[Value, ...]

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass(frozen=True, slots=True)
class GroupEntry:
    key: str | None  # None = positional entry
    value: Value


@dataclass(frozen=True, slots=True)
class AGroup:
    """Parenthesized argument list: ordered (optional key, value) pairs."""

    entries: tuple[GroupEntry, ...] = ()

    def keys(self) -> list[str]:
        seen: dict[str, None] = {}
        for entry in self.entries:
            if entry.key is not None:
                seen[entry.key] = None
        return list(seen)

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Return the value of the last entry named *key*."""
        found = default
        for entry in self.entries:
            if entry.key == key:
                found = entry.value
        return found

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self.entries)

    @property
    def positional(self) -> list[Value]:
        return [e.value for e in self.entries if e.key is None]

    def __str__(self) -> str:
        parts = []
        for entry in self.entries:
            if entry.key is None:
                parts.append(str(entry.value))
            else:
                parts.append(f"{entry.key}: {entry.value}")
        return "(" + ", ".join(parts) + ")"


Value = Union[ABool, AString, ANumber, _NullType, AList, AGroup]

AnnotationMap = dict[str, Value]


def is_truthy(value: Value) -> bool:
    """Whether a tag value counts as switched on (e.g. ``@inherit``)."""
    if isinstance(value, AString):
        return value.value not in ("", "0")
    if isinstance(value, (ABool, ANumber)):
        return bool(value.value)
    if isinstance(value, AList):
        return bool(value.items)
    if isinstance(value, AGroup):
        return bool(value.entries)
    return False


# ---------------------------------------------------------------------------
# Introspection input
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PropertyInfo:
    name: str
    comment: str = ""


# ---------------------------------------------------------------------------
# Resolution results
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ClassAnnotations:
    class_name: str
    extends: str | None
    own: AnnotationMap = field(default_factory=dict)
    merged: AnnotationMap = field(default_factory=dict)


@dataclass(slots=True)
class EntityAnnotations:
    """Final result of resolving one class."""

    class_name: str
    extends: str | None
    class_annotations: AnnotationMap = field(default_factory=dict)
    properties: dict[str, AnnotationMap] = field(default_factory=dict)
    primary_key: str | None = None
