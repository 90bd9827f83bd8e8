"""docblock_core — reads entity-mapping annotations from comment blocks."""

from .cache import CachedResolver, clear_cache, read
from .convert import entity_to_python, map_to_python, to_python
from .errors import AnnotationRenderError, DocblockCoreError, UnresolvableClassError
from .introspection import (
    ClassIntrospector,
    ClassSpec,
    MappingIntrospector,
    PythonIntrospector,
)
from .model import (
    ABool,
    AGroup,
    AList,
    ANull,
    ANumber,
    AnnotationMap,
    AString,
    ClassAnnotations,
    EntityAnnotations,
    GroupEntry,
    PropertyInfo,
    Value,
)
from .reader import list_annotations
from .resolver import resolve, resolve_class
from .writer import render_comment

__all__ = [
    "resolve",
    "resolve_class",
    "read",
    "clear_cache",
    "list_annotations",
    "render_comment",
    "to_python",
    "map_to_python",
    "entity_to_python",
    "CachedResolver",
    "ClassIntrospector",
    "ClassSpec",
    "MappingIntrospector",
    "PythonIntrospector",
    "ABool",
    "AGroup",
    "AList",
    "ANull",
    "ANumber",
    "AString",
    "AnnotationMap",
    "GroupEntry",
    "Value",
    "PropertyInfo",
    "ClassAnnotations",
    "EntityAnnotations",
    "DocblockCoreError",
    "UnresolvableClassError",
    "AnnotationRenderError",
]
