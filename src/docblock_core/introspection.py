"""Class introspectors: where comments and class hierarchies come from.

The resolver never inspects classes itself. It asks a ``ClassIntrospector``
for a class's own comment, its parent and its properties, so any hierarchy
can be resolved: real Python classes (``PythonIntrospector``) or a hierarchy
declared as data (``MappingIntrospector``).
"""

from __future__ import annotations

import ast
import inspect
import logging
import textwrap
from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from pkgutil import resolve_name
from typing import Any, Protocol

from .errors import UnresolvableClassError
from .model import PropertyInfo

logger = logging.getLogger(__name__)


class ClassIntrospector(Protocol):
    """Supplies raw comment text and class structure to the resolver.

    ``own_comment``, ``parent_of`` and ``properties_of`` raise
    ``UnresolvableClassError`` for an unknown class. ``name_of`` only
    produces a display name.
    """

    def own_comment(self, class_id: Any) -> str: ...

    def parent_of(self, class_id: Any) -> Hashable | None: ...

    def properties_of(self, class_id: Any) -> Sequence[PropertyInfo]: ...

    def name_of(self, class_id: Any) -> str: ...


# ---------------------------------------------------------------------------
# Declared hierarchies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassSpec:
    comment: str = ""
    parent: str | None = None
    properties: tuple[PropertyInfo, ...] = ()


class MappingIntrospector:
    """Introspector over a hierarchy declared by name.

    Usage::

        classes = MappingIntrospector()
        classes.define("Base", "/** @table base */")
        classes.define("User", "/** @inherit */", parent="Base", properties={
            "id": "/**\n * @id\n * @var int\n * @column id\n */",
        })

    An inline argument runs to the end of its line, so tags that take one
    go on their own lines.
    """

    def __init__(self, classes: Mapping[str, ClassSpec] | None = None) -> None:
        self.classes: dict[str, ClassSpec] = dict(classes or {})

    def define(
        self,
        name: str,
        comment: str = "",
        parent: str | None = None,
        properties: Mapping[str, str] | Iterable[PropertyInfo] = (),
    ) -> MappingIntrospector:
        if isinstance(properties, Mapping):
            props = tuple(PropertyInfo(k, v) for k, v in properties.items())
        else:
            props = tuple(properties)
        self.classes[name] = ClassSpec(comment=comment, parent=parent, properties=props)
        return self

    def _spec(self, class_id: str) -> ClassSpec:
        try:
            return self.classes[class_id]
        except (KeyError, TypeError):
            raise UnresolvableClassError(class_id) from None

    def own_comment(self, class_id: str) -> str:
        return self._spec(class_id).comment

    def parent_of(self, class_id: str) -> str | None:
        return self._spec(class_id).parent

    def properties_of(self, class_id: str) -> Sequence[PropertyInfo]:
        return self._spec(class_id).properties

    def name_of(self, class_id: str) -> str:
        return str(class_id)


# ---------------------------------------------------------------------------
# Live Python classes
# ---------------------------------------------------------------------------

class PythonIntrospector:
    """Introspector over live Python classes.

    A class id may be a class, an instance (its class is used) or an import
    path such as ``"myapp.models:User"`` or ``"myapp.models.User"``.

    - class comment: the class's own docstring (not inherited)
    - parent: the next class in the MRO, unless it is ``object``
    - properties: ``property`` / ``cached_property`` docstrings and attribute
      docstrings (a string literal right after the assignment in the class
      body), from the class itself then its ancestors; the nearest
      declaration of a name wins
    """

    def locate(self, class_id: Any) -> type:
        if isinstance(class_id, type):
            return class_id
        if isinstance(class_id, str):
            try:
                found = resolve_name(class_id)
            except (ImportError, AttributeError, ValueError) as error:
                raise UnresolvableClassError(class_id, str(error) or "cannot import") from error
            if not isinstance(found, type):
                raise UnresolvableClassError(class_id, "not a class")
            return found
        return type(class_id)

    def own_comment(self, class_id: Any) -> str:
        return self.locate(class_id).__dict__.get("__doc__") or ""

    def parent_of(self, class_id: Any) -> type | None:
        mro = self.locate(class_id).__mro__
        if len(mro) < 2 or mro[1] is object:
            return None
        return mro[1]

    def properties_of(self, class_id: Any) -> Sequence[PropertyInfo]:
        found: dict[str, PropertyInfo] = {}
        for klass in self.locate(class_id).__mro__:
            if klass is object:
                continue
            for name, doc in _class_member_docs(klass):
                if name not in found:
                    found[name] = PropertyInfo(name, doc)
        return list(found.values())

    def name_of(self, class_id: Any) -> str:
        klass = self.locate(class_id)
        return f"{klass.__module__}.{klass.__qualname__}"


def _class_member_docs(klass: type) -> list[tuple[str, str]]:
    docs = list(_attribute_docs(klass).items())
    for name, member in vars(klass).items():
        if isinstance(member, (property, cached_property)) and member.__doc__:
            docs.append((name, member.__doc__))
    return docs


def _attribute_docs(klass: type) -> dict[str, str]:
    """Docstrings written directly below attribute assignments."""
    try:
        source = textwrap.dedent(inspect.getsource(klass))
        tree = ast.parse(source)
    except (OSError, TypeError, SyntaxError):
        logger.debug("No source available for %r", klass)
        return {}

    class_def = next((n for n in tree.body if isinstance(n, ast.ClassDef)), None)
    if class_def is None:
        return {}

    docs: dict[str, str] = {}
    body = class_def.body
    for stmt, nxt in zip(body, body[1:]):
        if not (
            isinstance(nxt, ast.Expr)
            and isinstance(nxt.value, ast.Constant)
            and isinstance(nxt.value.value, str)
        ):
            continue
        if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
            docs[stmt.target.id] = nxt.value.value
        elif isinstance(stmt, ast.Assign):
            for target in stmt.targets:
                if isinstance(target, ast.Name):
                    docs[target.id] = nxt.value.value
    return docs
