"""Memoizing wrapper around ``resolve`` and the ``read()`` shortcut."""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Any

from ._internal.settings import DOCBLOCK_CORE_CACHE
from .introspection import ClassIntrospector, PythonIntrospector
from .model import EntityAnnotations
from .resolver import resolve


class CachedResolver:
    """Resolve each class at most once.

    Results are keyed by class identity (``key_of``, identity by default)
    and computed under a per-key lock, so concurrent readers of the same
    class wait for a single computation. Failures are not cached.
    """

    def __init__(
        self,
        introspector: ClassIntrospector,
        key_of: Callable[[Any], Hashable] = lambda class_id: class_id,
    ) -> None:
        self.introspector = introspector
        self.key_of = key_of
        self._results: dict[Hashable, EntityAnnotations] = {}
        self._locks: dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()

    def __call__(self, class_id: Any) -> EntityAnnotations:
        key = self.key_of(class_id)
        try:
            return self._results[key]
        except KeyError:
            pass

        with self._lock:
            key_lock = self._locks.setdefault(key, threading.Lock())
        with key_lock:
            if key not in self._results:
                self._results[key] = resolve(class_id, self.introspector)
            return self._results[key]

    def __contains__(self, class_id: Any) -> bool:
        return self.key_of(class_id) in self._results

    def __len__(self) -> int:
        return len(self._results)

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
            self._locks.clear()


# ---------------------------------------------------------------------------
# Python classes
# ---------------------------------------------------------------------------

_python_introspector = PythonIntrospector()
_python_cache = CachedResolver(_python_introspector, key_of=_python_introspector.locate)


def read(class_id: Any) -> EntityAnnotations:
    """Resolve the annotations of a Python class, instance or import path.

    Results are memoized per class unless ``DOCBLOCK_CORE_CACHE`` is off.
    """
    if DOCBLOCK_CORE_CACHE():
        return _python_cache(class_id)
    return resolve(class_id, _python_introspector)


def clear_cache() -> None:
    _python_cache.clear()
