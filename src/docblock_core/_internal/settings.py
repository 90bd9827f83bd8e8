from collections.abc import Callable
from os import environ
from typing import TypeVar

T = TypeVar("T")


def make_setting(
    name: str,
    default: T,
    from_string: Callable[[str], T] = lambda x: x,
) -> Callable[[], T]:
    """Create a setting with a name, default value, and optional conversion function."""
    return lambda: from_string(environ[name]) if name in environ else default


def _to_bool(x: str) -> bool:
    return x.strip().lower() in ("true", "1", "yes", "on")


DOCBLOCK_CORE_CACHE = make_setting("DOCBLOCK_CORE_CACHE", True, from_string=_to_bool)
"""Whether ``read()`` memoizes results per class."""
