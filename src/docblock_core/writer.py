"""Render an AnnotationMap back into a comment block."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping

from .errors import AnnotationRenderError
from .literals import IDENTIFIER
from .model import ABool, AGroup, AList, ANumber, AString, Value, _NullType

_NAME_RE = re.compile(rf"{IDENTIFIER}\Z")
_TAG_START_RE = re.compile(rf"@{IDENTIFIER}")


def render_inline(value: Value) -> str:
    """Argument text for a tag carrying a single value; ``""`` for a bare tag."""
    if isinstance(value, ABool):
        return "" if value.value else "false"
    if isinstance(value, ANumber):
        return json.dumps(value.value)
    if isinstance(value, AString):
        return _render_inline_string(value.value)
    if isinstance(value, AGroup):
        return render_group(value)
    raise AnnotationRenderError(f"{value!r} has no inline form")


def _render_inline_string(text: str) -> str:
    if "\n" in text or "\r" in text or "*/" in text:
        raise AnnotationRenderError(f"{text!r} has no inline form")
    needs_quotes = (
        text in ("", "true", "false")
        or text != text.strip()
        or text.startswith(("(", '"'))
        or _TAG_START_RE.match(text) is not None
    )
    return f'"{text}"' if needs_quotes else text


def render_group(group: AGroup) -> str:
    parts = []
    for entry in group.entries:
        token = _render_token(entry.value)
        if entry.key is None:
            parts.append(token)
        elif _NAME_RE.match(entry.key):
            parts.append(f"{entry.key}: {token}")
        else:
            raise AnnotationRenderError(f"{entry.key!r} is not a valid key")
    return "(" + ", ".join(parts) + ")"


def _render_token(value: Value) -> str:
    if isinstance(value, ABool):
        return "true" if value.value else "false"
    if isinstance(value, ANumber):
        return json.dumps(value.value)
    if isinstance(value, _NullType):
        return "null"
    if isinstance(value, AString):
        return json.dumps(value.value, ensure_ascii=False).replace("*/", "*\\/")
    raise AnnotationRenderError(f"{value!r} cannot be nested in an argument list")


def render_tags(annotations: Mapping[str, Value]) -> list[str]:
    """One ``@name args`` line per occurrence; lists become repeated tags."""
    lines = []
    for name, value in annotations.items():
        if not _NAME_RE.match(name):
            raise AnnotationRenderError(f"{name!r} is not a valid tag name")
        values = value.items if isinstance(value, AList) else (value,)
        for item in values:
            args = render_inline(item)
            if not args:
                lines.append(f"@{name}")
            elif args.startswith("("):
                lines.append(f"@{name}{args}")
            else:
                lines.append(f"@{name} {args}")
    return lines


def render_comment(annotations: Mapping[str, Value]) -> str:
    """Render *annotations* as a ``/** ... */`` block that reads back the same."""
    lines = ["/**"]
    lines.extend(f" * {line}" for line in render_tags(annotations))
    lines.append(" */")
    return "\n".join(lines)
