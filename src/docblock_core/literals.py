"""Literal handling: quoted strings and token -> Value coercion."""

from __future__ import annotations

import json
import re

from .model import ABool, ANull, ANumber, AString, Value

IDENTIFIER = r"[^\W\d][\w\\-]*"
"""Tag and key names; ``\\`` and ``-`` allow namespaced names."""

QUOTED = r"'(?:\\.|[^'\\])*'" + "|" + r'"(?:\\.|[^"\\])*"'
"""A single- or double-quoted literal with backslash escapes."""

_QUOTED_RE = re.compile(rf"(?:{QUOTED})\Z", re.DOTALL)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _reject_constant(name: str) -> None:
    raise ValueError(f"not a JSON literal: {name}")


def is_quoted(token: str) -> bool:
    return _QUOTED_RE.match(token) is not None


def unquote(token: str) -> str:
    """Remove the surrounding quotes of *token* and decode its escapes.

    Double-quoted literals are decoded as JSON strings when possible, so
    ``\\n`` and ``\\u00e9`` work as expected; anything else just drops the
    backslash in front of the escaped character.
    """
    if token.startswith('"'):
        try:
            return json.loads(token)
        except ValueError:
            pass
    return _ESCAPE_RE.sub(r"\1", token[1:-1])


def parse_json_literal(token: str) -> Value | None:
    """Return the value of *token* if it is a JSON number, boolean or null."""
    try:
        parsed = json.loads(token, parse_constant=_reject_constant)
    except ValueError:
        return None
    if parsed is None:
        return ANull
    if isinstance(parsed, bool):
        return ABool(parsed)
    if isinstance(parsed, (int, float)):
        return ANumber(parsed)
    return None


def coerce_token(token: str) -> Value:
    """Convert one argument token to a Value.

    - Quoted literal → AString (quotes removed, escapes decoded)
    - JSON number / ``true`` / ``false`` / ``null`` → ANumber / ABool / ANull
    - Everything else → AString of the trimmed text
    """
    token = token.strip()
    if is_quoted(token):
        return AString(unquote(token))
    literal = parse_json_literal(token)
    if literal is not None:
        return literal
    return AString(token)


def coerce_inline(text: str) -> Value:
    """Convert the rest-of-line argument of a tag to a Value."""
    text = text.strip()
    if text == "true":
        return ABool(True)
    if text == "false":
        return ABool(False)
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    return AString(text)
