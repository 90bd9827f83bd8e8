"""Reader layer: turns a comment block into an AnnotationMap."""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Iterable

from .literals import IDENTIFIER, QUOTED, coerce_inline, coerce_token
from .model import ABool, AGroup, AList, AnnotationMap, GroupEntry, Value

logger = logging.getLogger(__name__)

_OPEN_RE = re.compile(r"\A\s*/\*+")
_CLOSE_RE = re.compile(r"\*+/\s*\Z")
_MARKER_RE = re.compile(r"^[ \t]*(?:\*+|#+)(?=[ \t@]|$)", re.MULTILINE)

_TAG_RE = re.compile(rf"(?<!\S)@({IDENTIFIER})[ \t]*")
_TAG_START_RE = re.compile(rf"@{IDENTIFIER}")
_GROUP_RE = re.compile(r"\((?:" + QUOTED + r"""|[^'")])*\)""", re.DOTALL)
_LINE_RE = re.compile(r"[^\r\n]*")

_PIECE_RE = re.compile(QUOTED + r"""|[^,'"]+|['"]|,""", re.DOTALL)
_KEY_RE = re.compile(rf"\s*({IDENTIFIER})\s*[=:]\s*")


# ---------------------------------------------------------------------------
# Comment normalisation
# ---------------------------------------------------------------------------

def normalize_comment(comment: str) -> str:
    """Strip ``/** ... */`` delimiters and leading ``*`` / ``#`` line markers.

    The result is dedented with blank lines trimmed from both ends; line
    breaks inside the block are kept.
    """
    if not comment:
        return ""
    text = _OPEN_RE.sub("", comment)
    text = _CLOSE_RE.sub("", text)
    text = _MARKER_RE.sub("", text)
    return inspect.cleandoc("\n".join(line.rstrip() for line in text.splitlines()))


# ---------------------------------------------------------------------------
# Tag extraction
# ---------------------------------------------------------------------------

def extract_tags(text: str) -> list[tuple[str, str]]:
    """Return ``(name, raw_arguments)`` for every tag in *text*, in order.

    Arguments are taken from a parenthesized group when the tag is followed
    by ``(``, else from the rest of the line, else they are empty. A group
    with no closing ``)`` outside of quotes is a syntax miss: the tag is
    skipped and scanning resumes right after its name.
    """
    tags: list[tuple[str, str]] = []
    pos = 0
    while True:
        m = _TAG_RE.search(text, pos)
        if m is None:
            return tags
        name = m.group(1)
        pos = m.end()

        if text.startswith("(", pos):
            group = _GROUP_RE.match(text, pos)
            if group is None:
                logger.debug("Skipping @%s: unterminated argument list", name)
                continue
            tags.append((name, group.group()))
            pos = group.end()
            continue

        line = _LINE_RE.match(text, pos).group()
        # "@flag @other" - the next tag is not an argument
        next_is_tag = pos > m.end(1) and _TAG_START_RE.match(line) is not None
        if line and not next_is_tag:
            tags.append((name, line))
            pos += len(line)
        else:
            tags.append((name, ""))


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def split_arguments(inner: str) -> list[str]:
    """Split the inside of ``(...)`` on commas that are not inside quotes."""
    segments: list[str] = []
    current: list[str] = []
    for piece in _PIECE_RE.findall(inner):
        if piece == ",":
            segments.append("".join(current))
            current = []
        else:
            current.append(piece)
    segments.append("".join(current))
    return segments


def parse_group(raw: str) -> AGroup:
    """Parse ``(a, key: value, other = "x")`` into an AGroup."""
    inner = raw.strip()
    if inner.startswith("("):
        inner = inner[1:]
    if inner.endswith(")"):
        inner = inner[:-1]

    entries: list[GroupEntry] = []
    for segment in split_arguments(inner):
        if not segment.strip():
            continue
        key = None
        m = _KEY_RE.match(segment)
        if m is not None:
            key = m.group(1)
            segment = segment[m.end():]
        entries.append(GroupEntry(key=key, value=coerce_token(segment)))
    return AGroup(tuple(entries))


def parse_arguments(raw: str) -> Value:
    """Parse the raw argument text of one tag.

    - empty → ``ABool(True)``
    - ``(...)`` → AGroup
    - anything else → inline value (``true``/``false`` or a string)
    """
    if not raw.strip():
        return ABool(True)
    if raw.startswith("("):
        return parse_group(raw)
    return coerce_inline(raw)


# ---------------------------------------------------------------------------
# Accumulation
# ---------------------------------------------------------------------------

def accumulate(tags: Iterable[tuple[str, Value]]) -> AnnotationMap:
    """Build an AnnotationMap; a repeated tag turns into an AList."""
    result: AnnotationMap = {}
    for name, value in tags:
        if name not in result:
            result[name] = value
            continue
        old = result[name]
        if isinstance(old, AList):
            result[name] = AList(old.items + (value,))
        else:
            result[name] = AList((old, value))
    return result


def list_annotations(comment: str) -> AnnotationMap:
    """Read every annotation of one comment block."""
    text = normalize_comment(comment)
    return accumulate(
        (name, parse_arguments(raw)) for name, raw in extract_tags(text)
    )
