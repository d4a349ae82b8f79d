"""JSON object extraction from raw model text.

Models wrap their JSON in Markdown fences, put prose before or after it,
or stop generating halfway through. ``extract_json`` finds the first
complete top-level object in such text, in this order:

1. Strip a code fence at the very start/end of the trimmed text.
2. Parse the remaining text directly.
3. Scan for balanced braces, ignoring braces inside JSON strings, and try
   every top-level object the scan closes. Quoted strings in the prose are
   tracked first; if that finds nothing, the scan is repeated tracking
   strings only inside objects, which tolerates an unmatched quote.
4. If the text ends inside an object, close it and try that.

Whatever is returned parses to a ``dict`` with the same parser
(``orjson``) used by ``parse_json_object``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import orjson

from pantry_chef.parsing.exceptions import (
    EmptyResponseError,
    NoJsonFoundError,
    RecipeParseError,
)


_LEADING_FENCE = re.compile(r"\A```(?:json)?[^\S\n]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[^\S\n]*```\Z")

_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(raw: str) -> str:
    """Trim ``raw`` and drop a fence marker at its very start and end."""
    text = raw.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _load_object(text: str) -> dict[str, Any] | None:
    """Parse ``text``; return it only if it is a JSON object."""
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


@dataclass
class _OpenObject:
    """State of a top-level object the text ended inside of."""

    start: int
    stack: list[str] = field(default_factory=list)
    in_string: bool = False
    escaped: bool = False

    def close(self, text: str) -> str:
        """Complete the truncated object with the closers it still needs."""
        fragment = text[self.start :]
        if self.in_string:
            if self.escaped:
                fragment = fragment[:-1]
            fragment += '"'
        fragment = fragment.rstrip()
        if fragment.endswith(","):
            fragment = fragment[:-1]
        elif fragment.endswith(":"):
            fragment += "null"
        return fragment + "".join(_CLOSERS[opener] for opener in reversed(self.stack))


def _scan(
    text: str, *, strings_in_prose: bool
) -> tuple[str | None, _OpenObject | None]:
    """Walk ``text`` and return the first top-level object that parses.

    With ``strings_in_prose`` quoted strings are tracked across the whole
    text, so a brace quoted in the prose does not open a candidate. Without
    it string state is only tracked inside an object, so an unmatched quote
    in the prose does not hide the object after it. Returns
    ``(match, None)`` on success, otherwise ``(None, open_object)`` where
    ``open_object`` is the object the text ended inside of, if any.
    """
    current: _OpenObject | None = None
    in_prose_string = False
    prose_escaped = False

    for index, char in enumerate(text):
        if current is None:
            if in_prose_string:
                if prose_escaped:
                    prose_escaped = False
                elif char == "\\":
                    prose_escaped = True
                elif char == '"':
                    in_prose_string = False
            elif char == "{":
                current = _OpenObject(start=index, stack=["{"])
            elif char == '"' and strings_in_prose:
                in_prose_string = True
            continue

        if current.in_string:
            if current.escaped:
                current.escaped = False
            elif char == "\\":
                current.escaped = True
            elif char == '"':
                current.in_string = False
            continue

        if char == '"':
            current.in_string = True
        elif char in _CLOSERS:
            current.stack.append(char)
        elif char in ("}", "]") and _CLOSERS[current.stack[-1]] == char:
            current.stack.pop()
            if not current.stack:
                candidate = text[current.start : index + 1]
                if _load_object(candidate) is not None:
                    return candidate, None
                current = None

    return None, current


def extract_json(raw: str | None) -> str:
    """Extract the first well-formed JSON object from raw model text.

    Args:
        raw: Text returned by the model. May be fenced, wrapped in prose or
            cut off before the closing brace.

    Returns:
        A substring of ``raw`` (or, for truncated output, a completed copy
        of its tail) that parses to a JSON object.

    Raises:
        EmptyResponseError: If ``raw`` is empty or only whitespace/fences.
        NoJsonFoundError: If no candidate parses. ``exc.raw`` holds ``raw``.
    """
    text = strip_code_fences(raw or "")
    if not text:
        raise EmptyResponseError(raw)

    if _load_object(text) is not None:
        return text

    open_objects: list[_OpenObject] = []
    for strings_in_prose in (True, False):
        match, open_object = _scan(text, strings_in_prose=strings_in_prose)
        if match is not None:
            return match
        if open_object is not None:
            open_objects.append(open_object)

    for open_object in open_objects:
        repaired = open_object.close(text)
        if _load_object(repaired) is not None:
            return repaired

    raise NoJsonFoundError(raw)


def parse_json_object(raw: str | None) -> dict[str, Any]:
    """Extract and decode the JSON object in ``raw``.

    Raises:
        EmptyResponseError: If ``raw`` is empty.
        NoJsonFoundError: If no object can be extracted.
        RecipeParseError: If the extracted text does not decode to an object.
    """
    extracted = extract_json(raw)
    parsed = _load_object(extracted)
    if parsed is None:
        msg = "Extracted text is not a JSON object"
        raise RecipeParseError(msg, raw)
    return parsed
