"""Value helpers: literal coercion, quote trimming and mapping assembly."""

from __future__ import annotations

import re
from typing import Any

# "value" or 'value', optionally followed by statement punctuation
_WRAPPING_QUOTE_RES = {
    '"': re.compile(r'^"([^"]+)"[,;\r ]*$'),
    "'": re.compile(r"^'([^']+)'[,;\r ]*$"),
}


def trim_wrapping_quotes(text: str) -> str:
    """Strip one pair of wrapping quotes, if the whole text is a single literal.

    ``'a'`` -> ``a`` and ``"a",`` -> ``a``, but ``"a" + "b"`` is left alone.
    """
    pattern = _WRAPPING_QUOTE_RES.get(text[:1])
    if pattern is None:
        return text
    m = pattern.match(text)
    return m.group(1) if m else text


def coerce_scalar(text: str) -> str | bool:
    """Only the exact tokens ``true`` and ``false`` become booleans."""
    if text == "true":
        return True
    if text == "false":
        return False
    return text


def add_value(structure: dict[str, Any], key: str, value: Any) -> None:
    """Store *value* under *key*, turning repeated keys into a list.

    An existing scalar becomes ``[old, new]``; an existing list is appended to.
    Empty keys are ignored.
    """
    if not key:
        return
    if key not in structure:
        structure[key] = value
    elif isinstance(structure[key], list):
        structure[key].append(value)
    else:
        structure[key] = [structure[key], value]


def merge_into(target: dict[str, Any], incoming: dict[str, Any]) -> None:
    """Merge *incoming* over *target* in place.

    Nested mappings are merged recursively; any other value in *incoming*
    replaces the one in *target*.
    """
    for key, value in incoming.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            target[key] = deep_merge(current, value)
        else:
            target[key] = value


def deep_merge(base: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    """Like :func:`merge_into`, but returns a new mapping and leaves *base* alone."""
    merged = dict(base)
    merge_into(merged, incoming)
    return merged


def render_value(value: Any) -> str:
    """Text spliced into a string when a variable is interpolated."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(render_value(item) for item in value)
    return str(value)
