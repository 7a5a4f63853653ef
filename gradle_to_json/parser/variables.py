"""Variable table: names available for ``$name`` interpolation."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

import structlog

from gradle_to_json.parser.values import render_value

log = structlog.get_logger("gradle_to_json.parser")

EXT_PREFIX = "ext."


def strip_ext_prefix(name: str) -> str:
    if name.startswith(EXT_PREFIX):
        return name[len(EXT_PREFIX):]
    return name


class VariableTable:
    """Mapping from variable name to the last value written under it.

    One table lives for a whole driver run and is shared by every pass over
    every file, which is how root files and the first pass over the primary
    file feed interpolation in later passes. It is not safe to share between
    concurrent runs.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        if initial:
            self.update(initial)

    def set(self, name: str, value: Any) -> None:
        """Write *name*, dropping an ``ext.`` prefix; later writes overwrite."""
        name = strip_ext_prefix(name)
        if not name:
            return
        self._values[name] = value
        log.debug("variables.set", name=name)

    def update(self, entries: Mapping[str, Any], *, ext_only: bool = False) -> None:
        """Copy every entry of *entries*, or only the ``ext.``-prefixed ones."""
        for name, value in entries.items():
            if ext_only and not name.startswith(EXT_PREFIX):
                continue
            self.set(name, value)

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def resolve(self, name: str, fallback: str) -> str:
        """Return the text for *name*, or *fallback* when it is not defined."""
        if name in self._values:
            return render_value(self._values[name])
        log.debug("variables.unresolved", name=name)
        return fallback

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
