"""Data models for the build-script parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_REPOSITORY = "unknown"


@dataclass
class RepositoryEntry:
    """One directive from a ``repositories { ... }`` closure.

    ``maven { url "..." }`` becomes ``type="maven"`` with the body as
    ``data``; a body-less directive such as ``jcenter()`` becomes
    ``type="unknown"`` with ``data={"name": "jcenter"}``.
    """

    type: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "data": self.data}
