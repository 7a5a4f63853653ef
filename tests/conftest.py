"""Shared pytest fixtures for gradle-to-json tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from gradle_to_json.parser.variables import VariableTable


@pytest.fixture
def variables() -> VariableTable:
    return VariableTable()


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a build script under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
