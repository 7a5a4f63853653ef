"""gradle-to-json: convert Gradle build scripts into nested mappings without running them."""

from gradle_to_json.config import ParserSettings
from gradle_to_json.exceptions import GradleToJsonError, ScriptReadError
from gradle_to_json.parser import (
    RepositoryEntry,
    VariableTable,
    parse_file,
    parse_stream,
    parse_text,
)

__version__ = "0.1.0"

__all__ = [
    "GradleToJsonError",
    "ParserSettings",
    "RepositoryEntry",
    "ScriptReadError",
    "VariableTable",
    "parse_file",
    "parse_stream",
    "parse_text",
]
