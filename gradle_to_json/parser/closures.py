"""Array literals and special-cased closures (``repositories { ... }``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from gradle_to_json.parser.models import UNKNOWN_REPOSITORY, RepositoryEntry
from gradle_to_json.parser.state import Scanner
from gradle_to_json.parser.values import trim_wrapping_quotes

if TYPE_CHECKING:
    from gradle_to_json.parser.block_parser import BlockParser

ClosureParser = Callable[["BlockParser"], Any]

CLOSURE_PARSERS: dict[str, ClosureParser] = {}


def register_closure(name: str, parser: ClosureParser) -> None:
    """Route ``name { ... }`` bodies to *parser* instead of the generic block parse."""
    CLOSURE_PARSERS[name] = parser


def parse_array(scanner: Scanner) -> list[str]:
    """Parse ``[a, "b", 'c']`` from the cursor into ``["a", "b", "c"]``.

    Reads up to the first ``]``; elements are split on commas, trimmed and
    unquoted. There is no nesting and no interpolation inside arrays.
    """
    if scanner.peek() == "[":
        scanner.advance()
    chars: list[str] = []
    while not scanner.at_end():
        ch = scanner.advance()
        if ch == "]":
            break
        chars.append(ch)

    items = (trim_wrapping_quotes(item.strip()) for item in "".join(chars).split(","))
    return [item for item in items if item]


def _directive_name(key: str) -> str:
    # jcenter() -> jcenter; calls with arguments are kept verbatim
    if key.endswith("()"):
        return key[:-2]
    return key


def parse_repository_closure(parser: BlockParser) -> list[RepositoryEntry]:
    """Parse a ``repositories`` body into tagged entries, one per directive."""
    body = parser.parse_block(keep_function_calls=True, skip_empty_values=False)
    entries: list[RepositoryEntry] = []
    for key, value in body.items():
        name = _directive_name(key)
        if not value:
            entries.append(RepositoryEntry(type=UNKNOWN_REPOSITORY, data={"name": name}))
        elif isinstance(value, dict):
            entries.append(RepositoryEntry(type=name, data=value))
        else:
            entries.append(RepositoryEntry(type=name, data={"value": value}))
    return entries


register_closure("repositories", parse_repository_closure)
