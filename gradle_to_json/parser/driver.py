"""Parse entry points: a single in-memory pass, a chunked stream, and the multi-pass file driver."""

from __future__ import annotations

import asyncio
import codecs
from collections.abc import AsyncIterable, Iterable
from pathlib import Path
from typing import Any

import structlog

from gradle_to_json.config import ParserSettings
from gradle_to_json.exceptions import ScriptReadError
from gradle_to_json.parser.block_parser import BlockParser
from gradle_to_json.parser.state import ScanState
from gradle_to_json.parser.variables import VariableTable

log = structlog.get_logger("gradle_to_json.parser")

StrPath = str | Path


def parse_text(
    text: str,
    variables: VariableTable | None = None,
    settings: ParserSettings | None = None,
) -> dict[str, Any]:
    """Run one parse pass over *text* and return the top-level mapping.

    A fresh :class:`VariableTable` is used unless one is passed in; passing
    the same table to several calls lets earlier passes feed later ones.
    """
    settings = settings or ParserSettings()
    if variables is None:
        variables = VariableTable()
    state = ScanState.for_text(text, restrict_to_dependencies=settings.eval_dependencies_only)
    return BlockParser(state, variables).parse()


async def read_script(path: StrPath) -> str:
    """Read a build script as UTF-8 off the event loop.

    Raises :class:`ScriptReadError` for any I/O or decoding failure.
    """
    try:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptReadError(str(path), e) from e


async def parse_stream(
    chunks: AsyncIterable[str | bytes],
    variables: VariableTable | None = None,
    settings: ParserSettings | None = None,
    *,
    name: str = "<stream>",
) -> dict[str, Any]:
    """Buffer every chunk of *chunks* into one text and parse it once.

    ``bytes`` chunks are decoded as UTF-8 incrementally, so a multi-byte
    character split across chunks is handled.
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    parts: list[str] = []
    try:
        async for chunk in chunks:
            parts.append(decoder.decode(chunk) if isinstance(chunk, bytes) else chunk)
        parts.append(decoder.decode(b"", final=True))
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptReadError(name, e) from e
    return parse_text("".join(parts), variables, settings)


async def _parse_pass(
    path: StrPath,
    variables: VariableTable,
    settings: ParserSettings,
    label: str,
) -> dict[str, Any]:
    text = await read_script(path)
    result = parse_text(text, variables, settings)
    log.debug(
        "driver.pass_complete",
        path=str(path),
        pass_label=label,
        keys=len(result),
        variables=len(variables),
    )
    return result


async def parse_file(
    path: StrPath,
    root_paths: Iterable[StrPath] | None = None,
    *,
    variables: VariableTable | None = None,
    settings: ParserSettings | None = None,
) -> dict[str, Any]:
    """Parse *path* after seeding the variable table from *root_paths*.

    Every root file is parsed once and its result discarded. *path* is then
    parsed twice: the first pass fills the table with names declared
    anywhere in the file, the second pass is returned. Interpolation is
    resolved eagerly, so a name declared later in the *same* pass is still
    unresolved there; only the next pass sees it.

    Passes run strictly one after another, since they all write the same
    table. A read failure aborts the run with :class:`ScriptReadError`.
    """
    settings = settings or ParserSettings()
    if variables is None:
        variables = VariableTable()

    for root in root_paths or ():
        await _parse_pass(root, variables, settings, "root")

    await _parse_pass(path, variables, settings, "first")
    return await _parse_pass(path, variables, settings, "final")
