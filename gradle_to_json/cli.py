"""CLI entry point: gradle-to-json.

Subcommands:
    gradle-to-json run app/build.gradle                  # parse one script
    gradle-to-json run app/build.gradle build.gradle     # seed variables from root scripts first
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from gradle_to_json.config import ParserSettings
from gradle_to_json.core.logging import setup_logging
from gradle_to_json.exceptions import ScriptReadError
from gradle_to_json.parser.driver import parse_file
from gradle_to_json.parser.models import RepositoryEntry


def _to_json(obj: Any) -> Any:
    if isinstance(obj, RepositoryEntry):
        return obj.to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging (to stderr)")
def main(verbose: bool) -> None:
    """gradle-to-json: convert Gradle build scripts to JSON without running them."""
    setup_logging(level="DEBUG" if verbose else None)


@main.command("run")
@click.argument("path")
@click.argument("root_paths", nargs=-1)
@click.option(
    "--eval-everywhere",
    is_flag=True,
    help="Interpolate $variables everywhere, not only inside dependencies blocks",
)
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
def run(path: str, root_paths: tuple[str, ...], eval_everywhere: bool, indent: int) -> None:
    """Parse PATH and print it as JSON.

    ROOT_PATHS are parsed first, only to collect variables (e.g. the
    project's top-level build.gradle).
    """
    settings = ParserSettings.from_env()
    if eval_everywhere:
        settings = settings.model_copy(update={"eval_dependencies_only": False})

    try:
        result = asyncio.run(parse_file(path, root_paths, settings=settings))
    except ScriptReadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=indent, default=_to_json))


if __name__ == "__main__":
    main()
