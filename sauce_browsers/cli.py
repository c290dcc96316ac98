"""
sauce-browsers command-line interface.

Usage::

    sauce-browsers resolve --name ie --version 7..9
    sauce-browsers resolve -n chrome -p "Windows 10" -p "Mac 10.12" -v latest --json
    sauce-browsers query browsers.json
    sauce-browsers list
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

import click

from . import __version__
from .catalog import Platform
from .client import sauce_browsers
from .errors import InvalidQueryError, SauceBrowsersError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run(wanted: Optional[list[Any]]) -> list[Platform]:
    try:
        return sauce_browsers(wanted)
    except (SauceBrowsersError, InvalidQueryError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _echo_platforms(platforms: list[Platform], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([p.to_dict() for p in platforms], indent=2))
        return
    for p in platforms:
        click.echo(f"{p.os}\t{p.api_name}\t{p.short_version}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="sauce-browsers")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Resolve browser shorthands into Sauce Labs platforms."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# sauce-browsers resolve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--name", "-n", required=True, help="Browser name or alias (ie, chrome, ...).")
@click.option("--platform", "-p", "platforms", multiple=True, help="OS to restrict to. Repeatable.")
@click.option(
    "--version",
    "-v",
    "versions",
    multiple=True,
    help="Version, 'latest', 'oldest' or a range like '7..9' or '-2..latest'. Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, help="Print full platform records as JSON.")
def resolve(name: str, platforms: tuple[str, ...], versions: tuple[str, ...], as_json: bool) -> None:
    """Resolve a single browser query.

    Example:

        sauce-browsers resolve --name ie --version 7..9
    """
    query: dict[str, Any] = {"name": name}
    if platforms:
        query["platform"] = list(platforms)
    if versions:
        query["version"] = list(versions)

    _echo_platforms(_run([query]), as_json)


# ---------------------------------------------------------------------------
# sauce-browsers query
# ---------------------------------------------------------------------------


@main.command()
@click.argument("query_file", type=click.File("r"))
@click.option("--json", "as_json", is_flag=True, help="Print full platform records as JSON.")
def query(query_file: Any, as_json: bool) -> None:
    """Resolve a JSON list of zuul-style queries read from QUERY_FILE (or -)."""
    try:
        wanted = json.load(query_file)
    except json.JSONDecodeError as exc:
        click.echo(f"Error: invalid JSON in {query_file.name}: {exc}", err=True)
        sys.exit(1)
    if not isinstance(wanted, list):
        click.echo("Error: expected a JSON list of queries", err=True)
        sys.exit(1)

    _echo_platforms(_run(wanted), as_json)


# ---------------------------------------------------------------------------
# sauce-browsers list
# ---------------------------------------------------------------------------


@main.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Print full platform records as JSON.")
def list_platforms(as_json: bool) -> None:
    """Print every platform currently published by Sauce Labs."""
    _echo_platforms(_run(None), as_json)


if __name__ == "__main__":
    main()
