"""
Root Typer application for the genspine CLI.

    genspine gen [server] [client] [openapi] DESCRIPTION [-o DIR] [-s] [--debug]
    genspine version
    genspine --version
"""

from __future__ import annotations

import typer
from typer import Typer

from genspine.cli.utils import fail, report_error
from genspine.core.errors import GenspineError
from genspine.core.logging import configure_logging
from genspine.core.settings import get_settings
from genspine.generators import COMMANDS
from genspine.orchestrator import Orchestrator
from genspine.version import VERSION

USAGE = "usage: genspine gen [COMMAND]... DESCRIPTION [-o DIR] [-s] [--debug]"

app = Typer(
    name="genspine",
    help="genspine: generate service code from Python service descriptions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"genspine {VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """genspine CLI: run code generators against a service description."""


# ── Commands ─────────────────────────────────────────────────────────────


def parse_commands(args: list[str]) -> tuple[list[str], str]:
    """Split ``[COMMAND]... DESCRIPTION`` into sorted unique commands and the description.

    No command selects every generator. A lone command name is taken as a
    missing description rather than a module called ``server``.
    """
    if not args or (len(args) == 1 and args[0] in COMMANDS):
        fail(f"missing description module path\n{USAGE}")
    *commands, description = args
    unknown = [c for c in commands if c not in COMMANDS]
    if unknown:
        fail(f"unknown command {unknown[0]!r}, expected one of: {', '.join(sorted(COMMANDS))}")
    return sorted(set(commands or COMMANDS)), description


@app.command("gen")
def gen(
    args: list[str] = typer.Argument(
        ...,
        metavar="[COMMAND]... DESCRIPTION",
        help=f"Generators to run ({', '.join(sorted(COMMANDS))}; all when omitted) "
        "followed by the dotted path of the description module.",
    ),
    output: str = typer.Option(".", "--output", "-o", help="Output directory."),
    scaffold: bool = typer.Option(
        False, "--scaffold", "-s", help="Also write editable service stubs, never overwritten."
    ),
    debug: bool = typer.Option(False, "--debug", help="Keep the generator workspace."),
) -> None:
    """Generate code from a description module."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    commands, description = parse_commands(args)
    try:
        out = Orchestrator(settings=settings).generate(
            commands, description, output=output, scaffold=scaffold, debug=debug
        )
    except GenspineError as e:
        report_error(e)
    typer.echo(out, nl=False)


@app.command("version")
def version() -> None:
    """Print the genspine version."""
    typer.echo(f"genspine {VERSION}")
