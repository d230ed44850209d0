"""
CLI utility helpers: consoles and error reporting.
"""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console

from genspine.core.errors import GenspineError

err_console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    """Print ``message`` verbatim on stderr and exit with status 1."""
    err_console.print(message, markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)


def report_error(error: GenspineError) -> NoReturn:
    """Report a genspine error and exit with status 1."""
    fail(error.message)
