"""Tests for genspine.cli: argument handling via CliRunner.

The orchestrator is replaced by a mock so no driver is built.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from genspine.cli.app import app, parse_commands
from genspine.core.errors import CompileError, DescriptionNotFoundError
from genspine.version import VERSION

runner = CliRunner()


# ─── Version ─────────────────────────────────────────────────────────────


class TestVersion:
    """Version reporting."""

    def test_version_command(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.output == f"genspine {VERSION}\n"

    def test_version_option(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert VERSION in result.output


# ─── Command parsing ─────────────────────────────────────────────────────


class TestParseCommands:
    """Splitting generator commands from the description."""

    def test_default_all(self):
        assert parse_commands(["design.account"]) == (["client", "openapi", "server"], "design.account")

    def test_sorted_and_unique(self):
        assert parse_commands(["server", "openapi", "server", "design.account"]) == (
            ["openapi", "server"],
            "design.account",
        )


# ─── gen ─────────────────────────────────────────────────────────────────


class TestGen:
    """The 'gen' command."""

    @patch("genspine.cli.app.Orchestrator")
    def test_success_relays_output(self, mock_orchestrator):
        mock_orchestrator.return_value.generate.return_value = "gen/http/openapi.json\n"
        result = runner.invoke(app, ["gen", "openapi", "design.account", "-o", "out"])

        assert result.exit_code == 0
        assert result.output == "gen/http/openapi.json\n"
        mock_orchestrator.return_value.generate.assert_called_once_with(
            ["openapi"], "design.account", output="out", scaffold=False, debug=False
        )

    @patch("genspine.cli.app.Orchestrator")
    def test_flags(self, mock_orchestrator):
        mock_orchestrator.return_value.generate.return_value = ""
        result = runner.invoke(app, ["gen", "server", "design.account", "--scaffold", "--debug"])

        assert result.exit_code == 0
        mock_orchestrator.return_value.generate.assert_called_once_with(
            ["server"], "design.account", output=".", scaffold=True, debug=True
        )

    @patch("genspine.cli.app.Orchestrator")
    def test_no_command_runs_all(self, mock_orchestrator):
        mock_orchestrator.return_value.generate.return_value = ""
        runner.invoke(app, ["gen", "design.account"])
        args = mock_orchestrator.return_value.generate.call_args.args
        assert args == (["client", "openapi", "server"], "design.account")

    @pytest.mark.parametrize(
        "error,message",
        [
            (DescriptionNotFoundError("design.missing"), 'cannot find description module "design.missing"'),
            (CompileError("main.py:1: invalid syntax"), "failed to compile generator: main.py:1: invalid syntax"),
        ],
    )
    @patch("genspine.cli.app.Orchestrator")
    def test_error_exit(self, mock_orchestrator, error, message):
        """Errors are printed verbatim with exit status 1."""
        mock_orchestrator.return_value.generate.side_effect = error
        result = runner.invoke(app, ["gen", "server", "design.missing"])

        assert result.exit_code == 1
        assert message in result.output

    def test_unknown_command(self):
        result = runner.invoke(app, ["gen", "docs", "design.account"])
        assert result.exit_code == 1
        assert "unknown command 'docs'" in result.output

    @patch("genspine.cli.app.Orchestrator")
    def test_command_without_description(self, mock_orchestrator):
        """A lone command name is a usage error, not a description path."""
        result = runner.invoke(app, ["gen", "server"])

        assert result.exit_code == 1
        assert "missing description module path" in result.output
        assert "usage: genspine gen [COMMAND]... DESCRIPTION" in result.output
        mock_orchestrator.assert_not_called()
