# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Unit tests for the CLI module.

Tests cover:

- Argument count validation before any git access
- Version and help output
- Mapping of command results to exit codes
- Interrupt handling

Git-dependent paths are exercised in tests/integration.
"""

import logging

from returns.result import Failure, Success
from typer.testing import CliRunner

from fmtdiff import __version__, cli
from fmtdiff.errors import ConfigError, FmtdiffError, UnexpectedError, invalid_revision
from fmtdiff.logging_setup import verbosity_to_level

runner = CliRunner()


class TestArguments:
    """Test suite for command-line argument handling."""

    def test_too_many_arguments(self, monkeypatch):
        """Test two revisions exit 1 before the repository is touched.

        Given: Two positional tokens
        When: The CLI is invoked
        Then: Exit code 1 with an explanation, and git is never queried
        """
        def fail_discover(*args, **kwargs):
            raise AssertionError("git must not be queried")

        monkeypatch.setattr(cli.GitBackend, "discover", fail_discover)

        result = runner.invoke(cli.app, ["main", "develop", "--apply"])

        assert result.exit_code == 1
        assert "Expected at most one revision" in result.output

    def test_version(self):
        result = runner.invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_options(self):
        result = runner.invoke(cli.app, ["--help"])
        assert result.exit_code == 0
        assert "--apply" in result.output
        assert "--all" in result.output

    def test_flags_are_forwarded(self, monkeypatch):
        seen = {}

        def fake_run(revisions, **kwargs):
            seen.update(kwargs, revisions=revisions)
            return 0

        monkeypatch.setattr(cli, "run", fake_run)

        result = runner.invoke(cli.app, ["HEAD~1", "--apply", "--all", "-vv"])

        assert result.exit_code == 0
        assert seen["revisions"] == ["HEAD~1"]
        assert seen["apply_mode"] is True
        assert seen["all_files_mode"] is True
        assert seen["verbosity"] == 2

    def test_unknown_flag_is_taken_as_revision(self, monkeypatch):
        """Test a misspelled flag reaches revision handling instead of the parser.

        Given: The token --aply next to a real flag
        When: The CLI is invoked
        Then: --aply is forwarded as the revision and --all still applies
        """
        seen = {}

        def fake_run(revisions, **kwargs):
            seen.update(kwargs, revisions=revisions)
            return 1

        monkeypatch.setattr(cli, "run", fake_run)

        result = runner.invoke(cli.app, ["--aply", "--all"])

        assert result.exit_code == 1
        assert seen["revisions"] == ["--aply"]
        assert seen["all_files_mode"] is True

    def test_unknown_flag_with_revision_is_too_many_arguments(self, monkeypatch):
        def fail_discover(*args, **kwargs):
            raise AssertionError("git must not be queried")

        monkeypatch.setattr(cli.GitBackend, "discover", fail_discover)

        result = runner.invoke(cli.app, ["main", "--aply"])

        assert result.exit_code == 1
        assert "Expected at most one revision" in result.output

    def test_exit_code_is_propagated(self, monkeypatch):
        monkeypatch.setattr(cli, "run", lambda revisions, **kwargs: 123)
        assert runner.invoke(cli.app, []).exit_code == 123

    def test_keyboard_interrupt(self, monkeypatch):
        def interrupted(revisions, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "run", interrupted)

        result = runner.invoke(cli.app, [])

        assert result.exit_code == 130
        assert "cancelled" in result.output


class TestHandleCommandResult:
    """Test suite for result to exit code mapping."""

    def test_success_returns_value(self):
        assert cli._handle_command_result(Success(0)) == 0
        assert cli._handle_command_result(Success(1)) == 1

    def test_argument_errors_exit_one(self, capsys):
        assert cli._handle_command_result(Failure(invalid_revision("nope"))) == 1
        assert "'nope' is not a valid commit" in capsys.readouterr().err

    def test_generic_error_exits_one(self):
        assert cli._handle_command_result(Failure(FmtdiffError(message="x"))) == 1

    def test_config_error_exits_two(self, capsys):
        error = ConfigError(message="Invalid fmtdiff configuration", details=["source_suffix: bad"])
        assert cli._handle_command_result(Failure(error)) == 2
        err = capsys.readouterr().err
        assert "Configuration error" in err
        assert "source_suffix: bad" in err

    def test_unexpected_error_exits_three(self):
        assert cli._handle_command_result(Failure(UnexpectedError(message="Unexpected error: boom"))) == 3


class TestLoggingSetup:
    """Test suite for verbosity to log level mapping."""

    def test_levels(self):
        assert verbosity_to_level(0) == logging.WARNING
        assert verbosity_to_level(1) == logging.INFO
        assert verbosity_to_level(2) == logging.DEBUG
        assert verbosity_to_level(5) == logging.DEBUG
