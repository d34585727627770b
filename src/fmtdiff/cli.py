# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Command-line interface for fmtdiff.

Parses arguments with Typer, builds the invocation and settings, and runs
the format command. Every expected failure arrives here as a Result and is
mapped to an exit code:

- 0: nothing to format, or the formatter succeeded
- 1: bad arguments, bad revision, no default revision, git or launch failure
- 2: invalid configuration
- 3: unexpected internal error
- any other code: the formatter's own exit code, passed through
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from returns.io import IOFailure
from returns.result import Failure, Result
from returns.unsafe import unsafe_perform_io

from . import __version__, console
from .commands.format_command import FormatCommand
from .config import FmtdiffSettings, InvocationConfig
from .errors import ConfigError, FmtdiffError, UnexpectedError
from .vcs import GitBackend


app = typer.Typer(
    name="fmtdiff",
    help="Check or apply black formatting to the Python files changed since a base revision.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"], "ignore_unknown_options": True},
    pretty_exceptions_enable=False,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fmtdiff {__version__}")
        raise typer.Exit()


def _handle_command_result(result: Result[int, FmtdiffError]) -> int:
    """Map a command result to an exit code, reporting any error on stderr.

    Args:
        result: Result from command execution

    Returns:
        int: Exit code
    """
    if isinstance(result, Failure):
        error = result.failure()

        if isinstance(error, ConfigError):
            console.error(f"Configuration error: {error.message}")
            for detail in error.details:
                console.error(f"  {detail}")
            return 2
        elif isinstance(error, UnexpectedError):
            console.error(error.message)
            return 3
        else:
            console.error(error.message)
            return 1

    return result.unwrap()


def run(
    revisions: List[str],
    *,
    apply_mode: bool = False,
    all_files_mode: bool = False,
    verbosity: int = 0,
    repo_root: Optional[Path] = None,
) -> int:
    """Run fmtdiff end to end and return the process exit code."""
    invocation = InvocationConfig.from_arguments(
        revisions,
        repo_root=repo_root or Path.cwd(),
        apply_mode=apply_mode,
        all_files_mode=all_files_mode,
        verbosity=verbosity,
    )
    if isinstance(invocation, Failure):
        return _handle_command_result(invocation)
    args = invocation.unwrap()

    # git reports paths relative to the top level, so that is where we run.
    discovered = GitBackend.discover(args.repo_root)
    if isinstance(discovered, IOFailure):
        return _handle_command_result(Failure(unsafe_perform_io(discovered.failure())))
    backend = unsafe_perform_io(discovered.unwrap())
    args = args.model_copy(update={"repo_root": backend.root})

    settings = FmtdiffSettings.load(args.repo_root)
    if isinstance(settings, Failure):
        return _handle_command_result(settings)

    command = FormatCommand(backend, settings.unwrap())
    return _handle_command_result(command.execute(args))


@app.command()
def format_changed(
    revision: Annotated[Optional[List[str]], typer.Argument(
        metavar="[REVISION]",
        help="Revision to compare against (default: first of upstream/main, origin/main, main)",
        show_default=False,
    )] = None,
    apply: Annotated[bool, typer.Option("--apply", help="Rewrite files in place instead of checking and showing diffs")] = False,
    all_files: Annotated[bool, typer.Option("--all", help="Format every source file, not only changed ones")] = False,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity (repeatable)")] = 0,
    repo_root: Annotated[Optional[Path], typer.Option(
        "--repo-root",
        file_okay=False,
        exists=True,
        resolve_path=True,
        help="Any directory inside the git checkout to format (default: current directory)",
    )] = None,
    version: Annotated[Optional[bool], typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")] = None,
) -> None:
    """Check formatting of changed Python files, or fix it with --apply."""
    try:
        exit_code = run(
            revision or [],
            apply_mode=apply,
            all_files_mode=all_files,
            verbosity=verbose,
            repo_root=repo_root,
        )
    except KeyboardInterrupt:
        console.info("Operation cancelled by user")
        exit_code = 130

    if exit_code != 0:
        raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
