# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
External formatter invocation and outcome classification.

The formatter runs once over the whole file set. In check mode it only
reports (with a diff); in apply mode it rewrites files in place. Its exit
code is never reinterpreted: classification only decides whether an extra
advisory is shown.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from returns.io import IOResult, impure_safe

from .changeset import FileSet
from .config import BugSignature, FmtdiffSettings
from .errors import FormatterLaunchError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Exit code and combined stdout/stderr of one formatter run."""
    exit_code: int
    combined_output: str


class OutcomeKind(str, Enum):
    CLEAN = "clean"
    FAILED = "failed"
    TRANSIENT_BUG = "transient_bug"


@dataclass(frozen=True)
class FormatterOutcome:
    """A formatter result tagged with its classification."""
    kind: OutcomeKind
    result: FormatResult

    @property
    def exit_code(self) -> int:
        return self.result.exit_code


FormatterRunner = Callable[[list[str], Path], IOResult[FormatResult, FormatterLaunchError]]


def build_command(files: FileSet, apply_mode: bool, settings: FmtdiffSettings) -> list[str]:
    """
    Build the formatter command line.

    Color is always forced since output is captured and replayed. Check
    mode adds the check flags so nothing is written.
    """
    command = [*settings.formatter_command, settings.color_flag]
    if not apply_mode:
        command.extend(settings.check_flags)
    command.extend(files.as_arguments())
    return command


def run_formatter(command: list[str], cwd: Path) -> IOResult[FormatResult, FormatterLaunchError]:
    """
    Run the formatter and capture its exit code and combined output.

    Args:
        command: Full formatter command line
        cwd: Directory the formatter runs in (the repository root)

    Returns:
        IOResult[FormatResult, FormatterLaunchError]: The run's result, whatever
        its exit code, or an error if the process could not be started
    """
    LOG.debug("Running formatter: %s", " ".join(command))

    @impure_safe
    def _run() -> FormatResult:
        completed = subprocess.run(
            command,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return FormatResult(exit_code=completed.returncode, combined_output=completed.stdout)

    return _run().alt(
        lambda exc: FormatterLaunchError(
            message=f"Could not run formatter '{command[0]}': {exc}",
            command=tuple(command),
            original_error=str(exc),
        )
    )


def classify_result(result: FormatResult, signature: BugSignature) -> FormatterOutcome:
    """Tag a formatter result as clean, failed or the known transient bug."""
    if result.exit_code == 0:
        kind = OutcomeKind.CLEAN
    elif result.exit_code == signature.exit_code and signature.pattern in result.combined_output:
        kind = OutcomeKind.TRANSIENT_BUG
    else:
        kind = OutcomeKind.FAILED
    return FormatterOutcome(kind=kind, result=result)


def transient_bug_advisory(issue_tracker_url: str) -> str:
    """Advice shown when the formatter hits its unstable-formatting bug."""
    return (
        "The formatter produced different code on its second pass. This is a "
        "known formatter bug, not a problem with your change. Adding a trailing "
        "comma to the collection or call it complains about usually works around "
        f"it. If the failure persists, please report it at {issue_tracker_url}"
    )
