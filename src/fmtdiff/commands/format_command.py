# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Format command implementation using the base command architecture.

Resolves the revision to compare against (unless every file is wanted),
collects the files to format and hands them to the formatter in a single
run whose exit code becomes the command's exit code.
"""

import logging

import typer
from returns.io import IOFailure, IOResult, IOSuccess
from returns.result import Result
from returns.unsafe import unsafe_perform_io

from .. import console
from ..changeset import FileSet, collect_all, collect_changed
from ..config import FmtdiffSettings, InvocationConfig
from ..core.base_command import CommandProcessor
from ..errors import FmtdiffError
from ..formatter import (
    FormatterOutcome,
    FormatterRunner,
    OutcomeKind,
    build_command,
    classify_result,
    run_formatter,
    transient_bug_advisory,
)
from ..revision import ResolvedRevision, resolve_revision, validate_revision
from ..vcs import RevisionBackend

LOG = logging.getLogger(__name__)


class FormatCommand(CommandProcessor[FormatterOutcome]):
    """
    Check or apply formatting to changed (or all) source files.

    Flow:
    1. Validate an explicitly named revision
    2. Resolve the comparison point (skipped with --all)
    3. Collect files, dropping generated ones
    4. Run the formatter once over all of them
    """

    def __init__(
        self,
        backend: RevisionBackend,
        settings: FmtdiffSettings | None = None,
        runner: FormatterRunner = run_formatter,
    ):
        self.backend = backend
        self.settings = settings or FmtdiffSettings()
        self.runner = runner

    def validate(self, args: InvocationConfig) -> Result[None, FmtdiffError]:
        # Checked even with --all, where the revision is otherwise unused.
        return validate_revision(args.explicit_revision, self.backend).map(lambda _: None)

    def discover_targets(self, args: InvocationConfig) -> IOResult[FileSet, FmtdiffError]:
        if args.all_files_mode:
            console.info(f"Formatting all Python files under {args.repo_root}.")
            files = collect_all(args.repo_root, self.settings)
            LOG.info("Found %d files under %s", len(files), args.repo_root)
            return IOSuccess(files)

        resolved = resolve_revision(
            args.explicit_revision,
            self.settings.default_revisions,
            self.backend,
        )
        if isinstance(resolved, IOFailure):
            return resolved

        revision = unsafe_perform_io(resolved.unwrap())
        self.report_revision(revision)

        changed = collect_changed(self.backend, revision.comparison_point, self.settings)
        return changed.map(self._log_changed(revision))

    def process_targets(self, targets: FileSet, args: InvocationConfig) -> IOResult[FormatterOutcome, FmtdiffError]:
        command = build_command(targets, args.apply_mode, self.settings)
        mode = "apply" if args.apply_mode else "check"
        LOG.info("Running formatter in %s mode on %d files", mode, len(targets))
        return self.runner(command, args.repo_root).map(
            lambda result: classify_result(result, self.settings.bug_signature)
        )

    def report_nothing_to_do(self, args: InvocationConfig) -> None:
        console.success("No files need formatting.")

    def report_revision(self, revision: ResolvedRevision) -> None:
        if revision.substituted:
            console.info(
                f"{revision.name} is not an ancestor of HEAD; comparing against "
                f"their merge base {revision.merge_base_commit} instead."
            )
        else:
            console.info(f"Comparing against {revision.name}, which is the merge base with HEAD.")

    def finalize(self, result: FormatterOutcome, args: InvocationConfig) -> int:
        typer.echo(result.result.combined_output, nl=False, color=True)

        if result.kind is OutcomeKind.TRANSIENT_BUG:
            console.warning(transient_bug_advisory(self.settings.issue_tracker_url))

        LOG.info("Formatter finished with exit code %d (%s)", result.exit_code, result.kind.value)
        return result.exit_code

    @staticmethod
    def _log_changed(revision: ResolvedRevision):
        def _log(files: FileSet) -> FileSet:
            LOG.info("Found %d changed files since %s", len(files), revision.comparison_point)
            return files
        return _log
