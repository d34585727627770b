# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Version-control queries used to resolve revisions and list changed files.

RevisionBackend is the protocol the rest of fmtdiff depends on; GitBackend
implements it with the git CLI. Every git command runs with the repository
root as its working directory, so the process never needs to chdir.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from returns.io import IOResult, impure_safe
from returns.unsafe import unsafe_perform_io

from .errors import GitError, GitResult, git_failed

LOG = logging.getLogger(__name__)


class RevisionBackend(Protocol):
    """Revision-control queries needed by fmtdiff."""

    def is_commit(self, revision: str) -> bool:
        """Return True if revision names a commit object."""
        ...

    def rev_parse(self, revision: str) -> IOResult[str, GitError]:
        """Return the full object name revision points at."""
        ...

    def merge_base(self, revision: str, other: str = "HEAD") -> IOResult[str, GitError]:
        """Return the best common ancestor of revision and other."""
        ...

    def changed_files(self, base: str, pathspec: str) -> IOResult[list[Path], GitError]:
        """Return paths that differ between base and the working tree."""
        ...


class GitBackend:
    """RevisionBackend backed by the git executable."""

    def __init__(self, root: Path, executable: str = "git"):
        self.root = Path(root)
        self.executable = executable

    def __repr__(self) -> str:
        return f"GitBackend(root={str(self.root)!r})"

    @classmethod
    def discover(cls, start: Path, executable: str = "git") -> IOResult[GitBackend, GitError]:
        """
        Create a backend for the repository that contains start.

        Args:
            start: Any directory inside the working tree
            executable: git executable to run

        Returns:
            IOResult[GitBackend, GitError]: Backend rooted at the top level or error
        """
        probe = cls(start, executable)
        return probe.run("rev-parse", "--show-toplevel").map(
            lambda toplevel: cls(Path(toplevel.strip()), executable)
        )

    def run(self, *args: str) -> GitResult:
        """
        Run a git command in the repository root and return its stdout.

        A non-zero exit status or a failure to start git is returned as
        GitError; nothing is raised.
        """
        command = (self.executable, *args)
        LOG.debug("Running git command: %s", " ".join(command))

        @impure_safe
        def _run() -> str:
            completed = subprocess.run(
                command,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=True,
            )
            return completed.stdout

        return _run().alt(_map_git_error(command))

    def object_type(self, revision: str) -> GitResult:
        """Return the type of the object revision names (commit, tree, blob or tag)."""
        return self.run("cat-file", "-t", revision).map(str.strip)

    def is_commit(self, revision: str) -> bool:
        # Annotated tags report "tag", so peel to a commit first.
        result = self.object_type(f"{revision}^{{commit}}")
        return unsafe_perform_io(result.map(lambda kind: kind == "commit").value_or(False))

    def rev_parse(self, revision: str) -> GitResult:
        return self.run("rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}").map(str.strip)

    def merge_base(self, revision: str, other: str = "HEAD") -> GitResult:
        return self.run("merge-base", revision, other).map(str.strip)

    def changed_files(self, base: str, pathspec: str) -> IOResult[list[Path], GitError]:
        # Deleted files cannot be formatted; -z keeps unusual names unquoted.
        return self.run(
            "diff", "-z", "--name-only", "--diff-filter=ACMR", base, "--", pathspec
        ).map(_split_paths)


def _split_paths(output: str) -> list[Path]:
    return [Path(name) for name in output.split("\0") if name]


def _map_git_error(command: tuple[str, ...]):
    def _factory(exc: Exception) -> GitError:
        if isinstance(exc, subprocess.CalledProcessError):
            LOG.debug("git stderr: %s", exc.stderr)
            return git_failed(command, exc.returncode, exc.stderr or "")
        return GitError(
            message=f"failed to execute git: {exc}",
            command=command,
        )
    return _factory
