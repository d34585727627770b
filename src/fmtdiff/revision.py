# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Revision resolution: which commit the working tree is compared against.

The revision is either named on the command line or found by probing an
ordered list of well-known upstream branches. The comparison point is the
merge base of that revision and HEAD, so that changes made upstream since
the branch forked are not reported as local changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from returns.io import IOResult
from returns.maybe import Maybe, Nothing, Some
from returns.result import Failure, Result, Success

from .errors import (
    ArgumentResult,
    FmtdiffError,
    invalid_revision,
    no_default_revision,
)
from .vcs import RevisionBackend


@dataclass(frozen=True)
class ResolvedRevision:
    """A revision together with its merge base against HEAD.

    Attributes:
        name: Revision as named by the user or the default probe
        commit: Commit the name points at
        merge_base_commit: Best common ancestor of the commit and HEAD
    """
    name: str
    commit: str
    merge_base_commit: str

    @property
    def substituted(self) -> bool:
        """True when HEAD does not descend from the revision itself."""
        return self.merge_base_commit != self.commit

    @property
    def comparison_point(self) -> str:
        """Revision the working tree is diffed against."""
        return self.merge_base_commit if self.substituted else self.name


def resolve_first_existing(
    candidates: Sequence[str],
    exists: Callable[[str], bool],
) -> Maybe[str]:
    """Return the first candidate for which exists() holds, in order."""
    for candidate in candidates:
        if exists(candidate):
            return Some(candidate)
    return Nothing


def validate_revision(revision: Optional[str], backend: RevisionBackend) -> ArgumentResult:
    """Check that an explicitly supplied revision names a commit.

    A missing revision is valid; the default probe handles it later.
    """
    if revision is None or backend.is_commit(revision):
        return Success(revision)
    return Failure(invalid_revision(revision))


def choose_revision(
    explicit_revision: Optional[str],
    candidates: Sequence[str],
    backend: RevisionBackend,
) -> Result[str, FmtdiffError]:
    """Pick the explicit revision, or else the first default candidate that exists."""
    if explicit_revision is not None:
        return Success(explicit_revision)

    found = resolve_first_existing(candidates, backend.is_commit)
    if found == Nothing:
        return Failure(no_default_revision(tuple(candidates)))
    return Success(found.unwrap())


def resolve_revision(
    explicit_revision: Optional[str],
    candidates: Sequence[str],
    backend: RevisionBackend,
) -> IOResult[ResolvedRevision, FmtdiffError]:
    """
    Resolve the revision to compare against and its merge base with HEAD.

    Args:
        explicit_revision: Revision from the command line, if any
        candidates: Default revisions probed in order when none was given
        backend: Revision-control backend for the repository

    Returns:
        IOResult[ResolvedRevision, FmtdiffError]: The resolved revision or the
        first error met (NoDefaultRevisionError or GitError)
    """
    return IOResult.from_result(
        choose_revision(explicit_revision, candidates, backend)
    ).bind(lambda name: _with_merge_base(name, backend))


def _with_merge_base(name: str, backend: RevisionBackend) -> IOResult[ResolvedRevision, FmtdiffError]:
    return backend.rev_parse(name).bind(
        lambda commit: backend.merge_base(name).map(
            lambda merge_base: ResolvedRevision(
                name=name,
                commit=commit,
                merge_base_commit=merge_base,
            )
        )
    )
