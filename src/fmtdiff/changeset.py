# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Collection of the files handed to the formatter.

Either every source file in the working tree, or only those that differ
from the comparison point. Generated files are dropped in both cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from returns.io import IOResult

from .config import FmtdiffSettings
from .errors import GitError
from .file_discovery import collect_files, is_source_file
from .vcs import RevisionBackend


@dataclass(frozen=True)
class FileSet:
    """Sorted, de-duplicated repository-relative paths. May be empty."""
    paths: tuple[Path, ...] = ()

    @classmethod
    def of(cls, paths: Iterable[Path]) -> FileSet:
        return cls(tuple(sorted(set(paths))))

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def as_arguments(self) -> list[str]:
        """Paths as command-line arguments."""
        return [path.as_posix() for path in self.paths]


def is_generated(path: Path, generated_suffixes: Sequence[str]) -> bool:
    """Return True if the file name ends with a generated-file marker."""
    return any(path.name.endswith(marker) for marker in generated_suffixes)


def filter_generated(paths: Iterable[Path], generated_suffixes: Sequence[str]) -> FileSet:
    return FileSet.of(path for path in paths if not is_generated(path, generated_suffixes))


def collect_all(root: Path, settings: FmtdiffSettings) -> FileSet:
    """Every eligible source file under root, independent of git history."""
    files = collect_files(root, settings.exclude_dirs, settings.source_suffix)
    return filter_generated(files, settings.generated_suffixes)


def collect_changed(
    backend: RevisionBackend,
    comparison_point: str,
    settings: FmtdiffSettings,
) -> IOResult[FileSet, GitError]:
    """Eligible source files that differ between comparison_point and the working tree."""
    pathspec = f"*{settings.source_suffix}"
    return backend.changed_files(comparison_point, pathspec).map(
        lambda paths: filter_generated(
            (path for path in paths if is_source_file(path, settings.source_suffix)),
            settings.generated_suffixes,
        )
    )
