# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Source file discovery over the working tree."""

import os
from pathlib import Path
from typing import Iterable, List


def is_source_file(path: Path, suffix: str = ".py") -> bool:
    """Return True if path has the source suffix (case-sensitive, like the formatter)."""
    return path.suffix == suffix


def collect_files(
    root: Path,
    exclude_dirs: Iterable[str] = (),
    suffix: str = ".py",
) -> List[Path]:
    """
    Recursively collect source files below root.

    Directories whose name is in exclude_dirs are not descended into.
    Symlinked directories are not followed.

    Args:
        root: Directory to search
        exclude_dirs: Directory names to skip at any depth
        suffix: File suffix to collect

    Returns:
        Sorted list of paths relative to root
    """
    excluded = set(exclude_dirs)
    found: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Pruning in place stops os.walk from descending.
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        base = Path(dirpath)
        for filename in filenames:
            path = base / filename
            if is_source_file(path, suffix):
                found.append(path.relative_to(root))

    return sorted(found)
