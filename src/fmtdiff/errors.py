# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Error types for functional error handling using Result.

This module defines all error types used throughout fmtdiff. Operations
that can fail return Result[Value, Error] (or IOResult for operations
that touch git or the formatter) instead of raising.
"""

from dataclasses import dataclass, field
from pathlib import Path

from returns.io import IOResult
from returns.result import Result


# =============================================================================
# Base Error Types
# =============================================================================

@dataclass(frozen=True)
class FmtdiffError:
    """Base error type for all fmtdiff errors."""
    message: str


@dataclass(frozen=True)
class UnexpectedError(FmtdiffError):
    """An exception escaped a command; always a bug."""
    original_error: str | None = None


# =============================================================================
# Argument Errors
# =============================================================================

@dataclass(frozen=True)
class TooManyArgumentsError(FmtdiffError):
    """More than one positional revision argument was supplied."""
    arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class InvalidRevisionError(FmtdiffError):
    """An explicitly supplied revision does not name a commit."""
    revision: str = ""


@dataclass(frozen=True)
class NoDefaultRevisionError(FmtdiffError):
    """No revision was given and none of the default candidates exist."""
    candidates: tuple[str, ...] = ()


# =============================================================================
# External Tool Errors
# =============================================================================

@dataclass(frozen=True)
class GitError(FmtdiffError):
    """A git query failed or git could not be executed."""
    command: tuple[str, ...] = ()
    returncode: int | None = None
    stderr: str = ""


@dataclass(frozen=True)
class FormatterLaunchError(FmtdiffError):
    """The formatter executable could not be started."""
    command: tuple[str, ...] = ()
    original_error: str | None = None


# =============================================================================
# Configuration Errors
# =============================================================================

@dataclass(frozen=True)
class ConfigError(FmtdiffError):
    """Configuration error."""
    config_file: Path | None = None
    details: list[str] = field(default_factory=list)


# =============================================================================
# Type Aliases for Common Result Types
# =============================================================================

# Git queries return IOResult[T, GitError]
GitResult = IOResult[str, GitError]

# Argument validation returns Result[T, FmtdiffError]
ArgumentResult = Result[str | None, FmtdiffError]


# =============================================================================
# Error Helpers
# =============================================================================

def too_many_arguments(arguments: tuple[str, ...]) -> TooManyArgumentsError:
    """Create an error for surplus positional arguments."""
    return TooManyArgumentsError(
        message=(
            f"Expected at most one revision but got {len(arguments)}: "
            f"{' '.join(arguments)}"
        ),
        arguments=arguments,
    )


def invalid_revision(revision: str) -> InvalidRevisionError:
    """Create an error for a revision that is not a commit."""
    return InvalidRevisionError(
        message=f"'{revision}' is not a valid commit",
        revision=revision,
    )


def no_default_revision(candidates: tuple[str, ...]) -> NoDefaultRevisionError:
    """Create an error for when no default revision could be found."""
    return NoDefaultRevisionError(
        message=(
            f"Could not find any of {', '.join(candidates)}; "
            "pass the revision to compare against explicitly"
        ),
        candidates=candidates,
    )


def git_failed(command: tuple[str, ...], returncode: int | None, stderr: str) -> GitError:
    """Create a git command failure error."""
    detail = stderr.strip()
    message = f"git command failed: {' '.join(command)}"
    if detail:
        message = f"{message}: {detail}"
    return GitError(
        message=message,
        command=command,
        returncode=returncode,
        stderr=stderr,
    )
