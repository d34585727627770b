# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Type-safe configuration models using Pydantic.

InvocationConfig captures what the user asked for on the command line and
is frozen once built. FmtdiffSettings holds the tool configuration: the
default revisions to probe, the file selection rules and the formatter
command. Settings come from FMTDIFF_* environment variables layered over
the [tool.fmtdiff] table of the repository's pyproject.toml.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict
from returns.result import Failure, Result, Success

from .errors import ConfigError, FmtdiffError, too_many_arguments


PYPROJECT_TABLE = ("tool", "fmtdiff")


class InvocationConfig(BaseModel):
    """Options for a single fmtdiff run, as given on the command line."""

    model_config = ConfigDict(frozen=True)

    explicit_revision: Optional[str] = Field(None, description="Revision named on the command line")
    apply_mode: bool = Field(False, description="Rewrite files instead of checking them")
    all_files_mode: bool = Field(False, description="Format every source file, not only changed ones")
    verbosity: int = Field(0, ge=0, description="Number of -v flags given")
    repo_root: Path = Field(..., description="Root of the working tree")

    @classmethod
    def from_arguments(
        cls,
        revisions: Sequence[str],
        *,
        repo_root: Path,
        apply_mode: bool = False,
        all_files_mode: bool = False,
        verbosity: int = 0,
    ) -> Result[InvocationConfig, FmtdiffError]:
        """Build a config from the positional tokens and flags.

        At most one positional token is accepted; it names the revision.
        Whether that revision exists is checked later, against git.
        """
        if len(revisions) > 1:
            return Failure(too_many_arguments(tuple(revisions)))

        return Success(cls(
            explicit_revision=revisions[0] if revisions else None,
            apply_mode=apply_mode,
            all_files_mode=all_files_mode,
            verbosity=verbosity,
            repo_root=repo_root,
        ))


class BugSignature(BaseModel):
    """Exit code and output fragment of the formatter's known unstable-formatting bug."""

    exit_code: int = Field(123, description="Exit code the formatter uses for internal errors")
    pattern: str = Field(
        "INTERNAL ERROR: Black produced different code on the second pass of the formatter",
        min_length=1,
        description="Substring that identifies the bug in the formatter output",
    )


class FmtdiffSettings(BaseSettings):
    """Tool configuration."""

    default_revisions: list[str] = Field(
        default=["upstream/main", "origin/main", "main"],
        min_length=1,
        description="Revisions probed in order when none is given",
    )
    source_suffix: str = Field(".py", pattern=r"^\.\w+$", description="Suffix of files to format")
    generated_suffixes: list[str] = Field(
        default=["_pb2.py", "_pb2_grpc.py"],
        description="File name endings of generated files that are never formatted",
    )
    exclude_dirs: list[str] = Field(
        default=[
            ".git", ".hg", ".svn", ".venv", "venv", "__pycache__",
            "build", "dist", ".tox", ".nox", "node_modules",
        ],
        description="Directory names skipped when collecting all files",
    )
    formatter_command: list[str] = Field(
        default=["black"],
        min_length=1,
        description="Command that starts the formatter",
    )
    check_flags: list[str] = Field(
        default=["--check", "--diff"],
        description="Flags that turn the formatter into a read-only check",
    )
    color_flag: str = Field("--color", description="Flag that forces colored output")
    bug_signature: BugSignature = Field(default_factory=BugSignature)
    issue_tracker_url: str = Field(
        "https://github.com/psf/black/issues",
        description="Where persistent formatter failures should be reported",
    )

    model_config = SettingsConfigDict(
        env_prefix="FMTDIFF_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides values read from pyproject.toml.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load(cls, repo_root: Path) -> Result[FmtdiffSettings, ConfigError]:
        """Load settings for the repository rooted at repo_root.

        Args:
            repo_root: Root of the working tree; its pyproject.toml is read if present

        Returns:
            Result[FmtdiffSettings, ConfigError]: Validated settings or error
        """
        pyproject = repo_root / "pyproject.toml"
        table = _read_pyproject_table(pyproject)
        if isinstance(table, Failure):
            return table

        try:
            return Success(cls(**table.unwrap()))
        except ValidationError as exc:
            return Failure(ConfigError(
                message=f"Invalid fmtdiff configuration: {exc.error_count()} error(s)",
                config_file=pyproject if pyproject.exists() else None,
                details=[
                    f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                    for error in exc.errors()
                ],
            ))


def _read_pyproject_table(path: Path) -> Result[dict[str, Any], ConfigError]:
    if not path.is_file():
        return Success({})

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        return Failure(ConfigError(
            message=f"Could not read {path}: {exc}",
            config_file=path,
        ))

    table: Any = document
    for depth, key in enumerate(PYPROJECT_TABLE, start=1):
        table = table.get(key, {})
        if not isinstance(table, dict):
            return Failure(ConfigError(
                message=f"[{'.'.join(PYPROJECT_TABLE[:depth])}] in {path} must be a table",
                config_file=path,
            ))
    return Success(_normalize_keys(table))


def _normalize_keys(table: dict[str, Any]) -> dict[str, Any]:
    """Accept both default-revisions and default_revisions spellings."""
    return {
        key.replace("-", "_"): _normalize_keys(value) if isinstance(value, dict) else value
        for key, value in table.items()
    }
