# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Base command processor implementing the template method pattern.

This module provides the abstract base class for CLI commands, defining
the common execution flow shared by every command.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from returns.io import IOFailure, IOResult
from returns.result import Failure, Result, Success, safe
from returns.unsafe import unsafe_perform_io

from ..changeset import FileSet
from ..config import InvocationConfig
from ..errors import FmtdiffError, UnexpectedError
from ..logging_setup import configure_logging

T = TypeVar('T')  # Result type for command


class CommandProcessor(ABC, Generic[T]):
    """
    Base processor for CLI commands.

    Implements the template method pattern to define common execution flow:
    1. Setup environment (logging)
    2. Validate arguments against the repository
    3. Discover targets (files)
    4. Process targets (command-specific), unless there are none
    5. Finalize (reporting, exit code)
    """

    def execute(self, args: InvocationConfig) -> Result[int, FmtdiffError]:
        """
        Template method defining the common execution flow.

        Args:
            args: Parsed invocation

        Returns:
            Result[int, FmtdiffError]: Exit code on success or error
        """
        return self._execute_internal(args).alt(
            lambda exc: UnexpectedError(
                message=f"Unexpected error: {exc}",
                original_error=repr(exc),
            )
        ).bind(lambda result: result)

    @safe
    def _execute_internal(self, args: InvocationConfig) -> Result[int, FmtdiffError]:
        """
        Internal execute implementation.

        Note:
            @safe turns an escaping exception into Failure; expected errors
            are already returned as Failure values.
        """
        self.setup_environment(args)

        validated = self.validate(args)
        if isinstance(validated, Failure):
            return validated

        targets = self.discover_targets(args)
        if isinstance(targets, IOFailure):
            return Failure(unsafe_perform_io(targets.failure()))

        files = unsafe_perform_io(targets.unwrap())
        if not files:
            self.report_nothing_to_do(args)
            return Success(0)

        processed = self.process_targets(files, args)
        if isinstance(processed, IOFailure):
            return Failure(unsafe_perform_io(processed.failure()))

        return Success(self.finalize(unsafe_perform_io(processed.unwrap()), args))

    def setup_environment(self, args: InvocationConfig) -> None:
        """Common environment setup for all commands."""
        configure_logging(args.verbosity)

    def validate(self, args: InvocationConfig) -> Result[None, FmtdiffError]:
        """
        Validate arguments that need the repository to check.

        Override when a command has such arguments; the default accepts all.
        """
        return Success(None)

    @abstractmethod
    def discover_targets(self, args: InvocationConfig) -> IOResult[FileSet, FmtdiffError]:
        """
        Discover the files to process.

        Args:
            args: Parsed invocation

        Returns:
            IOResult[FileSet, FmtdiffError]: Files to process or error
        """

    @abstractmethod
    def process_targets(self, targets: FileSet, args: InvocationConfig) -> IOResult[T, FmtdiffError]:
        """
        Process discovered files.

        This is the main command-specific logic.
        """

    @abstractmethod
    def report_nothing_to_do(self, args: InvocationConfig) -> None:
        """Tell the user there were no files to process."""

    @abstractmethod
    def finalize(self, result: T, args: InvocationConfig) -> int:
        """
        Report the processing result.

        Returns:
            Exit code
        """
