# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""User-facing notices, colorized on stderr."""

from rich.console import Console

# Markup is off so revision names like "HEAD@{1}" print as typed.
console = Console(stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True)


def info(message: str) -> None:
    console.print(message, style="cyan")


def success(message: str) -> None:
    console.print(message, style="green")


def warning(message: str) -> None:
    console.print(f"Warning: {message}", style="yellow")


def error(message: str) -> None:
    console.print(f"Error: {message}", style="bold red")
