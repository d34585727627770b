# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Logging setup and initialization for fmtdiff."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def verbosity_to_level(verbosity: int) -> int:
    """Map the number of -v flags to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0) -> None:
    """
    Configure the root logger for a command-line run.

    Log records go to stderr so they never mix with formatter output
    forwarded on stdout.

    Args:
        verbosity: Number of -v flags (0 = warnings, 1 = info, 2+ = debug)
    """
    logging.basicConfig(
        level=verbosity_to_level(verbosity),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
