# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""fmtdiff - check or apply black formatting to changed Python files."""

__version__ = "0.1.0"
