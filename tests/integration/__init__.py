# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Integration tests for fmtdiff.

These tests create real git repositories under tmp_path and need the git
executable on PATH; they are skipped otherwise. The formatter is replaced
by a recording script, so black does not need to be installed.

Markers:
    - @pytest.mark.integration: All tests in this package
"""
