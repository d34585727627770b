# =============================================================================
# fmtdiff - Changed-File Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""fmtdiff test suite.

Tests are organized into unit tests (fast, isolated, using an in-memory
revision backend and a recording formatter) and integration tests (real
git repositories created in temporary directories).

Running Tests:
    # All tests
    pytest

    # Unit tests only (fast)
    pytest tests/unit/

    # Skip tests that need git
    pytest -m "not integration"
"""
