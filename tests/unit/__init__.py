"""Unit tests for fmtdiff components.

All tests in this package run without git or a formatter installed:

1. Revision-control queries go to the FakeBackend fixture
2. Formatter runs go to the FakeRunner fixture
3. File-system tests stay inside tmp_path

Test Modules:
    - test_cli.py: Argument handling and exit code mapping
    - test_config.py: Invocation and settings models
    - test_revision.py: Default revision probing and merge-base substitution
    - test_changeset.py: File discovery and generated-file filtering
    - test_formatter.py: Formatter command line and outcome classification
    - test_format_command.py: The whole command flow
"""
