"""Shared pytest configuration and fixtures for fmtdiff test suite.

This module provides common fixtures, configuration, and utilities used across
all test modules. Fixtures defined here are automatically available to all tests
without explicit imports.
"""

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

import pytest
from returns.io import IOFailure, IOResult, IOSuccess

# Add src to path for imports during testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fmtdiff.config import FmtdiffSettings
from fmtdiff.errors import FormatterLaunchError, GitError, git_failed
from fmtdiff.formatter import FormatResult


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires git)"
    )


# ============================================================================
# Test Doubles
# ============================================================================

@dataclass
class FakeBackend:
    """In-memory RevisionBackend.

    Attributes:
        commits: Revision name -> commit id for every revision that exists
        merge_bases: Revision name -> merge base with HEAD (defaults to the commit)
        changed: Paths reported as changed, whatever the base
        calls: Every query made, in order
    """
    commits: Dict[str, str] = field(default_factory=dict)
    merge_bases: Dict[str, str] = field(default_factory=dict)
    changed: List[Path] = field(default_factory=list)
    calls: List[Tuple[str, ...]] = field(default_factory=list)

    def is_commit(self, revision: str) -> bool:
        self.calls.append(("is_commit", revision))
        return revision in self.commits

    def rev_parse(self, revision: str) -> IOResult[str, GitError]:
        self.calls.append(("rev_parse", revision))
        if revision not in self.commits:
            return IOFailure(git_failed(("git", "rev-parse", revision), 1, "unknown revision"))
        return IOSuccess(self.commits[revision])

    def merge_base(self, revision: str, other: str = "HEAD") -> IOResult[str, GitError]:
        self.calls.append(("merge_base", revision, other))
        return IOSuccess(self.merge_bases.get(revision, self.commits[revision]))

    def changed_files(self, base: str, pathspec: str) -> IOResult[List[Path], GitError]:
        self.calls.append(("changed_files", base, pathspec))
        return IOSuccess(list(self.changed))


@dataclass
class FakeRunner:
    """Formatter runner that records commands instead of running them."""
    exit_code: int = 0
    output: str = ""
    calls: List[Tuple[List[str], Path]] = field(default_factory=list)

    def __call__(self, command: List[str], cwd: Path) -> IOResult[FormatResult, FormatterLaunchError]:
        self.calls.append((command, cwd))
        return IOSuccess(FormatResult(exit_code=self.exit_code, combined_output=self.output))


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch) -> None:
    """Remove FMTDIFF_* variables so settings always start from defaults."""
    for name in list(os.environ):
        if name.startswith("FMTDIFF_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> FmtdiffSettings:
    """Default settings."""
    return FmtdiffSettings()


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Backend where only main exists and HEAD descends from it."""
    return FakeBackend(commits={"main": "a" * 40})


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


def git(repo: Path, *args: str) -> str:
    """Run git in repo and return its stdout."""
    completed = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout.strip()


@pytest.fixture
def run_git():
    """The git helper, for tests that build history."""
    return git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository on branch main with one initial commit.

    Returns:
        Path to the working tree root.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("fixture\n")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "initial")
    return repo
