"""Shared pytest fixtures for ABACUS tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside an empty directory so no stray abacus.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ABACUS_LOG_LEVEL", raising=False)
    return tmp_path
