"""Shared pytest fixtures for the create-static-website test suite.

Provides reusable fixtures for:
- Target directories that do not exist yet
- Answer sets and configuration
- Mock subprocess helpers for the installer
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_static_website.config import Config
from create_static_website.models import AnswerSet


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """A project directory path that does not exist yet."""
    path = tmp_path / "sites" / "my-site"
    assert not path.exists()
    return path


@pytest.fixture
def sites_dir(tmp_path: Path) -> Path:
    """A custom template root with a tiny ``simple`` and ``bootstrap`` tree."""
    root = tmp_path / "custom-sites"
    for folder in ("simple", "bootstrap"):
        (root / folder / "css").mkdir(parents=True)
        (root / folder / "index.html").write_text(f"<h1>{folder}</h1>\n", encoding="utf-8")
        (root / folder / "css" / "style.css").write_text("body {}\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Config & Answers
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration using the bundled templates."""
    return Config()


@pytest.fixture
def make_answers(target_dir: Path) -> Callable[..., AnswerSet]:
    """Factory building an ``AnswerSet`` aimed at ``target_dir``.

    Usage:
        def test_something(make_answers):
            answers = make_answers(template="Bootstrap", use_servemon=False)
    """
    def factory(**overrides: Any) -> AnswerSet:
        values: dict[str, Any] = {
            "project_name": "my-site",
            "target_dir": target_dir,
            "author": "Ada Lovelace",
            "template": "Simple",
            "use_servemon": True,
            "install_servemon": False,
            "package_manager": "npm",
        }
        values.update(overrides)
        return AnswerSet(**values)

    return factory


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_shell", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
