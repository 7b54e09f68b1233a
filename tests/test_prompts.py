"""Unit tests for the question sequence (create_static_website.prompts).

Answers are fed through ``stream`` one line per question; an exhausted
stream reads as an empty answer, which selects the default.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from create_static_website.config import Config
from create_static_website.models import PackageManager, Template
from create_static_website.prompts import (
    ProjectNamePrompt,
    TargetDirPrompt,
    ask_questions,
    validate_not_empty,
    validate_target_dir,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120)


def _lines(*answers: str) -> io.StringIO:
    return io.StringIO("".join(f"{answer}\n" for answer in answers))


class _ScriptedStream:
    """Input stream returning canned ``readline`` results in order."""

    def __init__(self, reads: list[str]) -> None:
        self.reads = list(reads)

    def readline(self) -> str:
        return self.reads.pop(0)


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


class TestValidateNotEmpty:
    def test_accepts_text(self):
        assert validate_not_empty("my-site") is True

    @pytest.mark.parametrize("value", ["", "   ", "\t"])
    def test_rejects_blank(self, value: str):
        assert validate_not_empty(value) == "⛔ Project name cannot be empty"

    def test_custom_label(self):
        assert validate_not_empty("", "Author name") == "⛔ Author name cannot be empty"


class TestValidateTargetDir:
    def test_missing_path_accepted(self, tmp_path: Path):
        assert validate_target_dir(str(tmp_path / "new")) is True

    def test_existing_directory_rejected(self, tmp_path: Path):
        assert validate_target_dir(str(tmp_path)) == f"⛔ {tmp_path} already exists"

    def test_existing_file_rejected(self, tmp_path: Path):
        existing = tmp_path / "notes.txt"
        existing.write_text("hi", encoding="utf-8")
        assert validate_target_dir(str(existing)) is not True


# ---------------------------------------------------------------------------
# Prompt types
# ---------------------------------------------------------------------------


class TestValidatedPrompt:
    def test_reasks_until_valid(self, console: Console):
        value = ProjectNamePrompt.ask(
            "name?", console=console, stream=_lines("", "   ", "site")
        )
        assert value == "site"
        assert console.file.getvalue().count("cannot be empty") == 2

    def test_invalid_default_is_rejected(self, console: Console, tmp_path: Path):
        fresh = tmp_path / "fresh"
        # an empty read selects the default, which already exists
        stream = _ScriptedStream(["", f"{fresh}\n"])
        value = TargetDirPrompt.ask(
            "where?", console=console, default=str(tmp_path), stream=stream
        )
        assert value == str(fresh)
        assert f"{tmp_path} already exists" in console.file.getvalue()


# ---------------------------------------------------------------------------
# ask_questions
# ---------------------------------------------------------------------------


class TestAskQuestions:
    def test_explicit_answers(self, console: Console, tmp_path: Path):
        target = tmp_path / "site"
        answers = ask_questions(
            console,
            Config(),
            stream=_lines("site", str(target), "Ada", "Bootstrap", "n", "y", "pnpm"),
        )

        assert answers.project_name == "site"
        assert answers.target_dir == target
        assert answers.author == "Ada"
        assert answers.template is Template.BOOTSTRAP
        assert answers.use_servemon is False
        assert answers.install_servemon is True
        assert answers.package_manager is PackageManager.PNPM

    def test_defaults(self, console: Console, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        answers = ask_questions(console, Config(), stream=io.StringIO(""))

        assert answers.project_name == "my-project"
        assert answers.target_dir == Path("./my-project")
        assert answers.author == "NO_AUTHOR"
        assert answers.template is Template.SIMPLE
        assert answers.use_servemon is True
        assert answers.install_servemon is False
        assert answers.package_manager is PackageManager.NPM

    def test_empty_name_reprompts(self, console: Console, tmp_path: Path):
        answers = ask_questions(
            console,
            Config(),
            stream=_lines("", "site", str(tmp_path / "site"), "Ada", "Simple", "y", "n", "npm"),
        )
        assert answers.project_name == "site"
        assert "Project name cannot be empty" in console.file.getvalue()

    def test_existing_directory_reprompts(self, console: Console, tmp_path: Path):
        taken = tmp_path / "taken"
        taken.mkdir()
        free = tmp_path / "free"

        answers = ask_questions(
            console,
            Config(),
            stream=_lines("site", str(taken), str(free), "Ada", "Simple", "y", "n", "npm"),
        )

        assert answers.target_dir == free
        assert f"{taken} already exists" in console.file.getvalue()

    def test_unknown_template_reprompts(self, console: Console, tmp_path: Path):
        answers = ask_questions(
            console,
            Config(),
            stream=_lines(
                "site", str(tmp_path / "site"), "Ada", "Tailwind", "Bootstrap", "y", "n", "npm"
            ),
        )
        assert answers.template is Template.BOOTSTRAP

    def test_install_questions_skipped_when_disabled(self, console: Console, tmp_path: Path):
        stream = _lines("site", str(tmp_path / "site"), "Ada", "Simple", "y", "yarn")
        answers = ask_questions(console, Config(ask_install=False), stream=stream)

        assert answers.install_servemon is False
        assert answers.package_manager is PackageManager.NPM
        # the package manager line was never consumed
        assert stream.readline() == "yarn\n"

    def test_package_manager_asked_even_without_install(self, console: Console, tmp_path: Path):
        answers = ask_questions(
            console,
            Config(),
            stream=_lines("site", str(tmp_path / "site"), "Ada", "Simple", "y", "n", "yarn"),
        )
        assert answers.install_servemon is False
        assert answers.package_manager is PackageManager.YARN
