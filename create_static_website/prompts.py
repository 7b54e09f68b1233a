"""The interactive question sequence.

Questions are asked in a fixed order with ``rich.prompt``.  Free-text answers
are validated by small functions that return ``True`` or an error message;
an invalid answer re-prompts until a valid one is given.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Optional, TextIO, Union

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse, Prompt

from .config import Config
from .models import AnswerSet, PackageManager, Template

Validator = Callable[[str], Union[bool, str]]


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_not_empty(value: str, label: str = "Project name") -> Union[bool, str]:
    """Return ``True`` for non-blank input, otherwise an error message."""
    if value.strip():
        return True
    return f"⛔ {label} cannot be empty"


def validate_target_dir(value: str) -> Union[bool, str]:
    """Return ``True`` when nothing exists at *value*, otherwise an error message."""
    if not os.path.lexists(Path(value).expanduser()):
        return True
    return f"⛔ {value} already exists"


# ---------------------------------------------------------------------------
# Prompt types
# ---------------------------------------------------------------------------


class ValidatedPrompt(Prompt):
    """A text prompt that re-asks until ``validator`` accepts the answer.

    Unlike a plain ``Prompt`` the default value is validated too.
    """

    validator: Validator = staticmethod(lambda value: True)

    def __call__(self, *, default: Any = ..., stream: Optional[TextIO] = None) -> Any:
        while True:
            value = super().__call__(default=default, stream=stream)
            verdict = self.validator(value)
            if verdict is True:
                return value
            self.on_validate_error(value, InvalidResponse(f"[prompt.invalid]{verdict}"))


class ProjectNamePrompt(ValidatedPrompt):
    validator = staticmethod(lambda value: validate_not_empty(value, "Project name"))


class AuthorPrompt(ValidatedPrompt):
    validator = staticmethod(lambda value: validate_not_empty(value, "Author name"))


class TargetDirPrompt(ValidatedPrompt):
    validator = staticmethod(validate_target_dir)


# ---------------------------------------------------------------------------
# Question sequence
# ---------------------------------------------------------------------------


def ask_questions(
    console: Console,
    config: Config | None = None,
    *,
    stream: Optional[TextIO] = None,
) -> AnswerSet:
    """Ask every question in order and return the validated answers.

    The install questions are only part of the sequence when
    ``config.ask_install`` is set.  *stream* replaces standard input, which
    lets tests feed answers line by line.
    """
    config = config or Config()

    project_name = ProjectNamePrompt.ask(
        "🤠 What is the name of your project?",
        console=console,
        default="my-project",
        stream=stream,
    )
    target_dir = TargetDirPrompt.ask(
        "📁 Where do you want to create the project?",
        console=console,
        default=f"./{project_name}",
        stream=stream,
    )
    author = AuthorPrompt.ask(
        "🤖 Who is the author of the project?",
        console=console,
        default="NO_AUTHOR",
        stream=stream,
    )
    template = Prompt.ask(
        "📝 Which template do you want to use?",
        console=console,
        choices=[t.value for t in Template],
        default=Template.SIMPLE.value,
        stream=stream,
    )
    use_servemon = Confirm.ask(
        "⚡ Do you want to use Servemon as dev server? (recommended)",
        console=console,
        default=True,
        stream=stream,
    )

    install_servemon = False
    package_manager = PackageManager.NPM.value
    if config.ask_install:
        install_servemon = Confirm.ask(
            "📦 Do you want to install Servemon globally?",
            console=console,
            default=False,
            stream=stream,
        )
        package_manager = Prompt.ask(
            "🧰 Which package manager do you want to use?",
            console=console,
            choices=[pm.value for pm in PackageManager],
            default=PackageManager.NPM.value,
            stream=stream,
        )

    return AnswerSet(
        project_name=project_name,
        target_dir=Path(target_dir),
        author=author,
        template=template,
        use_servemon=use_servemon,
        install_servemon=install_servemon,
        package_manager=package_manager,
    )
