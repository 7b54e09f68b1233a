"""Unit tests for the command line entry point (create_static_website.cli)."""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from create_static_website import __version__
from create_static_website.cli import main, run
from create_static_website.config import Config


pytestmark = pytest.mark.unit


@pytest.fixture
def argv():
    with patch.object(sys, "argv", ["create-static-website"]):
        yield


@pytest.fixture
def default_config():
    with patch("create_static_website.cli.Config.from_env", return_value=Config()):
        yield


class TestMain:
    def test_version(self, capsys):
        with patch.object(sys, "argv", ["create-static-website", "--version"]):
            with pytest.raises(SystemExit) as excinfo:
                main()
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_success_exits_normally(self, argv, default_config, make_answers, target_dir):
        with patch("create_static_website.cli.ask_questions", return_value=make_answers()):
            main()
        assert (target_dir / "package.json").is_file()

    def test_failed_step_exits_one(self, argv, default_config, make_answers, target_dir):
        answers = make_answers(template="Tailwind")
        with patch("create_static_website.cli.ask_questions", return_value=answers):
            with pytest.raises(SystemExit) as excinfo:
                main()
        assert excinfo.value.code == 1
        assert (target_dir / "package.json").is_file()

    @pytest.mark.parametrize("error", [KeyboardInterrupt, EOFError])
    def test_interrupted_prompt_exits_130(self, argv, default_config, error):
        with patch("create_static_website.cli.ask_questions", side_effect=error):
            with patch("create_static_website.cli.ProjectInitializer") as initializer:
                with pytest.raises(SystemExit) as excinfo:
                    main()
        assert excinfo.value.code == 130
        initializer.assert_not_called()

    def test_questions_use_env_config(self, argv, make_answers):
        config = Config(ask_install=False)
        with patch("create_static_website.cli.Config.from_env", return_value=config):
            with patch(
                "create_static_website.cli.ask_questions", return_value=make_answers()
            ) as ask:
                main()
        assert ask.call_args.args[1] is config


class TestRun:
    @pytest.mark.asyncio
    async def test_returns_report(self, make_answers, target_dir):
        report = await run(Config(), make_answers(use_servemon=False))
        assert report.success is True
        assert report.target_dir == target_dir
