"""Command line entry point.

Usage::

    create-static-website
    python -m create_static_website
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time

from . import __version__
from .config import Config
from .models import AnswerSet, RunReport
from .prompts import ask_questions
from .scaffolder import ProjectInitializer
from .utils import (
    console,
    format_duration,
    print_banner,
    print_error,
    print_report,
    print_success,
    print_summary_table,
)


async def run(config: Config, answers: AnswerSet) -> RunReport:
    """Initialize the project described by *answers* and report the outcome."""
    print_summary_table(
        {
            "Project name": answers.project_name,
            "Directory": str(answers.target_dir),
            "Author": answers.author,
            "Template": answers.template_label,
            "Servemon": "yes" if answers.use_servemon else "no",
        },
        title="Answers",
    )

    start = time.monotonic()
    report = await ProjectInitializer(config).run(answers)
    print_report(report)

    elapsed = format_duration(time.monotonic() - start)
    if report.success:
        print_success(f"Project created at {report.target_dir} in {elapsed}")
    else:
        failed = ", ".join(step.step for step in report.steps if step.failed)
        print_error(f"Project initialization finished with failures: {failed}")
    return report


def main() -> None:
    """CLI entry point for ``create-static-website``."""
    parser = argparse.ArgumentParser(
        prog="create-static-website",
        description="Create a new static website project interactively",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Environment:\n"
            "  CSW_SITES_DIR      directory holding the static templates\n"
            "  CSW_LOG_FILENAME   name of the per-project log file\n"
            "  CSW_ASK_INSTALL    set to 0 to skip the Servemon install questions\n"
            "  CSW_INSTALL_TIMEOUT  seconds before the global install is abandoned\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args()

    config = Config.from_env()
    print_banner("Create Static Website")
    try:
        answers = ask_questions(console, config)
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Aborted.")
        sys.exit(130)

    try:
        report = asyncio.run(run(config, answers))
    except KeyboardInterrupt:
        console.print()
        print_error("Aborted.")
        sys.exit(130)

    if not report.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
