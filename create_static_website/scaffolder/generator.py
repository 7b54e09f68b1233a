"""Main project initializer.

Takes a validated ``AnswerSet`` and materializes the new project directory:
creates it, appends the run to ``log.txt``, writes the optional servemon
config, the package manifest and readme, copies the chosen static template
and optionally installs the companion dev server.  Every step yields a
``StepResult``; the results are collected into a ``RunReport``.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import Config
from ..models import AnswerSet, RunReport, StepResult, StepStatus, Template
from ..utils import print_step
from .installer import STEP_NAME as INSTALL_STEP
from .installer import CompanionInstaller
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Step names
# ---------------------------------------------------------------------------

CREATE_DIRECTORY = "create_directory"
WRITE_LOG = "write_log"
WRITE_SERVEMON_CONFIG = "write_servemon_config"
WRITE_MANIFEST = "write_manifest"
COPY_TEMPLATE = "copy_template"

_WRITE_STEPS = (WRITE_LOG, WRITE_SERVEMON_CONFIG, WRITE_MANIFEST, COPY_TEMPLATE)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InitializerError(Exception):
    """Raised by a step that cannot complete."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        self.message = message
        super().__init__(f"{step}: {message}")


# ---------------------------------------------------------------------------
# Initializer
# ---------------------------------------------------------------------------


class ProjectInitializer:
    """Creates a static website project from an ``AnswerSet``.

    Steps run strictly in order.  A failing step never raises out of
    :meth:`run`; it is recorded as ``failed`` and the remaining steps still
    execute, except when the target directory could not be created, in which
    case every later step is recorded as ``skipped``.
    """

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
        installer: CompanionInstaller | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.installer = installer or CompanionInstaller(
            self.config.companion_package, timeout=self.config.install_timeout
        )

    # -- Public API --------------------------------------------------------

    async def run(self, answers: AnswerSet) -> RunReport:
        """Execute every step for *answers* and return the aggregated report."""
        target = Path(answers.target_dir).expanduser()
        report = RunReport(target_dir=target)
        context = self._build_context(answers)

        created = await self._run_step(
            report, CREATE_DIRECTORY, lambda: self.create_directory(target)
        )
        if created.failed:
            remaining = list(_WRITE_STEPS)
            if self.config.ask_install:
                remaining.append(INSTALL_STEP)
            for step in remaining:
                self._record(
                    report,
                    StepResult(
                        step=step,
                        status=StepStatus.SKIPPED,
                        message="target directory was not created",
                    ),
                )
            return self._finish(report)

        await self._run_step(report, WRITE_LOG, lambda: self.write_log(target, context))
        await self._run_step(
            report,
            WRITE_SERVEMON_CONFIG,
            lambda: self.write_servemon_config(target, answers, context),
        )
        await self._run_step(report, WRITE_MANIFEST, lambda: self.write_manifest(target, answers))
        await self._run_step(report, COPY_TEMPLATE, lambda: self.copy_template(target, answers))

        if self.config.ask_install:
            await self._run_step(report, INSTALL_STEP, lambda: self.install_companion(answers))

        return self._finish(report)

    # -- Steps -------------------------------------------------------------

    async def create_directory(self, target: Path) -> StepResult:
        """Create *target* and its parents; fail when it already exists.

        Validation and creation are one atomic ``mkdir`` so a directory that
        appeared after the prompt phase is reported rather than reused.
        """
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=False)
        except FileExistsError as exc:
            raise InitializerError(CREATE_DIRECTORY, f"⛔ {target} already exists") from exc
        return StepResult(
            step=CREATE_DIRECTORY,
            status=StepStatus.SUCCESS,
            message=f"Created {target}",
            path=target,
        )

    async def write_log(self, target: Path, context: dict[str, Any]) -> StepResult:
        """Append this run's record to the log file inside *target*."""
        path = await self.renderer.append_to_file(
            "log_entry.txt.j2", target / self.config.log_filename, context
        )
        return StepResult(step=WRITE_LOG, status=StepStatus.SUCCESS, path=path)

    async def write_servemon_config(
        self, target: Path, answers: AnswerSet, context: dict[str, Any]
    ) -> StepResult:
        """Write ``servemon.config.js`` when the user opted into servemon."""
        if not answers.use_servemon:
            return StepResult(
                step=WRITE_SERVEMON_CONFIG,
                status=StepStatus.SKIPPED,
                message="servemon not selected",
            )
        path = await self.renderer.render_to_file(
            "servemon.config.js.j2",
            target / self.config.servemon_config_filename,
            context,
        )
        return StepResult(step=WRITE_SERVEMON_CONFIG, status=StepStatus.SUCCESS, path=path)

    async def write_manifest(self, target: Path, answers: AnswerSet) -> StepResult:
        """Write an empty ``README.md`` and the ``package.json`` manifest."""
        manifest = build_manifest(answers.project_name, self.config)
        content = json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"

        await asyncio.to_thread((target / "README.md").write_text, "", "utf-8")
        manifest_path = target / "package.json"
        await asyncio.to_thread(manifest_path.write_text, content, "utf-8")
        return StepResult(step=WRITE_MANIFEST, status=StepStatus.SUCCESS, path=manifest_path)

    async def copy_template(self, target: Path, answers: AnswerSet) -> StepResult:
        """Copy the chosen static template tree into *target*."""
        if not isinstance(answers.template, Template):
            raise InitializerError(
                COPY_TEMPLATE, f"⛔ Template not found: {answers.template_label}"
            )

        source = self.config.site_path(answers.template.folder)
        if not source.is_dir():
            raise InitializerError(
                COPY_TEMPLATE, f"Template directory missing: {source}"
            )

        try:
            await asyncio.to_thread(shutil.copytree, source, target, dirs_exist_ok=True)
        except (shutil.Error, OSError) as exc:
            raise InitializerError(COPY_TEMPLATE, f"Copy failed: {exc}") from exc

        return StepResult(
            step=COPY_TEMPLATE,
            status=StepStatus.SUCCESS,
            message=f"Copied {answers.template_label} template",
            path=target,
        )

    async def install_companion(self, answers: AnswerSet) -> StepResult:
        """Install the companion dev server globally when requested."""
        if not answers.install_servemon:
            return StepResult(
                step=INSTALL_STEP,
                status=StepStatus.SKIPPED,
                message="installation not requested",
            )
        return await self.installer.install(answers.package_manager)

    # -- Context building --------------------------------------------------

    def _build_context(self, answers: AnswerSet) -> dict[str, Any]:
        """Build the Jinja2 template context from the answers."""
        return {
            "project_name": answers.project_name,
            "target_dir": str(answers.target_dir),
            "author": answers.author,
            "template": answers.template_label,
            "use_servemon": answers.use_servemon,
            "date": datetime.now(timezone.utc).isoformat(),
            "servemon": self.config.servemon.model_dump(),
        }

    # -- Step bookkeeping --------------------------------------------------

    async def _run_step(
        self,
        report: RunReport,
        step: str,
        action: Callable[[], Awaitable[StepResult]],
    ) -> StepResult:
        """Run *action*, converting any exception into a failed result."""
        try:
            result = await action()
        except InitializerError as exc:
            result = StepResult(step=exc.step, status=StepStatus.FAILED, message=exc.message)
        except Exception as exc:
            result = StepResult(
                step=step,
                status=StepStatus.FAILED,
                message=f"{type(exc).__name__}: {exc}",
            )
        return self._record(report, result)

    @staticmethod
    def _record(report: RunReport, result: StepResult) -> StepResult:
        print_step(result)
        return report.add(result)

    @staticmethod
    def _finish(report: RunReport) -> RunReport:
        report.finished_at = datetime.now(timezone.utc).isoformat()
        return report


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


def build_manifest(project_name: str, config: Config) -> dict[str, Any]:
    """Return the ``package.json`` payload for *project_name*."""
    return {
        "name": project_name,
        "version": config.manifest_version,
        "scripts": {
            "start": config.start_script,
        },
    }
