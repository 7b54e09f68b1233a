"""Pydantic v2 models for the project initializer.

Defines the validated answers collected by the question sequence and the
per-step outcome types aggregated into a run report.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Template(str, Enum):
    """Static templates bundled with the tool."""
    SIMPLE = "Simple"
    BOOTSTRAP = "Bootstrap"

    @property
    def folder(self) -> str:
        """Name of the directory holding the template tree."""
        return self.value.lower()


class PackageManager(str, Enum):
    """Package managers able to install the companion dev server."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class StepStatus(str, Enum):
    """Outcome of a single initializer step."""
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

class AnswerSet(BaseModel):
    """The validated result of the question sequence.

    Created once per run and never mutated. ``template`` and
    ``package_manager`` also accept arbitrary strings so that unknown values
    reach the initializer, which reports them instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(default="my-project", description="Manifest ``name`` field")
    target_dir: Path = Field(..., description="Directory the project is created in")
    author: str = Field(default="NO_AUTHOR", description="Recorded in the log file only")
    template: Union[Template, str] = Field(default=Template.SIMPLE, union_mode="left_to_right")
    use_servemon: bool = Field(default=True, description="Write servemon.config.js")
    install_servemon: bool = Field(default=False, description="Install servemon globally")
    package_manager: Union[PackageManager, str] = Field(
        default=PackageManager.NPM, union_mode="left_to_right"
    )

    @field_validator("project_name", "author")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @property
    def template_label(self) -> str:
        """The template name as the user saw it."""
        return self.template.value if isinstance(self.template, Template) else str(self.template)

    @property
    def package_manager_label(self) -> str:
        """The package manager name as the user saw it."""
        if isinstance(self.package_manager, PackageManager):
            return self.package_manager.value
        return str(self.package_manager)


# ---------------------------------------------------------------------------
# Step results
# ---------------------------------------------------------------------------

class StepResult(BaseModel):
    """Outcome of one initializer step."""

    step: str = Field(..., description="Step identifier, e.g. 'copy_template'")
    status: StepStatus = Field(..., description="success, skipped or failed")
    message: str = Field(default="", description="Human-readable detail")
    path: Optional[Path] = Field(default=None, description="File or directory the step produced")

    @computed_field  # type: ignore[misc]
    @property
    def failed(self) -> bool:
        """True when the step failed."""
        return self.status is StepStatus.FAILED


class RunReport(BaseModel):
    """Aggregated outcome of one initializer run."""

    target_dir: Path = Field(..., description="Directory the run targeted")
    steps: list[StepResult] = Field(default_factory=list)
    started_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO-8601 timestamp of when the run started",
    )
    finished_at: str = Field(default="", description="ISO-8601 timestamp of when the run ended")

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when no step failed."""
        return not any(step.failed for step in self.steps)

    def add(self, result: StepResult) -> StepResult:
        """Record *result* and return it."""
        self.steps.append(result)
        return result

    def get(self, step: str) -> Optional[StepResult]:
        """Return the result recorded for *step*, if any."""
        for result in self.steps:
            if result.step == step:
                return result
        return None

    def summary_dict(self) -> dict[str, Any]:
        """Return a condensed ``{step: status}`` mapping."""
        return {result.step: result.status.value for result in self.steps}
