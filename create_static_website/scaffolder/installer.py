"""Global installation of the companion dev server.

Maps each supported package manager to its global-install invocation and runs
the command through the host shell.  Failures are returned as a
``StepResult`` rather than raised.
"""

from __future__ import annotations

from ..models import PackageManager, StepResult, StepStatus
from ..utils import console, run_command

STEP_NAME = "install_companion"

# Package manager -> global install command template
INSTALL_COMMANDS: dict[PackageManager, str] = {
    PackageManager.NPM: "npm install -g {package}",
    PackageManager.YARN: "yarn global add {package}",
    PackageManager.PNPM: "pnpm add -g {package}",
}


def install_command(package_manager: PackageManager | str, package: str) -> str | None:
    """Return the shell command installing *package* globally, or ``None``.

    ``None`` means *package_manager* is not one of the supported managers.
    """
    try:
        manager = PackageManager(package_manager)
    except ValueError:
        return None
    return INSTALL_COMMANDS[manager].format(package=package)


class CompanionInstaller:
    """Installs the companion dev server with the chosen package manager."""

    def __init__(self, package: str, timeout: int = 300) -> None:
        self.package = package
        self.timeout = timeout

    async def install(self, package_manager: PackageManager | str) -> StepResult:
        """Run the global install command and report its outcome."""
        command = install_command(package_manager, self.package)
        if command is None:
            return StepResult(
                step=STEP_NAME,
                status=StepStatus.FAILED,
                message=f"⛔ Package manager not found: {package_manager}",
            )

        console.print(f"  Running [bold]{command}[/bold]")
        try:
            returncode, stdout, stderr = await run_command(command, timeout=self.timeout)
        except OSError as exc:
            return StepResult(
                step=STEP_NAME,
                status=StepStatus.FAILED,
                message=f"Could not start '{command}': {exc}",
            )

        if returncode != 0:
            detail = stderr or stdout or f"exit code {returncode}"
            return StepResult(
                step=STEP_NAME,
                status=StepStatus.FAILED,
                message=f"'{command}' failed: {detail}",
            )

        return StepResult(
            step=STEP_NAME,
            status=StepStatus.SUCCESS,
            message=f"Installed {self.package} with {command.split()[0]}",
        )
