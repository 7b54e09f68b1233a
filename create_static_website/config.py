"""create-static-website configuration.

Centralised, typed configuration for the project initializer. All settings use
Pydantic v2 models so they can be validated at construction time and built
from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_PACKAGE_DIR = Path(__file__).parent

DEFAULT_SITES_DIR = _PACKAGE_DIR / "sites"

_FALSE_VALUES = {"0", "false", "no", "off"}


class ServemonConfig(BaseModel):
    """Settings written into the generated ``servemon.config.js``."""

    port: int = Field(default=3000, ge=1, le=65535)
    directory: str = Field(default="./")
    watch: bool = Field(default=True)


class Config(BaseModel):
    """Global create-static-website configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the question sequence and the ``ProjectInitializer``.
    """

    sites_dir: Path = Field(
        default=DEFAULT_SITES_DIR,
        description="Directory holding one sub-directory per static template",
    )
    log_filename: str = Field(default="log.txt")
    servemon_config_filename: str = Field(default="servemon.config.js")
    manifest_version: str = Field(default="0.0.1")
    start_script: str = Field(default="servemon dev")
    companion_package: str = Field(default="servemon")
    servemon: ServemonConfig = Field(default_factory=ServemonConfig)

    # Whether the install questions and step are part of the flow.
    ask_install: bool = Field(default=True)
    install_timeout: int = Field(
        default=300, ge=10, description="Installer process timeout in seconds"
    )

    def site_path(self, folder: str) -> Path:
        """Return the source directory of the static template *folder*."""
        return self.sites_dir / folder

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CSW_SITES_DIR, CSW_LOG_FILENAME, CSW_ASK_INSTALL,
            CSW_INSTALL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CSW_SITES_DIR"):
            kwargs["sites_dir"] = Path(os.environ["CSW_SITES_DIR"])
        if os.environ.get("CSW_LOG_FILENAME"):
            kwargs["log_filename"] = os.environ["CSW_LOG_FILENAME"]
        if os.environ.get("CSW_ASK_INSTALL"):
            kwargs["ask_install"] = (
                os.environ["CSW_ASK_INSTALL"].strip().lower() not in _FALSE_VALUES
            )
        if os.environ.get("CSW_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["CSW_INSTALL_TIMEOUT"])
        return cls(**kwargs)
