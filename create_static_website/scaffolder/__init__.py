"""create-static-website scaffolder -- materializes a new static website project.

Quick usage::

    from create_static_website.models import AnswerSet
    from create_static_website.scaffolder import ProjectInitializer

    answers = AnswerSet(project_name="my-site", target_dir="/tmp/my-site")
    report = await ProjectInitializer().run(answers)
"""

from .generator import InitializerError, ProjectInitializer, build_manifest
from .installer import CompanionInstaller, install_command
from .templates import TemplateRenderer

__all__ = [
    "CompanionInstaller",
    "InitializerError",
    "ProjectInitializer",
    "TemplateRenderer",
    "build_manifest",
    "install_command",
]
