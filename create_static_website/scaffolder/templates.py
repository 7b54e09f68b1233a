"""Jinja2 template rendering for the generated project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``scaffolder/templates/`` directory and renders them with answer-specific
context data.  Only the small generated text files (the log block and the
servemon config) are rendered; static site templates are copied verbatim.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project initialization.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  A missing context variable raises instead of
    rendering an empty string.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["js_bool"] = _js_bool_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"log_entry.txt.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write (overwrite) the result to *output_path*."""
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def append_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and append the result to *output_path*.

        The file is created when missing; its parent directory must already
        exist.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_append_file, out, content)
        return out

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template names."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            str(p.relative_to(self.template_dir))
            for p in self.template_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _js_bool_filter(value: Any) -> str:
    """Render a Python truthy value as a JavaScript boolean literal."""
    return "true" if value else "false"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: write content, replacing any existing file."""
    path.write_text(content, encoding="utf-8")


def _append_file(path: Path, content: str) -> None:
    """Synchronous helper: append content to the end of the file."""
    with path.open("a", encoding="utf-8") as handle:
        handle.write(content)
