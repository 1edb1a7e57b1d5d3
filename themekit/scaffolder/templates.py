"""Template handling for theme scaffolding.

Two mechanisms live here.  Token templates are plain JSON documents with a
fixed placeholder (``<theme>``) that is replaced literally; ``substitute``
does that.  Documentation is rendered with Jinja2 through
``TemplateRenderer``, which loads ``.j2`` files from the bundled
``templates/`` directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from themekit.utils import normalize_token_set_name

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

THEME_PLACEHOLDER = "<theme>"
DEFAULT_THEME_PLACEHOLDER = "<default-theme>"


def substitute(template: str, placeholder: str, value: str) -> str:
    """Replace every occurrence of *placeholder* in *template* with *value*."""
    return template.replace(placeholder, value)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generated documentation.

    Templates are rendered with a context dictionary built from the
    collected configuration (themes, modes, package name, paths).
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["token_set_name"] = normalize_token_set_name

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"next-steps.md.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)
