"""Next-steps documentation generator.

Renders the follow-up guide shown after a successful run: syncing the
tokens with Tokens Studio for Figma, which file to paste each theme and
mode's colours into, and how to build and publish the package.  The text is
a pure function of the collected configuration.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from themekit.config import ScaffoldConfig
from themekit.scaffolder.templates import TemplateRenderer
from themekit.utils import console

_NEXT_STEPS_TEMPLATE = "next-steps.md.j2"


class NextStepsGenerator:
    """Renders the next-steps markdown and appends it to the README."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, config: ScaffoldConfig) -> str:
        """Render the next-steps markdown for *config*."""
        return self.renderer.render(_NEXT_STEPS_TEMPLATE, self._build_context(config))

    async def write(self, config: ScaffoldConfig, readme_path: str | Path) -> Path:
        """Append the rendered guide to *readme_path*, creating it if needed.

        Returns:
            The path of the README that was written.
        """
        output = Path(readme_path)
        content = self.render(config)
        await asyncio.to_thread(_append_text, output, content)
        console.print(f"[green]Next steps written to {output}[/green]")
        return output

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    @staticmethod
    def _build_context(config: ScaffoldConfig) -> dict[str, Any]:
        return {
            "target_dir": str(config.target_dir),
            "tokens_path": str(config.tokens_path),
            "package_name": config.package_name,
            "themes": list(config.themes),
            "modes": [mode.value for mode in config.modes],
            "combinations": [(theme, mode.value) for theme, mode in config.combinations()],
        }


def _append_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    separator = "\n" if existing and not existing.endswith("\n") else ""
    path.write_text(existing + separator + content, encoding="utf-8")
