"""Token matrix generation.

Takes a confirmed ``ScaffoldConfig`` and writes the target directory: the
static default files, one colour primitive pair per theme and mode, one
theme definition per theme, the Tokens Studio index documents, and the
configured ``package.json``.

Every filesystem call is awaited before the next one starts.  A failure
aborts the run with ``GenerationError``; files written before the failure
are left on disk.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Awaitable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, Field

from themekit.config import ScaffoldConfig, Settings
from themekit.utils import (
    dump_json,
    load_json,
    write_text_file,
)

from .directory import apply_disposition
from .templates import DEFAULT_THEME_PLACEHOLDER, THEME_PLACEHOLDER, substitute
from .token_sets import build_metadata, build_themes

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Errors and results
# ---------------------------------------------------------------------------


class GenerationError(Exception):
    """Raised when a generation step fails irrecoverably."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")


class GenerationResult(BaseModel):
    """Summary of a completed generation run."""

    target_dir: Path
    tokens_path: Path
    package_json: Path
    files: list[Path] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class TokenMatrixGenerator:
    """Writes the design-token tree for a confirmed configuration.

    Output layout under the tokens directory::

        primitives/colors/<mode>/global.json
        primitives/colors/<mode>/<theme>.json
        themes/<theme>.json
        $metadata.json
        $themes.json
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.written: list[Path] = []

    # -- Public API --------------------------------------------------------

    async def generate(self, config: ScaffoldConfig) -> GenerationResult:
        """Generate every file for *config*.

        Raises:
            GenerationError: If the configuration was not confirmed or a
                filesystem step fails.
        """
        if not config.proceed:
            raise GenerationError("confirm", "the configuration was not confirmed")

        self.written = []
        tokens = config.tokens_path

        # 1. Clean the target if that was the chosen disposition
        await self._step("clean", apply_disposition(config.disposition, config.target_dir))

        # 2. Static files
        await self._step("copy default files", self._copy_default_files(config.target_dir))

        # 3. Custom tokens folder name
        await self._step("move tokens directory", self._move_tokens_dir(config))

        # 4. themes/ folder
        await self._step("create themes directory", self._ensure_themes_dir(tokens))

        # 5. Theme x mode matrix
        for theme, theme_id in zip(config.themes, config.theme_ids):
            for mode, mode_id in zip(config.modes, config.mode_ids):
                await self._step(
                    f"colors for {theme} ({mode.value})",
                    self._write_mode_colors(tokens, theme_id, mode_id),
                )
            await self._step(f"theme {theme}", self._write_theme(tokens, theme_id))
            await self._step("token set index", self._write_token_set_index(tokens, config))

        # 6. package.json
        package_json = await self._step("package.json", self._write_package_json(config))

        return GenerationResult(
            target_dir=config.target_dir,
            tokens_path=tokens,
            package_json=package_json,
            files=list(self.written),
        )

    # -- Steps -------------------------------------------------------------

    async def _copy_default_files(self, target: Path) -> None:
        await asyncio.to_thread(
            shutil.copytree, self.settings.default_files_path, target, dirs_exist_ok=True
        )

    async def _move_tokens_dir(self, config: ScaffoldConfig) -> None:
        source = config.target_dir / self.settings.default_tokens_dir
        destination = config.tokens_path
        if source.resolve() == destination.resolve():
            return
        await asyncio.to_thread(_move_tree, source, destination)

    async def _ensure_themes_dir(self, tokens: Path) -> None:
        try:
            await asyncio.to_thread((tokens / "themes").mkdir)
        except FileExistsError:
            pass

    async def _write_mode_colors(self, tokens: Path, theme_id: str, mode_id: str) -> None:
        relative = Path("primitives") / "colors" / mode_id
        templates = self.settings.token_templates_path / relative
        out_dir = tokens / relative

        # Global colours are shared by every theme of the mode
        await asyncio.to_thread(_copy_file, templates / "global.json", out_dir / "global.json")
        self._record(out_dir / "global.json")

        template = await asyncio.to_thread(
            (templates / "theme-template.json").read_text, encoding="utf-8"
        )
        await self._write(
            out_dir / f"{theme_id}.json", substitute(template, THEME_PLACEHOLDER, theme_id)
        )

    async def _write_theme(self, tokens: Path, theme_id: str) -> None:
        template_path = self.settings.token_templates_path / "themes" / "theme-template.json"
        template = await asyncio.to_thread(template_path.read_text, encoding="utf-8")
        await self._write(
            tokens / "themes" / f"{theme_id}.json",
            substitute(template, THEME_PLACEHOLDER, theme_id),
        )

    async def _write_token_set_index(self, tokens: Path, config: ScaffoldConfig) -> None:
        await self._write(
            tokens / "$metadata.json", dump_json(build_metadata(config.modes, config.themes))
        )
        await self._write(
            tokens / "$themes.json", dump_json(build_themes(config.modes, config.themes))
        )

    async def _write_package_json(self, config: ScaffoldConfig) -> Path:
        template = await asyncio.to_thread(load_json, self.settings.package_template_path)
        package = configure_package_json(template, config.package_name, config.default_theme_id)
        path = config.target_dir / "package.json"
        await self._write(path, dump_json(package))
        return path

    # -- Helpers -----------------------------------------------------------

    async def _step(self, name: str, action: Awaitable[T]) -> T:
        try:
            return await action
        except (OSError, ValueError, KeyError) as exc:
            raise GenerationError(name, str(exc)) from exc

    async def _write(self, path: Path, content: str) -> None:
        await asyncio.to_thread(write_text_file, path, content)
        self._record(path)

    def _record(self, path: Path) -> None:
        if path not in self.written:
            self.written.append(path)


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def configure_package_json(
    template: dict[str, Any], package_name: str, default_theme_id: str
) -> dict[str, Any]:
    """Return a new package manifest with ``name`` and ``main`` configured.

    The template itself is left unchanged.

    Raises:
        KeyError: If the template has no ``main`` entry.
    """
    return {
        **template,
        "name": package_name,
        "main": substitute(template["main"], DEFAULT_THEME_PLACEHOLDER, default_theme_id),
    }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)


def _move_tree(source: Path, destination: Path) -> None:
    """Move the copied tokens folder, merging into an existing destination."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    if destination.exists():
        shutil.copytree(source, destination, dirs_exist_ok=True)
        shutil.rmtree(source)
    else:
        source.rename(destination)
