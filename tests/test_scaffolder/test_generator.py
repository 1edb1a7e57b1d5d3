"""Tests for the token matrix generator.

Covers:
- The exact file set produced for a theme x mode matrix
- Placeholder substitution in colour and theme files
- package.json name and main entry
- Custom and nested token directories, including merges
- Clean / ignore dispositions
- Failure reporting through GenerationError
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from themekit.config import DirectoryDisposition, Mode, Settings
from themekit.scaffolder.generator import (
    GenerationError,
    GenerationResult,
    TokenMatrixGenerator,
    configure_package_json,
)

pytestmark = pytest.mark.unit


def _relative_files(root: Path) -> set[str]:
    return {path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()}


def _read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


_STATIC_FILES = {
    "README.md",
    "design-tokens/Figma/components.json",
    "design-tokens/primitives/globals.json",
    "design-tokens/primitives/size/default.json",
    "design-tokens/primitives/typography/default.json",
    "design-tokens/semantic/color.json",
    "design-tokens/semantic/style.json",
}


# ---------------------------------------------------------------------------
# File set
# ---------------------------------------------------------------------------


class TestFileSet:
    async def test_two_themes_two_modes(self, make_config, empty_dir):
        config = make_config(themes=("Alpha", "Beta"), modes=(Mode.LIGHT, Mode.DARK))

        await TokenMatrixGenerator().generate(config)

        assert _relative_files(empty_dir) == _STATIC_FILES | {
            "package.json",
            "design-tokens/$metadata.json",
            "design-tokens/$themes.json",
            "design-tokens/primitives/colors/light/global.json",
            "design-tokens/primitives/colors/light/alpha.json",
            "design-tokens/primitives/colors/light/beta.json",
            "design-tokens/primitives/colors/dark/global.json",
            "design-tokens/primitives/colors/dark/alpha.json",
            "design-tokens/primitives/colors/dark/beta.json",
            "design-tokens/themes/alpha.json",
            "design-tokens/themes/beta.json",
        }
        documents = _read_json(empty_dir / "design-tokens" / "$themes.json")
        assert [d["name"] for d in documents if d["group"] == "Mode"] == ["Light", "Dark"]
        assert [d["name"] for d in documents if d["group"] == "Theme"] == ["Alpha", "Beta"]

    async def test_unselected_modes_not_written(self, make_config, empty_dir):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT, Mode.CONTRAST))

        await TokenMatrixGenerator().generate(config)

        colors = empty_dir / "design-tokens" / "primitives" / "colors"
        assert sorted(p.name for p in colors.iterdir()) == ["contrast", "light"]
        assert not (colors / "dark").exists()

    async def test_theme_file_names_are_normalized(self, make_config, empty_dir):
        config = make_config(themes=("Ocean Blue", "darkForest"), modes=(Mode.LIGHT,))

        await TokenMatrixGenerator().generate(config)

        themes = empty_dir / "design-tokens" / "themes"
        assert sorted(p.name for p in themes.iterdir()) == ["dark-forest.json", "ocean-blue.json"]

    async def test_creates_absent_target(self, make_config, absent_dir):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT,), target_dir=absent_dir)

        await TokenMatrixGenerator().generate(config)

        assert (absent_dir / "package.json").is_file()
        assert (absent_dir / "design-tokens" / "themes" / "alpha.json").is_file()

    async def test_result(self, make_config, empty_dir):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT,))

        result = await TokenMatrixGenerator().generate(config)

        assert isinstance(result, GenerationResult)
        assert result.package_json == config.target_dir / "package.json"
        assert result.tokens_path == config.tokens_path
        tokens = config.tokens_path
        assert set(result.files) == {
            tokens / "primitives" / "colors" / "light" / "global.json",
            tokens / "primitives" / "colors" / "light" / "alpha.json",
            tokens / "themes" / "alpha.json",
            tokens / "$metadata.json",
            tokens / "$themes.json",
            result.package_json,
        }


# ---------------------------------------------------------------------------
# File contents
# ---------------------------------------------------------------------------


class TestContents:
    async def test_color_primitive_substitutes_theme_id(self, make_config, empty_dir):
        config = make_config(themes=("Ocean Blue",), modes=(Mode.LIGHT,))

        await TokenMatrixGenerator().generate(config)

        path = empty_dir / "design-tokens" / "primitives" / "colors" / "light" / "ocean-blue.json"
        document = _read_json(path)
        assert list(document) == ["ocean-blue"]
        assert "<theme>" not in path.read_text(encoding="utf-8")

    async def test_theme_file_references_its_colors(self, make_config, empty_dir):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT,))

        await TokenMatrixGenerator().generate(config)

        document = _read_json(empty_dir / "design-tokens" / "themes" / "alpha.json")
        assert document["theme"]["accent"]["1"]["value"] == "{alpha.accent.1}"

    async def test_global_colors_copied_verbatim(self, make_config, empty_dir, settings):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT, Mode.DARK))

        await TokenMatrixGenerator(settings).generate(config)

        source = settings.token_templates_path / "primitives" / "colors" / "dark" / "global.json"
        copied = empty_dir / "design-tokens" / "primitives" / "colors" / "dark" / "global.json"
        assert copied.read_bytes() == source.read_bytes()

    async def test_index_documents_cover_every_theme(self, make_config, empty_dir):
        config = make_config(themes=("Alpha", "Beta"), modes=(Mode.LIGHT,))

        await TokenMatrixGenerator().generate(config)

        tokens = empty_dir / "design-tokens"
        order = _read_json(tokens / "$metadata.json")["tokenSetOrder"]
        assert "themes/alpha" in order and "themes/beta" in order
        names = [doc["name"] for doc in _read_json(tokens / "$themes.json")]
        assert names == ["Light", "Alpha", "Beta", "Semantic", "Default"]

    async def test_package_json(self, make_config, empty_dir):
        config = make_config(themes=("Alpha", "Beta"), default_theme="Beta")

        await TokenMatrixGenerator().generate(config)

        package = _read_json(empty_dir / "package.json")
        assert package["name"] == "my-tokens"
        assert package["main"] == "dist/beta.css"
        assert package["version"] == "0.0.1"


# ---------------------------------------------------------------------------
# Tokens directory
# ---------------------------------------------------------------------------


class TestTokensDirectory:
    async def test_custom_tokens_dir(self, make_config, empty_dir):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT,), tokens_dir="tokens")

        await TokenMatrixGenerator().generate(config)

        assert not (empty_dir / "design-tokens").exists()
        assert (empty_dir / "tokens" / "semantic" / "color.json").is_file()
        assert (empty_dir / "tokens" / "themes" / "alpha.json").is_file()
        assert (empty_dir / "tokens" / "$metadata.json").is_file()

    async def test_nested_tokens_dir(self, make_config, empty_dir):
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT,), tokens_dir="src/tokens")

        await TokenMatrixGenerator().generate(config)

        tokens = empty_dir / "src" / "tokens"
        assert (tokens / "primitives" / "colors" / "light" / "alpha.json").is_file()
        assert not (empty_dir / "design-tokens").exists()

    async def test_merges_into_existing_tokens_dir(self, make_config, non_empty_dir):
        existing = non_empty_dir / "tokens"
        existing.mkdir()
        (existing / "custom.json").write_text("{}", encoding="utf-8")
        config = make_config(
            themes=("Alpha",),
            modes=(Mode.LIGHT,),
            tokens_dir="tokens",
            target_dir=non_empty_dir,
            disposition=DirectoryDisposition.IGNORE,
        )

        await TokenMatrixGenerator().generate(config)

        assert (existing / "custom.json").is_file()
        assert (existing / "semantic" / "style.json").is_file()
        assert not (non_empty_dir / "design-tokens").exists()

    async def test_settings_default_tokens_dir(self, make_config, empty_dir, tmp_path):
        template_dir = tmp_path / "templates"
        shutil.copytree(Settings().template_dir, template_dir)
        shutil.move(
            template_dir / "default-files" / "design-tokens",
            template_dir / "default-files" / "tokens",
        )
        settings = Settings(template_dir=template_dir, default_tokens_dir="tokens")
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT,), tokens_dir="tokens")

        await TokenMatrixGenerator(settings).generate(config)

        assert (empty_dir / "tokens" / "themes" / "alpha.json").is_file()


# ---------------------------------------------------------------------------
# Dispositions and repeat runs
# ---------------------------------------------------------------------------


class TestDispositions:
    async def test_clean_removes_existing_files(self, make_config, non_empty_dir):
        config = make_config(target_dir=non_empty_dir, disposition=DirectoryDisposition.CLEAN)

        await TokenMatrixGenerator().generate(config)

        assert not (non_empty_dir / "notes.txt").exists()
        assert (non_empty_dir / "package.json").is_file()

    async def test_ignore_keeps_existing_files(self, make_config, non_empty_dir):
        config = make_config(target_dir=non_empty_dir, disposition=DirectoryDisposition.IGNORE)

        await TokenMatrixGenerator().generate(config)

        assert (non_empty_dir / "notes.txt").read_text(encoding="utf-8") == "keep me?\n"
        assert (non_empty_dir / "package.json").is_file()

    async def test_ignore_overwrites_generated_paths(self, make_config, non_empty_dir):
        (non_empty_dir / "package.json").write_text('{"name": "old"}', encoding="utf-8")
        config = make_config(target_dir=non_empty_dir, disposition=DirectoryDisposition.IGNORE)

        await TokenMatrixGenerator().generate(config)

        assert _read_json(non_empty_dir / "package.json")["name"] == "my-tokens"

    async def test_second_run_succeeds(self, make_config, empty_dir):
        config = make_config()
        generator = TokenMatrixGenerator()

        await generator.generate(config)
        first = _relative_files(empty_dir)
        await generator.generate(config)

        assert _relative_files(empty_dir) == first

    async def test_second_run_with_custom_tokens_dir(self, make_config, empty_dir):
        config = make_config(tokens_dir="tokens")
        generator = TokenMatrixGenerator()

        await generator.generate(config)
        await generator.generate(config)

        assert not (empty_dir / "design-tokens").exists()
        assert (empty_dir / "tokens" / "themes" / "beta.json").is_file()


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_unconfirmed_config_rejected(self, make_config, empty_dir):
        config = make_config(proceed=False)

        with pytest.raises(GenerationError) as exc_info:
            await TokenMatrixGenerator().generate(config)

        assert exc_info.value.step == "confirm"
        assert list(empty_dir.iterdir()) == []

    async def test_missing_template_reports_step(self, make_config, empty_dir, tmp_path):
        template_dir = tmp_path / "templates"
        shutil.copytree(Settings().template_dir, template_dir)
        (template_dir / "design-tokens" / "primitives" / "colors" / "dark" / "theme-template.json").unlink()
        settings = Settings(template_dir=template_dir)
        config = make_config(themes=("Alpha",), modes=(Mode.LIGHT, Mode.DARK))

        with pytest.raises(GenerationError) as exc_info:
            await TokenMatrixGenerator(settings).generate(config)

        assert exc_info.value.step == "colors for Alpha (Dark)"
        assert str(exc_info.value).startswith("colors for Alpha (Dark): ")
        # Files written before the failure stay on disk
        assert (empty_dir / "design-tokens" / "primitives" / "colors" / "light" / "alpha.json").is_file()
        assert not (empty_dir / "package.json").exists()

    async def test_missing_default_files(self, make_config, tmp_path):
        settings = Settings(template_dir=tmp_path / "nowhere")

        with pytest.raises(GenerationError) as exc_info:
            await TokenMatrixGenerator(settings).generate(make_config())

        assert exc_info.value.step == "copy default files"


# ---------------------------------------------------------------------------
# configure_package_json
# ---------------------------------------------------------------------------


class TestConfigurePackageJson:
    def test_sets_name_and_main(self):
        template = {"name": "<package-name>", "main": "dist/<default-theme>.css", "version": "1"}

        result = configure_package_json(template, "tokens", "ocean-blue")

        assert result == {"name": "tokens", "main": "dist/ocean-blue.css", "version": "1"}

    def test_template_unchanged(self):
        template = {"name": "<package-name>", "main": "dist/<default-theme>.css"}

        configure_package_json(template, "tokens", "alpha")

        assert template["main"] == "dist/<default-theme>.css"

    def test_missing_main(self):
        with pytest.raises(KeyError):
            configure_package_json({"name": "x"}, "tokens", "alpha")
