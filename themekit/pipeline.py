"""themekit command line orchestrator.

Runs one scaffolding session:

1. INSPECT  -- classify the target directory (read-only).
2. COLLECT  -- ask for package name, themes, modes and tokens path, then
               confirm.  Leaving early writes nothing.
3. GENERATE -- apply the directory disposition and write the token tree
               and package.json.
4. DOCUMENT -- append next steps to the README and print them.

Usage::

    themekit ./my-theme
    python -m themekit ./my-theme --name-policy permissive
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markdown import Markdown
from rich.markup import escape

from themekit.collector import (
    AbortReason,
    CollectionAborted,
    ConfigurationCollector,
    Prompter,
    RichPrompter,
)
from themekit.config import ScaffoldConfig, Settings, ThemeNamePolicy
from themekit.reporter import NextStepsGenerator
from themekit.scaffolder import (
    GenerationError,
    GenerationResult,
    TemplateRenderer,
    TokenMatrixGenerator,
    inspect_directory,
)
from themekit.utils import console, print_error, print_success


class ThemeKitPipeline:
    """Drives a scaffolding session from inspection to next steps.

    Attributes:
        settings: Tool settings shared by every stage.
        prompter: Question/answer collaborator used by the collector.
    """

    def __init__(self, settings: Settings | None = None, prompter: Prompter | None = None) -> None:
        self.settings = settings or Settings()
        self.prompter = prompter or RichPrompter(console)
        self.generator = TokenMatrixGenerator(self.settings)
        self.next_steps = NextStepsGenerator(TemplateRenderer(self.settings.template_dir))

    def run(self, target_dir: str | Path) -> int:
        """Run the session and return the process exit code."""
        target = Path(target_dir).resolve()
        console.print()

        status = inspect_directory(target)
        collector = ConfigurationCollector(self.prompter, target, self.settings)
        try:
            config = collector.collect(status)
        except CollectionAborted as exc:
            if exc.reason is AbortReason.CANCELLED:
                console.print("[red]✖[/red] Operation cancelled")
            return 0

        try:
            asyncio.run(self.generate(config))
        except GenerationError as exc:
            print_error(f"Generation failed -- {escape(str(exc))}")
            return 1
        return 0

    async def generate(self, config: ScaffoldConfig) -> GenerationResult:
        """Write the token tree for a confirmed *config* and document it."""
        result = await self.generator.generate(config)
        print_success(f"🎉 Files successfully generated in {result.target_dir}")

        if self.settings.write_readme:
            readme = config.target_dir / self.settings.readme_name
            try:
                await self.next_steps.write(config, readme)
            except OSError as exc:
                raise GenerationError("README", str(exc)) from exc

        console.print()
        console.print(Markdown(self.next_steps.render(config)))
        return result


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="themekit",
        description="Create a design-token package with one token set per theme and color mode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  themekit\n"
            "  themekit ./my-theme\n"
            "  themekit ./my-theme --name-policy permissive --no-readme\n"
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target directory, relative to the current directory (default: .)",
    )
    parser.add_argument(
        "--name-policy",
        choices=[policy.value for policy in ThemeNamePolicy],
        default=None,
        help="Allowed characters in theme names (default: strict)",
    )
    parser.add_argument(
        "--no-readme",
        action="store_true",
        help="Do not append the next steps to the generated README",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``themekit`` and ``python -m themekit``."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Invalid environment settings -- {escape(str(exc))}")
        sys.exit(2)
    if args.name_policy:
        settings = settings.model_copy(update={"name_policy": ThemeNamePolicy(args.name_policy)})
    if args.no_readme:
        settings = settings.model_copy(update={"write_readme": False})

    target = Path.cwd() / args.target
    sys.exit(ThemeKitPipeline(settings).run(target))


if __name__ == "__main__":
    main()
