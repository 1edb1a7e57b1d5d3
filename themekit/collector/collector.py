"""Interactive configuration collection.

``ConfigurationCollector`` asks the questions of a scaffolding run in a
fixed order, each one depending on the answers before it, and returns a
frozen ``ScaffoldConfig``.  Nothing here writes to disk: leaving the
collector early (exit choice, declined confirmation, interrupted prompt)
ends the run with the target directory exactly as it was.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from themekit.config import (
    OPTIONAL_MODES,
    DirectoryDisposition,
    Mode,
    ScaffoldConfig,
    Settings,
)
from themekit.scaffolder.directory import DirectoryStatus
from themekit.utils import (
    console,
    is_contained_path,
    ordinal,
    print_error,
    print_summary_table,
    print_warning,
    to_valid_package_name,
)

from .prompts import Choice, PromptCancelled, Prompter
from .validators import ThemeNameError, find_normalized_collisions, validate_theme_name

_DISPOSITION_CHOICES: list[Choice] = [
    Choice(
        title="Clean",
        value=DirectoryDisposition.CLEAN,
        description="Empty the directory and continue",
    ),
    Choice(
        title="Ignore",
        value=DirectoryDisposition.IGNORE,
        description="Keep directory as is. Files may be overwritten with new output.",
    ),
    Choice(
        title="Exit",
        value=DirectoryDisposition.EXIT,
        description="Exit without doing anything.",
    ),
]

_LIGHT_CHOICE = Choice(
    title=Mode.LIGHT.value,
    value=Mode.LIGHT,
    description="This is the default mode, and cannot be disabled",
)


# ---------------------------------------------------------------------------
# States and outcomes
# ---------------------------------------------------------------------------


class CollectorState(str, Enum):
    CHECK_DIRECTORY = "check_directory"
    ASK_DISPOSITION = "ask_disposition"
    ASK_PACKAGE_NAME = "ask_package_name"
    ASK_TOKEN_SETTINGS = "ask_token_settings"
    ASK_THEME_NAMES = "ask_theme_names"
    ASK_DEFAULT_THEME = "ask_default_theme"
    CONFIRM = "confirm"
    ABORTED = "aborted"
    DONE = "done"


class AbortReason(str, Enum):
    CANCELLED = "cancelled"
    EXIT = "exit"
    DECLINED = "declined"


class CollectionAborted(Exception):
    """Raised when the run ends before a configuration was confirmed."""

    def __init__(self, reason: AbortReason) -> None:
        self.reason = reason
        super().__init__(f"Configuration aborted: {reason.value}")


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class ConfigurationCollector:
    """Drives the question sequence for one run.

    Attributes:
        state: The state the collector is currently in.
        history: Every state entered so far, in order.
    """

    def __init__(
        self,
        prompter: Prompter,
        target_dir: str | Path,
        settings: Settings | None = None,
    ) -> None:
        self.prompter = prompter
        self.target_dir = Path(target_dir).resolve()
        self.settings = settings or Settings()
        self.state = CollectorState.CHECK_DIRECTORY
        self.history: list[CollectorState] = [self.state]

    @property
    def initial_package_name(self) -> str:
        return to_valid_package_name(self.target_dir.name)

    # -- Public API --------------------------------------------------------

    def collect(self, status: DirectoryStatus) -> ScaffoldConfig:
        """Ask every question and return the confirmed configuration.

        Args:
            status: Result of inspecting the target directory.  The
                disposition question is only asked for ``NON_EMPTY``.

        Raises:
            CollectionAborted: If the user picks "Exit", answers "no" to the
                final confirmation, or interrupts any prompt.
        """
        try:
            return self._run(status)
        except PromptCancelled:
            self._enter(CollectorState.ABORTED)
            raise CollectionAborted(AbortReason.CANCELLED) from None

    # -- State machine -----------------------------------------------------

    def _run(self, status: DirectoryStatus) -> ScaffoldConfig:
        disposition: DirectoryDisposition | None = None
        if not status.is_empty:
            self._enter(CollectorState.ASK_DISPOSITION)
            disposition = self.prompter.select(
                "Target directory is not empty. How should we proceed?",
                _DISPOSITION_CHOICES,
            )
            if disposition is DirectoryDisposition.EXIT:
                self._abort(AbortReason.EXIT)

        self._enter(CollectorState.ASK_PACKAGE_NAME)
        package_name = self._ask_package_name()

        self._enter(CollectorState.ASK_TOKEN_SETTINGS)
        theme_count = self.prompter.number(
            "How many themes do you want?", default=1, minimum=1
        )
        modes = self._ask_modes()
        tokens_dir = self._ask_tokens_dir()

        self._enter(CollectorState.ASK_THEME_NAMES)
        themes = self._ask_theme_names(theme_count)

        default_theme = themes[0]
        if len(themes) > 1:
            self._enter(CollectorState.ASK_DEFAULT_THEME)
            default_theme = self.prompter.select(
                "Select the default theme to export in package.json",
                [Choice(title=theme, value=theme) for theme in themes],
                default=0,
            )

        config = ScaffoldConfig(
            target_dir=self.target_dir,
            disposition=disposition,
            package_name=package_name,
            tokens_dir=tokens_dir,
            modes=tuple(modes),
            themes=tuple(themes),
            default_theme=default_theme,
        )

        self._enter(CollectorState.CONFIRM)
        self._print_summary(config)
        if not self.prompter.confirm("Proceed?", default=config.confirm_default):
            self._abort(AbortReason.DECLINED)

        self._enter(CollectorState.DONE)
        return config.model_copy(update={"proceed": True})

    def _ask_package_name(self) -> str:
        def _validate(value: str) -> str | None:
            if not to_valid_package_name(value).strip("-"):
                return "Package name must contain at least one letter or number."
            return None

        raw = self.prompter.text(
            "Enter a package name (for package.json)",
            default=self.initial_package_name,
            validate=_validate,
        )
        return to_valid_package_name(raw)

    def _ask_tokens_dir(self) -> str:
        def _validate(value: str) -> str | None:
            if value.strip() and not is_contained_path(value):
                return "Tokens path must be a relative path inside the target directory."
            return None

        answer = self.prompter.text(
            "Enter the desired path for the design tokens",
            default=self.settings.default_tokens_dir,
            validate=_validate,
        )
        return answer.strip() or self.settings.default_tokens_dir

    def _ask_modes(self) -> list[Mode]:
        selected = self.prompter.multiselect(
            "Which color modes do you want?",
            [Choice(title=mode.value, value=mode) for mode in OPTIONAL_MODES],
            pinned=[_LIGHT_CHOICE],
        )
        # Light first, then the optional modes in presentation order.
        return [Mode.LIGHT] + [mode for mode in OPTIONAL_MODES if mode in selected]

    def _ask_theme_names(self, count: int) -> list[str]:
        themes: list[str] = []
        policy = self.settings.name_policy

        def _validate(value: str) -> str | None:
            try:
                validate_theme_name(themes, value, policy)
            except ThemeNameError as exc:
                return str(exc)
            return None

        for n in range(1, count + 1):
            answer = self.prompter.text(
                f"Enter the name of the {ordinal(n)} theme", validate=_validate
            )
            themes.append(validate_theme_name(themes, answer, policy))
        return themes

    def _print_summary(self, config: ScaffoldConfig) -> None:
        console.print()
        print_summary_table(
            {
                "Package name": config.package_name,
                "Directory": str(config.target_dir),
                "Tokens directory": str(config.tokens_path),
                "Themes": ", ".join(config.themes),
                "Default theme": config.default_theme,
                "Color modes": ", ".join(mode.value for mode in config.modes),
            },
            title="Will now create the following",
        )
        if config.disposition is DirectoryDisposition.CLEAN:
            print_error(f"Warning: Contents of {config.target_dir} will be deleted")
        elif config.disposition is DirectoryDisposition.IGNORE:
            print_warning(f"Warning: Existing files in {config.target_dir} may be overwritten")

        for ident, names in find_normalized_collisions(config.themes).items():
            print_warning(
                f"Warning: Themes {', '.join(names)} all map to '{ident}' "
                "and will overwrite each other's files"
            )

    # -- Helpers -----------------------------------------------------------

    def _enter(self, state: CollectorState) -> None:
        self.state = state
        self.history.append(state)

    def _abort(self, reason: AbortReason) -> None:
        self._enter(CollectorState.ABORTED)
        raise CollectionAborted(reason)
