"""themekit configuration.

Typed configuration for a scaffolding run.  ``Settings`` holds the tunables
of the tool itself (template locations, defaults, naming policy) and can be
built from environment variables.  ``ScaffoldConfig`` is the record the
interactive collector produces: it is frozen, validated at construction
time, and read-only for the rest of the run.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from themekit.utils import is_contained_path, normalize_token_set_name

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Mode(str, Enum):
    """Colour modes applied across every theme."""

    LIGHT = "Light"
    DARK = "Dark"
    CONTRAST = "Contrast"


# Light is always generated; these are offered as opt-in, in this order.
OPTIONAL_MODES: tuple[Mode, ...] = (Mode.DARK, Mode.CONTRAST)


class DirectoryDisposition(str, Enum):
    """What to do with a target directory that already has content."""

    CLEAN = "clean"
    IGNORE = "ignore"
    EXIT = "exit"


class ThemeNamePolicy(str, Enum):
    """Character policy applied to every theme name in a run."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Tool-level settings.

    Instances are created once by the CLI entry point and passed to the
    collector and the generator.
    """

    template_dir: Path = Field(default=_DEFAULT_TEMPLATE_DIR)
    default_tokens_dir: str = Field(
        default="design-tokens",
        min_length=1,
        description="Tokens folder name inside the default-files tree",
    )
    name_policy: ThemeNamePolicy = Field(default=ThemeNamePolicy.STRICT)
    write_readme: bool = Field(
        default=True, description="Append the next steps to the generated README"
    )
    readme_name: str = Field(default="README.md")

    @field_validator("default_tokens_dir")
    @classmethod
    def _check_tokens_dir(cls, value: str) -> str:
        if not is_contained_path(value):
            raise ValueError("default_tokens_dir must be a relative path")
        return value

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def default_files_path(self) -> Path:
        """Static tree copied verbatim into every target directory."""
        return self.template_dir / "default-files"

    @property
    def token_templates_path(self) -> Path:
        """Per-mode colour files and the theme-definition template."""
        return self.template_dir / "design-tokens"

    @property
    def package_template_path(self) -> Path:
        """The ``package.json`` template with its two placeholders."""
        return self.template_dir / "package.json"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            THEMEKIT_TEMPLATE_DIR, THEMEKIT_TOKENS_DIR, THEMEKIT_NAME_POLICY,
            THEMEKIT_WRITE_README.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("THEMEKIT_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["THEMEKIT_TEMPLATE_DIR"])
        if os.environ.get("THEMEKIT_TOKENS_DIR"):
            kwargs["default_tokens_dir"] = os.environ["THEMEKIT_TOKENS_DIR"]
        if os.environ.get("THEMEKIT_NAME_POLICY"):
            kwargs["name_policy"] = ThemeNamePolicy(
                os.environ["THEMEKIT_NAME_POLICY"].strip().lower()
            )
        if os.environ.get("THEMEKIT_WRITE_README"):
            kwargs["write_readme"] = os.environ["THEMEKIT_WRITE_README"].strip().lower() in (
                "1",
                "true",
                "yes",
            )
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Collected configuration
# ---------------------------------------------------------------------------


class ScaffoldConfig(BaseModel):
    """The configuration collected for one scaffolding run.

    ``disposition`` is ``None`` when the target directory was absent or
    empty, in which case no disposition question was asked.
    """

    model_config = ConfigDict(frozen=True)

    target_dir: Path
    disposition: DirectoryDisposition | None = None
    package_name: str = Field(..., min_length=1)
    tokens_dir: str = Field(default="design-tokens", min_length=1)
    modes: tuple[Mode, ...] = Field(default=(Mode.LIGHT,))
    themes: tuple[str, ...]
    default_theme: str
    proceed: bool = False

    @model_validator(mode="after")
    def _check_invariants(self) -> "ScaffoldConfig":
        if not self.modes or self.modes[0] is not Mode.LIGHT:
            raise ValueError("Light must be the first mode")
        if len(set(self.modes)) != len(self.modes):
            raise ValueError("Modes must be unique")
        if not self.themes:
            raise ValueError("At least one theme is required")
        if any(not theme.strip() for theme in self.themes):
            raise ValueError("Theme names cannot be empty")
        if any(not normalize_token_set_name(theme) for theme in self.themes):
            raise ValueError("Theme names must contain at least one letter or number")
        if len(set(self.themes)) != len(self.themes):
            raise ValueError("Theme names must be unique")
        if self.default_theme not in self.themes:
            raise ValueError(f"Default theme {self.default_theme!r} is not one of the themes")
        if not is_contained_path(self.tokens_dir):
            raise ValueError(
                f"Tokens directory {self.tokens_dir!r} must be a relative path inside the target"
            )
        if self.disposition is DirectoryDisposition.EXIT:
            raise ValueError("An exit disposition cannot be scaffolded")
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def tokens_path(self) -> Path:
        return self.target_dir / self.tokens_dir

    @property
    def theme_ids(self) -> list[str]:
        return [normalize_token_set_name(theme) for theme in self.themes]

    @property
    def mode_ids(self) -> list[str]:
        return [normalize_token_set_name(mode.value) for mode in self.modes]

    @property
    def default_theme_id(self) -> str:
        return normalize_token_set_name(self.default_theme)

    @property
    def confirm_default(self) -> bool:
        """Default answer of the final confirmation prompt.

        Only an empty or missing target directory defaults to "yes"; an
        explicit clean/ignore choice must be acknowledged deliberately.
        """
        return self.disposition is None

    def combinations(self) -> list[tuple[str, Mode]]:
        """Every (theme, mode) pair, theme-major, in configured order."""
        return [(theme, mode) for theme in self.themes for mode in self.modes]
