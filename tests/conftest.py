"""Shared pytest fixtures for the themekit test suite.

Provides reusable fixtures for:
- Temporary target directories (absent, empty, non-empty)
- A scripted ``Prompter`` that replays canned answers
- Tool settings pointing at the bundled templates
- Confirmed ``ScaffoldConfig`` factories
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from themekit.collector.prompts import Choice
from themekit.config import DirectoryDisposition, Mode, ScaffoldConfig, Settings


# ---------------------------------------------------------------------------
# Scripted prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Replays a fixed list of answers, one per question asked.

    ``None`` as an answer means "press enter" and yields the question's
    default.  An exception instance as an answer is raised instead, which
    is how tests simulate an interrupted prompt.  Text answers go through
    the question's validator exactly like the terminal prompter: a rejected
    answer is recorded in ``errors`` and the next answer is used for the
    same question.
    """

    def __init__(self, answers: Sequence[Any]) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str]] = []
        self.errors: list[str] = []
        self.confirm_defaults: list[bool] = []

    def _next(self, kind: str, message: str) -> Any:
        self.calls.append((kind, message))
        if not self.answers:
            raise AssertionError(f"No scripted answer left for {kind} prompt: {message}")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.calls]

    def text(self, message, default=None, validate=None):
        while True:
            value = self._next("text", message)
            if value is None:
                value = default if default is not None else ""
            error = validate(value) if validate else None
            if error is None:
                return value
            self.errors.append(error)

    def number(self, message, default=1, minimum=1):
        value = self._next("number", message)
        return default if value is None else value

    def select(self, message, choices: Sequence[Choice], default=0):
        value = self._next("select", message)
        return choices[default].value if value is None else value

    def multiselect(self, message, choices: Sequence[Choice], pinned: Sequence[Choice] = ()):
        value = self._next("multiselect", message)
        return [choice.value for choice in pinned] + list(value or [])

    def confirm(self, message, default):
        self.confirm_defaults.append(default)
        value = self._next("confirm", message)
        return default if value is None else value


@pytest.fixture
def make_prompter() -> Callable[..., ScriptedPrompter]:
    """Factory for ``ScriptedPrompter`` instances."""

    def _make(*answers: Any) -> ScriptedPrompter:
        return ScriptedPrompter(answers)

    return _make


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def absent_dir(tmp_path: Path) -> Path:
    """A target directory that does not exist yet."""
    return tmp_path / "absent" / "my-tokens"


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    """An existing, empty target directory."""
    target = tmp_path / "empty" / "my-tokens"
    target.mkdir(parents=True)
    return target


@pytest.fixture
def non_empty_dir(tmp_path: Path) -> Path:
    """A target directory that already holds a user file."""
    target = tmp_path / "non-empty" / "my-tokens"
    target.mkdir(parents=True)
    (target / "notes.txt").write_text("keep me?\n", encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Settings & configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Default settings using the bundled templates."""
    return Settings()


@pytest.fixture
def make_config(empty_dir: Path) -> Callable[..., ScaffoldConfig]:
    """Factory for confirmed configurations targeting ``empty_dir``."""

    def _make(
        themes: Sequence[str] = ("Alpha", "Beta"),
        modes: Sequence[Mode] = (Mode.LIGHT, Mode.DARK),
        default_theme: str | None = None,
        disposition: DirectoryDisposition | None = None,
        tokens_dir: str = "design-tokens",
        target_dir: Path | None = None,
        proceed: bool = True,
    ) -> ScaffoldConfig:
        return ScaffoldConfig(
            target_dir=target_dir or empty_dir,
            disposition=disposition,
            package_name="my-tokens",
            tokens_dir=tokens_dir,
            modes=tuple(modes),
            themes=tuple(themes),
            default_theme=default_theme or themes[0],
            proceed=proceed,
        )

    return _make
