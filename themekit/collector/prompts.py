"""Terminal question/answer layer.

The collector talks to a ``Prompter``: an object that asks one typed
question at a time and blocks until it has an answer.  ``RichPrompter`` is
the terminal implementation built on ``rich.prompt``; tests drive the
collector with a scripted prompter instead.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from pydantic import BaseModel, Field
from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from themekit.utils import console as default_console

Validator = Callable[[str], str | None]


class PromptCancelled(Exception):
    """Raised when the user interrupts a prompt."""


class Choice(BaseModel):
    """One option of a select or multiselect question."""

    title: str
    value: Any
    description: str = Field(default="")


class Prompter(Protocol):
    """Asks one question at a time.

    Every method blocks until the user answers and raises
    ``PromptCancelled`` if the question is interrupted.
    """

    def text(
        self, message: str, default: str | None = None, validate: Validator | None = None
    ) -> str: ...

    def number(self, message: str, default: int = 1, minimum: int = 1) -> int: ...

    def select(self, message: str, choices: Sequence[Choice], default: int = 0) -> Any: ...

    def multiselect(
        self,
        message: str,
        choices: Sequence[Choice],
        pinned: Sequence[Choice] = (),
    ) -> list[Any]: ...

    def confirm(self, message: str, default: bool) -> bool: ...


# ---------------------------------------------------------------------------
# Rich implementation
# ---------------------------------------------------------------------------


class RichPrompter:
    """``Prompter`` backed by ``rich.prompt``.

    Select questions are shown as a numbered list and answered by number.
    Multiselect questions accept a comma-separated list of numbers; pinned
    choices are always part of the answer and cannot be deselected.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def text(
        self, message: str, default: str | None = None, validate: Validator | None = None
    ) -> str:
        while True:
            if default is None:
                value = self._ask(Prompt.ask, message, console=self.console)
            else:
                value = self._ask(Prompt.ask, message, console=self.console, default=default)
            error = validate(value) if validate else None
            if error is None:
                return value
            self.console.print(f"[red]{error}[/red]")

    def number(self, message: str, default: int = 1, minimum: int = 1) -> int:
        while True:
            value = self._ask(IntPrompt.ask, message, console=self.console, default=default)
            if value >= minimum:
                return value
            self.console.print(f"[red]Please enter a number of at least {minimum}.[/red]")

    def select(self, message: str, choices: Sequence[Choice], default: int = 0) -> Any:
        self.console.print(f"[bold]{message}[/bold]")
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"  {index}. {choice.title}{self._describe(choice)}")
        answer = self._ask(
            Prompt.ask,
            "Choose an option",
            console=self.console,
            choices=[str(n) for n in range(1, len(choices) + 1)],
            default=str(default + 1),
        )
        return choices[int(answer) - 1].value

    def multiselect(
        self,
        message: str,
        choices: Sequence[Choice],
        pinned: Sequence[Choice] = (),
    ) -> list[Any]:
        self.console.print(f"[bold]{message}[/bold]")
        for choice in pinned:
            self.console.print(
                f"  [green]◉[/green] {choice.title}"
                f"[dim]{self._describe(choice) or ' - always included'}[/dim]"
            )
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"  {index}. {choice.title}{self._describe(choice)}")
        while True:
            answer = self._ask(
                Prompt.ask,
                "Numbers to enable, comma separated (blank for none)",
                console=self.console,
                default="",
                show_default=False,
            )
            picked = self._parse_selection(answer, len(choices))
            if picked is not None:
                break
            self.console.print(
                f"[red]Enter numbers between 1 and {len(choices)}, separated by commas.[/red]"
            )
        # Presentation order, regardless of the order numbers were typed in.
        selected = [choice.value for index, choice in enumerate(choices) if index in picked]
        return [choice.value for choice in pinned] + selected

    def confirm(self, message: str, default: bool) -> bool:
        return self._ask(Confirm.ask, message, console=self.console, default=default)

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    def _ask(ask: Callable[..., Any], message: str, **kwargs: Any) -> Any:
        try:
            return ask(message, **kwargs)
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled() from exc

    @staticmethod
    def _describe(choice: Choice) -> str:
        return f" - {choice.description}" if choice.description else ""

    @staticmethod
    def _parse_selection(answer: str, count: int) -> set[int] | None:
        picked: set[int] = set()
        for part in answer.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit() or not 1 <= int(part) <= count:
                return None
            picked.add(int(part) - 1)
        return picked
