"""Shared utility functions for themekit.

Provides name normalisation for token sets and package names, JSON I/O,
and Rich-based console reporting.  The name helpers are pure functions and
are safe to call anywhere; the print helpers write to the shared
module-level console.
"""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path, PureWindowsPath
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def _is_word_char(char: str) -> bool:
    # Combining marks stay attached to their base letter so that lowercasing
    # (e.g. "İ" -> "i̇") never introduces a new word boundary.
    return char.isalnum() or unicodedata.category(char).startswith("M")


def _split_words(value: str) -> list[str]:
    words: list[str] = []
    current = ""
    for index, char in enumerate(value):
        if not _is_word_char(char):
            if current:
                words.append(current)
                current = ""
            continue
        if current and char.isupper():
            prev = current[-1]
            following = value[index + 1] if index + 1 < len(value) else ""
            if (
                prev.islower()
                or prev.isdigit()
                or (prev.isupper() and following.islower())
            ):
                words.append(current)
                current = ""
        current += char
    if current:
        words.append(current)
    return words


def normalize_token_set_name(name: str) -> str:
    """Convert a theme or mode name to a kebab-case token set identifier.

    The result is used both as a folder/file stem and as the identifier
    substituted into token templates.  Applying the function twice gives the
    same result as applying it once.

    Examples::

        normalize_token_set_name("Light")        -> "light"
        normalize_token_set_name("My Theme")     -> "my-theme"
        normalize_token_set_name("darkContrast") -> "dark-contrast"
        normalize_token_set_name("Blåbær_2")     -> "blåbær-2"
    """
    return "-".join(word.lower() for word in _split_words(name))


def to_valid_package_name(project_name: str) -> str:
    """Turn free-form text into an npm-compatible package name.

    * Trims and lowercases the input.
    * Replaces whitespace runs with a single hyphen.
    * Drops one leading ``.`` or ``_``.
    * Collapses every run of characters outside ``[a-z0-9-~]`` to a hyphen.

    Examples::

        to_valid_package_name("My Tokens")  -> "my-tokens"
        to_valid_package_name("_private")   -> "private"
        to_valid_package_name("a@b!c")      -> "a-b-c"
    """
    result = project_name.strip().lower()
    result = re.sub(r"\s+", "-", result)
    result = re.sub(r"^[._]", "", result)
    return re.sub(r"[^a-z0-9\-~]+", "-", result)


def is_contained_path(value: str) -> bool:
    """Return True if *value* is a relative path that stays below its base.

    Both separators are accepted.  Absolute paths, drive-qualified paths,
    paths with a ``..`` segment and paths with no segment at all (``""``,
    ``"."``) are rejected.
    """
    path = PureWindowsPath(value.strip())
    if path.anchor:
        return False
    parts = [part for part in path.parts if part != "."]
    return bool(parts) and ".." not in parts


def ordinal(n: int) -> str:
    """Return the short English ordinal used in prompt labels (1st, 2nd, ...)."""
    if n == 1:
        return "1st"
    if n == 2:
        return "2nd"
    if n == 3:
        return "3rd"
    return f"{n}th"


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file that holds a top-level object.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* the way every generated document is formatted."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_text_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
