"""Theme name validation.

Theme names are checked one at a time as they are submitted.  A rejected
name raises ``ThemeNameError``; the prompt shows the message and asks the
same question again, keeping every previously accepted name.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from enum import Enum

from themekit.config import ThemeNamePolicy
from themekit.utils import normalize_token_set_name

_STRICT_DISALLOWED = re.compile(r"[^a-zæøå0-9 _-]", re.IGNORECASE)
_PATH_SEPARATORS = ("/", "\\")

_POLICY_MESSAGES: dict[ThemeNamePolicy, str] = {
    ThemeNamePolicy.STRICT: (
        "Theme name can only contain letters, numbers, dashes and underscores."
    ),
    ThemeNamePolicy.PERMISSIVE: "Theme name cannot contain path separators (/ or \\).",
}


class ThemeNameProblem(str, Enum):
    EMPTY = "empty"
    DUPLICATE = "duplicate"
    INVALID_CHARACTER = "invalid_character"


class ThemeNameError(ValueError):
    """Raised when a submitted theme name is rejected."""

    def __init__(self, problem: ThemeNameProblem, message: str) -> None:
        self.problem = problem
        super().__init__(message)


def has_disallowed_character(name: str, policy: ThemeNamePolicy) -> bool:
    if policy is ThemeNamePolicy.PERMISSIVE:
        return any(sep in name for sep in _PATH_SEPARATORS)
    return _STRICT_DISALLOWED.search(name) is not None


def validate_theme_name(
    existing: Sequence[str],
    candidate: str,
    policy: ThemeNamePolicy = ThemeNamePolicy.STRICT,
) -> str:
    """Validate *candidate* against the names accepted so far.

    Checks run in order: empty, duplicate (exact, case-sensitive match),
    the character policy, then that the name yields a non-empty identifier.

    Returns:
        The accepted name with surrounding whitespace removed.

    Raises:
        ThemeNameError: If the name is empty, already taken, or contains a
            character the policy forbids.
    """
    name = candidate.strip()
    if not name:
        raise ThemeNameError(ThemeNameProblem.EMPTY, "Theme name cannot be empty.")
    if name in existing:
        raise ThemeNameError(ThemeNameProblem.DUPLICATE, "Theme names must be unique.")
    if has_disallowed_character(name, policy):
        raise ThemeNameError(ThemeNameProblem.INVALID_CHARACTER, _POLICY_MESSAGES[policy])
    if not normalize_token_set_name(name):
        raise ThemeNameError(
            ThemeNameProblem.INVALID_CHARACTER,
            "Theme name must contain at least one letter or number.",
        )
    return name


def find_normalized_collisions(themes: Iterable[str]) -> dict[str, list[str]]:
    """Group distinct theme names that share a normalized identifier.

    Names such as ``"Ocean Blue"`` and ``"ocean-blue"`` pass validation but
    would write the same files.  Only identifiers claimed by more than one
    name are returned.
    """
    groups: dict[str, list[str]] = {}
    for theme in themes:
        groups.setdefault(normalize_token_set_name(theme), []).append(theme)
    return {ident: names for ident, names in groups.items() if len(names) > 1}
