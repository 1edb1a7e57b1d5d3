"""Tokens Studio index documents.

``$metadata.json`` fixes the order in which token sets are resolved and
``$themes.json`` groups token sets into the themes and modes Tokens Studio
exposes in Figma.  Both are pure functions of the complete mode and theme
lists, so calling them again with the same lists produces the same
documents.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from themekit.config import Mode
from themekit.utils import normalize_token_set_name

_GLOBAL_SETS = [
    "primitives/globals",
    "primitives/size/default",
    "primitives/typography/default",
]

_SEMANTIC_SETS = [
    "semantic/color",
    "semantic/style",
]

_FIGMA_SETS = [
    "Figma/components",
]


def _mode_value(mode: Mode | str) -> str:
    return mode.value if isinstance(mode, Mode) else mode


def _color_sets(mode: Mode | str, themes: Sequence[str]) -> list[str]:
    mode_id = normalize_token_set_name(_mode_value(mode))
    return [f"primitives/colors/{mode_id}/global"] + [
        f"primitives/colors/{mode_id}/{normalize_token_set_name(theme)}" for theme in themes
    ]


def build_metadata(modes: Sequence[Mode | str], themes: Sequence[str]) -> dict[str, Any]:
    """Return the ``$metadata.json`` document for the given modes and themes."""
    order = list(_GLOBAL_SETS)
    for mode in modes:
        order.extend(_color_sets(mode, themes))
    order.extend(f"themes/{normalize_token_set_name(theme)}" for theme in themes)
    order.extend(_SEMANTIC_SETS)
    order.extend(_FIGMA_SETS)
    return {"tokenSetOrder": order}


def build_themes(modes: Sequence[Mode | str], themes: Sequence[str]) -> list[dict[str, Any]]:
    """Return the ``$themes.json`` document for the given modes and themes.

    Every mode becomes a theme object in the ``Mode`` group and every user
    theme one in the ``Theme`` group, in configured order.  The ``Semantic``
    and ``Size`` groups are fixed.
    """
    documents: list[dict[str, Any]] = []
    for mode in modes:
        name = _mode_value(mode)
        selected = {token_set: "enabled" for token_set in _color_sets(mode, themes)}
        documents.append(_theme_object("Mode", name, selected))

    for theme in themes:
        theme_id = normalize_token_set_name(theme)
        documents.append(_theme_object("Theme", theme, {f"themes/{theme_id}": "enabled"}))

    documents.append(
        _theme_object(
            "Semantic",
            "Semantic",
            {
                **{token_set: "source" for token_set in _GLOBAL_SETS},
                **{token_set: "enabled" for token_set in _SEMANTIC_SETS},
            },
        )
    )
    documents.append(
        _theme_object(
            "Size",
            "Default",
            {"primitives/size/default": "enabled", "primitives/typography/default": "enabled"},
        )
    )
    return documents


def _theme_object(group: str, name: str, selected: dict[str, str]) -> dict[str, Any]:
    return {
        "id": f"{normalize_token_set_name(group)}-{normalize_token_set_name(name)}",
        "name": name,
        "group": group,
        "selectedTokenSets": selected,
    }
