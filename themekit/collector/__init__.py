"""themekit configuration collector.

Asks the user for everything a scaffolding run needs and returns a frozen
``ScaffoldConfig``.

Quick usage::

    from themekit.collector import ConfigurationCollector, RichPrompter
    from themekit.scaffolder import inspect_directory

    collector = ConfigurationCollector(RichPrompter(), "./my-theme")
    config = collector.collect(inspect_directory("./my-theme"))
"""

from themekit.collector.collector import (
    AbortReason,
    CollectionAborted,
    CollectorState,
    ConfigurationCollector,
)
from themekit.collector.prompts import Choice, PromptCancelled, Prompter, RichPrompter
from themekit.collector.validators import (
    ThemeNameError,
    ThemeNameProblem,
    find_normalized_collisions,
    validate_theme_name,
)

__all__ = [
    "AbortReason",
    "Choice",
    "CollectionAborted",
    "CollectorState",
    "ConfigurationCollector",
    "PromptCancelled",
    "Prompter",
    "RichPrompter",
    "ThemeNameError",
    "ThemeNameProblem",
    "find_normalized_collisions",
    "validate_theme_name",
]
