"""themekit scaffolder -- writes the design-token package to disk.

Quick usage::

    from themekit.scaffolder import TokenMatrixGenerator

    generator = TokenMatrixGenerator()
    result = await generator.generate(config)  # a confirmed ScaffoldConfig
"""

from themekit.scaffolder.directory import DirectoryStatus, apply_disposition, inspect_directory
from themekit.scaffolder.generator import (
    GenerationError,
    GenerationResult,
    TokenMatrixGenerator,
    configure_package_json,
)
from themekit.scaffolder.templates import TemplateRenderer
from themekit.scaffolder.token_sets import build_metadata, build_themes

__all__ = [
    "DirectoryStatus",
    "GenerationError",
    "GenerationResult",
    "TemplateRenderer",
    "TokenMatrixGenerator",
    "apply_disposition",
    "build_metadata",
    "build_themes",
    "configure_package_json",
    "inspect_directory",
]
