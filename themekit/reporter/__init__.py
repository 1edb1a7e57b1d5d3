"""themekit reporter -- follow-up documentation for generated packages."""

from themekit.reporter.next_steps import NextStepsGenerator

__all__ = ["NextStepsGenerator"]
