"""themekit -- scaffold a design-token package for a set of themes and color modes."""

__version__ = "0.1.0"
