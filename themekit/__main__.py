"""Allow ``python -m themekit``."""

from themekit.pipeline import main

main()
