"""Allow ``python -m foldit``."""

from foldit.cli import main

main()
