"""CLI entry point for ``python -m jj_cli.cli``."""

import sys

from jj_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
