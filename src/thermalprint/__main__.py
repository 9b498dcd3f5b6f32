"""Entry point for running thermalprint as a module."""

import sys

from thermalprint.cli.render import main

if __name__ == "__main__":
    sys.exit(main())
