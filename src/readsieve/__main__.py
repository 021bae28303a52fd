"""Allow ``python -m readsieve``."""

import sys

from readsieve.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
