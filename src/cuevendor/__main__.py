"""Allow ``python -m cuevendor``."""
import sys

from cuevendor.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
