"""Allow running the picker with ``python -m makes``."""

import sys

from makes.cli import main

if __name__ == "__main__":
    sys.exit(main())
