"""Allow ``python -m helpman``."""

import sys

from helpman.cli import main


if __name__ == "__main__":
    sys.exit(main())
