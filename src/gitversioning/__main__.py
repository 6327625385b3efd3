"""Allow ``python -m gitversioning``."""

import sys

from gitversioning.cli import main

if __name__ == "__main__":
	sys.exit(main())
