import sys

import polydrum.cli


if __name__ == "__main__":
	sys.exit(polydrum.cli.main())
