"""Allow ``python -m sierpinski``."""

import sys

from sierpinski.cli import main

sys.exit(main())
