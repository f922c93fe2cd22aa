"""Allow ``python -m fastfind``."""

import sys

from .cli import main

sys.exit(main())
