"""Run the command line front end with ``python -m toon_codec``."""

import sys

from .cli import main

sys.exit(main())
