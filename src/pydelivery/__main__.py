"""Allow ``python -m pydelivery``."""

import sys

from pydelivery.cli import main

sys.exit(main())
