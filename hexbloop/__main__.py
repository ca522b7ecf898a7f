"""Allow running as python -m hexbloop"""

import sys

from .cli import main

sys.exit(main())
