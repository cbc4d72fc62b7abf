"""Allow running as: python -m banking_processor"""

import sys

from .cli import main

sys.exit(main())
