"""
Banking Transaction Processor

Validates and applies ordered deposit/withdraw requests against a single
in-memory account, using Decimal for every monetary value.
"""

import logging

__version__ = "1.0.0"

# Silent unless the application configures logging (see logging_config.setup_logging)
logging.getLogger(__name__).addHandler(logging.NullHandler())
