#!/usr/bin/env python3
"""
Banking Transaction Processor Entry Point

Processes the batches in a JSON file and prints a summary report for each.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from banking_processor.cli import main


if __name__ == "__main__":
    sys.exit(main())
