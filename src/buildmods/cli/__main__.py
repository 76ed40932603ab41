"""
buildmods CLI entry point.

Usage:
    python -m buildmods.cli files <name>
    python -m buildmods.cli list
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
