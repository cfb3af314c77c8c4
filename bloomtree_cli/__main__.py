"""
Module execution entry point.

Allows running with: python -m bloomtree_cli
"""

import sys
from bloomtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
