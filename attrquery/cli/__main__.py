"""
attrquery CLI entry point.

Usage:
    python -m attrquery.cli describe <target>
    python -m attrquery.cli find <class> <attribute>
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
