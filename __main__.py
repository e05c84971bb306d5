"""
Entry point for running android_netcfg as a module.

Usage:
    python -m android_netcfg read -s
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
