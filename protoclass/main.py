"""
Main entry point for the prototypal inheritance scanner.
"""

import sys

from protoclass.presentation.cli import main

if __name__ == "__main__":
    sys.exit(main())
