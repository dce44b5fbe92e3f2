"""Main script for computing ticker statistics."""

import sys

from src.ticker_stats.cli import main

if __name__ == "__main__":
    sys.exit(main())
